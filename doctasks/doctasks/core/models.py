"""Domain models for task declarations and the rules they expand into."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Literal, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing_extensions import Annotated


class TaskKind(str, Enum):
    GRAFFLE = "graffle"
    DIA = "dia"
    GNUPLOT = "gnuplot"
    VEGA = "vega"
    LATEX = "latex"


class TargetDeclaration(BaseModel):
    """A named document artifact declared once in a definition file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., min_length=1, description="Logical name")
    source: str | None = Field(
        default=None, description="Source file overriding the default extension"
    )


class GraffleTarget(TargetDeclaration):
    kind: Literal["graffle"] = "graffle"


class DiaTarget(TargetDeclaration):
    kind: Literal["dia"] = "dia"


class GnuplotTarget(TargetDeclaration):
    kind: Literal["gnuplot"] = "gnuplot"
    fonts: list[str] = Field(default_factory=list, description="Fonts passed to the plot script")
    includes: list[str] = Field(
        default_factory=list, description="Extra files the plot depends on"
    )

    @field_validator("fonts", mode="before")
    @classmethod
    def _wrap_single_font(cls, value: object) -> object:
        if isinstance(value, str):
            return [value]
        return value


class VegaTarget(TargetDeclaration):
    kind: Literal["vega"] = "vega"
    language: str = Field(..., description="Language of the source listing")
    output: str = Field(..., description="Language to convert the listing into")


class LatexTarget(TargetDeclaration):
    kind: Literal["latex"] = "latex"
    need_aux: bool = Field(default=True, description="Compile twice to resolve the .aux file")
    figures: list[str] = Field(
        default_factory=list, description="Declared figure names (already rooted)"
    )
    references: list[str] = Field(default_factory=list, description="BibTeX databases")
    includes: list[str] = Field(default_factory=list, description="Included .tex files")
    include_dirs: list[str] = Field(
        default_factory=list, description="Extra TEXINPUTS directories"
    )


Declaration = Annotated[
    Union[GraffleTarget, DiaTarget, GnuplotTarget, VegaTarget, LatexTarget],
    Field(discriminator="kind"),
]


EnvProvider = Callable[[], Mapping[str, str]]


@dataclass(frozen=True)
class Command:
    """One external tool invocation."""

    argv: tuple[str, ...]
    cwd: str | None = None
    env: EnvProvider | None = field(default=None, compare=False)

    def describe(self) -> str:
        prefix = f"(cd {self.cwd}) " if self.cwd else ""
        return prefix + " ".join(self.argv)


@dataclass(frozen=True)
class FileRule:
    """Regenerate ``target`` from ``prerequisites`` by running ``commands``."""

    target: str
    prerequisites: tuple[str, ...]
    commands: tuple[Command, ...]


@dataclass(frozen=True)
class TargetPlan:
    """Everything a single declaration registers with the build host."""

    name: str
    kind: TaskKind
    rules: tuple[FileRule, ...]
    groups: Mapping[str, tuple[str, ...]]
    clean: tuple[str, ...] = ()

    def rule_for(self, target: str) -> FileRule:
        for rule in self.rules:
            if rule.target == target:
                return rule
        raise KeyError(target)


@dataclass(frozen=True)
class TaskKindDescriptor:
    """Files, groups and planner of one task kind.

    Planners receive their descriptor, so the extensions and group names
    listed here are the ones that get registered.
    """

    kind: TaskKind
    source_ext: str | None
    derived_exts: tuple[str, ...]
    groups: tuple[str, ...]
    planner: Callable[..., TargetPlan]
