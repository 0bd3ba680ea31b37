"""Listing conversion with vega."""

from __future__ import annotations

from ..core.models import Command, FileRule, TargetPlan, TaskKindDescriptor, VegaTarget
from ..core.paths import ext, rooted
from ..settings import Settings

VEGA_EXTS = {
    "relaxng": "rnc",
    "carp": "carp",
    "latex": "tex",
}


class TaskDefinitionError(ValueError):
    """Raised when a declaration names something its task kind cannot handle."""


def vega_ext(language: str) -> str:
    try:
        return VEGA_EXTS[language]
    except KeyError:
        known = ", ".join(sorted(VEGA_EXTS))
        raise TaskDefinitionError(
            f"Unknown vega language {language!r} (expected one of: {known})"
        ) from None


def plan_vega(
    declaration: VegaTarget, root: str, settings: Settings, kind: TaskKindDescriptor
) -> TargetPlan:
    source_ext = vega_ext(declaration.language)
    dest_ext = vega_ext(declaration.output)

    dest_name = ext(declaration.name, dest_ext)
    if declaration.source:
        source = rooted(root, declaration.source)
    else:
        source = rooted(root, ext(declaration.name, source_ext))
    dest = rooted(root, dest_name)

    convert = Command(
        argv=(
            settings.vega,
            "-l",
            declaration.language,
            "-o",
            declaration.output,
            source,
            dest,
        )
    )
    return TargetPlan(
        name=dest_name,
        kind=kind.kind,
        rules=(FileRule(dest, (source,), (convert,)),),
        groups={group: (dest,) for group in kind.groups},
        clean=(dest,),
    )
