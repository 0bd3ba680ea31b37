from __future__ import annotations

import logging
import os
from typing import Any, Callable, Sequence

from ..core.models import (
    Declaration,
    DiaTarget,
    GnuplotTarget,
    GraffleTarget,
    LatexTarget,
    VegaTarget,
)
from ..core.paths import RootStack, rooted
from ..execution.host import RuleRegistry
from ..settings import Settings, get_settings
from ..tasks.kinds import plan_target
from .loader import load_definition

logger = logging.getLogger(__name__)


class BuildContext:
    """Where definition files declare their targets.

    Owns the stack of definition roots, so relative names resolve against
    the file currently being processed.
    """

    def __init__(
        self,
        registry: RuleRegistry | None = None,
        settings: Settings | None = None,
        roots: RootStack | None = None,
    ) -> None:
        self.registry = registry if registry is not None else RuleRegistry()
        self.settings = settings if settings is not None else get_settings()
        self.roots = roots if roots is not None else RootStack()

    @property
    def root(self) -> str:
        return self.roots.current()

    def declare(self, declaration: Declaration) -> str:
        """Register a declaration and return its name for use in later ones."""
        plan = plan_target(declaration, self.root, self.settings)
        logger.debug("Declared %s", plan.name)
        return self.registry.add(plan)

    def graffle(self, name: str, **options: Any) -> str:
        return self.declare(GraffleTarget(name=name, **options))

    def dia(self, name: str, **options: Any) -> str:
        return self.declare(DiaTarget(name=name, **options))

    def gnuplot(
        self, name: str, fonts: str | Sequence[str] = (), **options: Any
    ) -> str:
        return self.declare(GnuplotTarget(name=name, fonts=fonts, **options))

    def vega(self, name: str, language: str, output: str, **options: Any) -> str:
        return self.declare(
            VegaTarget(name=name, language=language, output=output, **options)
        )

    def latex(self, name: str, **options: Any) -> str:
        return self.declare(LatexTarget(name=name, **options))

    def include(self, path: str | os.PathLike[str]) -> None:
        """Process another definition file relative to the current one."""
        load_definition(rooted(self.root, os.fspath(path)), self)

    def namespace(self) -> dict[str, Callable[..., Any] | BuildContext]:
        """Globals available to Python definition files."""
        return {
            "graffle": self.graffle,
            "dia": self.dia,
            "gnuplot": self.gnuplot,
            "vega": self.vega,
            "latex": self.latex,
            "include": self.include,
            "context": self,
        }
