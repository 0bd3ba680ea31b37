"""The closed set of task kinds and the planner that dispatches over it."""

from __future__ import annotations

import logging

from ..core.models import Declaration, TargetPlan, TaskKind, TaskKindDescriptor
from ..settings import Settings
from .figures import (
    DIA_EXT,
    FIGURE_EXTS,
    GNUPLOT_EXT,
    GRAFFLE_EXT,
    plan_dia,
    plan_gnuplot,
    plan_graffle,
)
from .latex import DOCUMENT_EXTS, TEX_EXT, plan_latex
from .listings import plan_vega

logger = logging.getLogger(__name__)


KINDS: dict[TaskKind, TaskKindDescriptor] = {
    TaskKind.GRAFFLE: TaskKindDescriptor(
        TaskKind.GRAFFLE, GRAFFLE_EXT, FIGURE_EXTS, ("figures", "graffle"), plan_graffle
    ),
    TaskKind.DIA: TaskKindDescriptor(
        TaskKind.DIA, DIA_EXT, FIGURE_EXTS, ("figures", "dia"), plan_dia
    ),
    TaskKind.GNUPLOT: TaskKindDescriptor(
        TaskKind.GNUPLOT, GNUPLOT_EXT, FIGURE_EXTS, ("figures", "gnuplot"), plan_gnuplot
    ),
    # Source and destination extensions come from the declared languages.
    TaskKind.VEGA: TaskKindDescriptor(TaskKind.VEGA, None, (), ("listings",), plan_vega),
    # Group names double as the extensions of the files they collect.
    TaskKind.LATEX: TaskKindDescriptor(
        TaskKind.LATEX, TEX_EXT, DOCUMENT_EXTS, DOCUMENT_EXTS, plan_latex
    ),
}


def plan_target(declaration: Declaration, root: str, settings: Settings) -> TargetPlan:
    """Expand a declaration into its rules, groups and clean paths.

    Args:
        declaration: One of the kind-specific declaration models
        root: Root directory of the definition file declaring it
        settings: Tool names and build settings

    Returns:
        The plan to register with the build host
    """
    descriptor = KINDS[TaskKind(declaration.kind)]
    plan = descriptor.planner(declaration, root, settings, descriptor)
    logger.debug(
        "Planned %s target %s: %d rule(s)", descriptor.kind.value, plan.name, len(plan.rules)
    )
    return plan
