"""Figure kinds: OmniGraffle drawings, Dia diagrams and gnuplot scripts."""

from __future__ import annotations

import os

from ..core.models import (
    Command,
    DiaTarget,
    FileRule,
    GnuplotTarget,
    GraffleTarget,
    TargetDeclaration,
    TargetPlan,
    TaskKindDescriptor,
)
from ..core.paths import ext, rooted
from ..settings import Settings

GRAFFLE_EXT = "graffle"
DIA_EXT = "dia"
GNUPLOT_EXT = "gp"
FIGURE_EXTS = ("eps", "pdf")


def _figure_paths(
    declaration: TargetDeclaration, root: str, kind: TaskKindDescriptor
) -> tuple[str, str, str, str]:
    """Return (name, source, eps, pdf) for a figure declaration."""
    name = rooted(root, ext(declaration.name, kind.source_ext))
    source = rooted(root, declaration.source) if declaration.source else name
    eps, pdf = (ext(name, e) for e in kind.derived_exts)
    return name, source, eps, pdf


def _figure_plan(
    kind: TaskKindDescriptor, name: str, rules: tuple[FileRule, ...], clean: tuple[str, ...]
) -> TargetPlan:
    outputs = tuple(rule.target for rule in rules)
    return TargetPlan(
        name=name,
        kind=kind.kind,
        rules=rules,
        groups={group: outputs for group in kind.groups},
        clean=clean,
    )


def _epstopdf(settings: Settings, eps: str, pdf: str) -> Command:
    return Command(argv=(settings.epstopdf, eps, f"-o={pdf}"))


def plan_graffle(
    declaration: GraffleTarget, root: str, settings: Settings, kind: TaskKindDescriptor
) -> TargetPlan:
    name, source, eps, pdf = _figure_paths(declaration, root, kind)
    rules = (
        FileRule(eps, (source,), (Command(argv=(settings.graffle, "eps", source, eps)),)),
        FileRule(pdf, (source,), (Command(argv=(settings.graffle, "pdf", source, pdf)),)),
    )
    # Exports are kept on clean: regenerating them needs OmniGraffle.
    return _figure_plan(kind, name, rules, clean=())


def plan_dia(
    declaration: DiaTarget, root: str, settings: Settings, kind: TaskKindDescriptor
) -> TargetPlan:
    name, source, eps, pdf = _figure_paths(declaration, root, kind)
    rules = (
        FileRule(
            eps,
            (source,),
            (Command(argv=(settings.dia, "-l", "-t", "eps-builtin", "-e", eps, source)),),
        ),
        FileRule(pdf, (eps,), (_epstopdf(settings, eps, pdf),)),
    )
    return _figure_plan(kind, name, rules, clean=(eps, pdf))


def plan_gnuplot(
    declaration: GnuplotTarget, root: str, settings: Settings, kind: TaskKindDescriptor
) -> TargetPlan:
    name, source, eps, pdf = _figure_paths(declaration, root, kind)
    includes = tuple(rooted(root, f) for f in declaration.includes)
    plot = Command(
        argv=(settings.gnuplot, os.path.basename(source), *declaration.fonts),
        cwd=os.path.dirname(source) or ".",
    )
    rules = (
        FileRule(eps, (source, *includes), (plot,)),
        FileRule(pdf, (eps,), (_epstopdf(settings, eps, pdf),)),
    )
    return _figure_plan(kind, name, rules, clean=(eps, pdf))
