"""Typeset documents: latex/pdflatex with optional BibTeX passes."""

from __future__ import annotations

import os
from functools import partial

from ..core.models import (
    Command,
    EnvProvider,
    FileRule,
    LatexTarget,
    TargetPlan,
    TaskKindDescriptor,
)
from ..core.paths import ext, rooted, strip_ext
from ..settings import Settings
from .searchpath import SearchPaths

TEX_EXT = "tex"
DOCUMENT_EXTS = ("dvi", "ps", "pdf")
AUX_EXTS = ("aux", "log", "toc")
BIBTEX_EXTS = ("bbl", "blg")


def _compile_passes(
    run: Command, bibtex: Command, *, with_references: bool, need_aux: bool
) -> tuple[Command, ...]:
    """Order the compiler and BibTeX runs for one output format.

    With references the compiler runs once so BibTeX can read the citations
    from the .aux file, then the compiler runs again (twice when the
    document needs its own .aux resolved).
    """
    passes: list[Command] = []
    if with_references:
        passes += [run, bibtex]
    passes.append(run)
    if need_aux:
        passes.append(run)
    return tuple(passes)


def plan_latex(
    declaration: LatexTarget, root: str, settings: Settings, kind: TaskKindDescriptor
) -> TargetPlan:
    name = rooted(root, ext(declaration.name, kind.source_ext))
    tex = rooted(root, declaration.source) if declaration.source else name
    blank = strip_ext(tex)
    dvi, ps, pdf = (ext(tex, e) for e in kind.derived_exts)

    includes = [rooted(root, f) for f in declaration.includes]
    references = [rooted(root, f) for f in declaration.references]
    include_dirs = [os.path.abspath(rooted(root, f)) for f in declaration.include_dirs]
    eps_figures = [ext(f, ".eps") for f in declaration.figures]
    pdf_figures = [ext(f, ".pdf") for f in declaration.figures]

    dvi_prereqs = (tex, *references, *eps_figures, *includes)
    pdf_prereqs = (tex, *references, *pdf_figures, *includes)

    search = SearchPaths(include_dirs)
    latex_env: EnvProvider = partial(
        search.export, "latex", "TEXINPUTS", dvi_prereqs, (".eps",)
    )
    pdflatex_env: EnvProvider = partial(
        search.export, "pdflatex", "TEXINPUTS", pdf_prereqs, (".pdf",)
    )
    bibtex_env: EnvProvider = partial(
        search.export, "bibtex", "BIBINPUTS", references, (".bib",), with_include_dirs=False
    )

    workdir = os.path.dirname(tex) or "."
    basename = os.path.basename(blank)
    bibtex = Command(argv=(settings.bibtex, basename), cwd=workdir, env=bibtex_env)
    with_references = bool(references)

    dvi_rule = FileRule(
        dvi,
        dvi_prereqs,
        _compile_passes(
            Command(argv=(settings.latex, basename), cwd=workdir, env=latex_env),
            bibtex,
            with_references=with_references,
            need_aux=declaration.need_aux,
        ),
    )
    ps_rule = FileRule(
        ps, (dvi,), (Command(argv=(settings.dvips, dvi, "-o", ps), env=latex_env),)
    )
    pdf_rule = FileRule(
        pdf,
        pdf_prereqs,
        _compile_passes(
            Command(argv=(settings.pdflatex, basename), cwd=workdir, env=pdflatex_env),
            bibtex,
            with_references=with_references,
            need_aux=declaration.need_aux,
        ),
    )

    clean = [dvi, ps, pdf, *(ext(tex, e) for e in AUX_EXTS)]
    if with_references:
        clean += [ext(tex, e) for e in BIBTEX_EXTS]

    # Each output format is a group of its own.
    return TargetPlan(
        name=name,
        kind=kind.kind,
        rules=(dvi_rule, ps_rule, pdf_rule),
        groups={group: (ext(tex, group),) for group in kind.groups},
        clean=tuple(clean),
    )
