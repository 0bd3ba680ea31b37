"""Main CLI application."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from ..core.paths import RootStackError
from ..definitions import BuildContext, load_definition
from ..execution.doit_host import run_doit
from ..settings import get_settings

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="doctasks",
    help="Build figures, listings and LaTeX documents from declarative definitions.",
    no_args_is_help=True,
)

DefinitionFile = Annotated[
    Optional[Path],
    typer.Option(
        "--file",
        "-f",
        help="Definition file (.py, .yaml or .yml). Default: $DOCTASKS_DEFINITION_FILE or Doctasks.py.",
        metavar="FILE",
    ),
]
Targets = Annotated[
    Optional[list[str]],
    typer.Argument(help="Files or groups (figures, listings, pdf, ...).", show_default=False),
]
Verbose = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-v",
        help="Enable verbose logging.",
    ),
]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )


def _load(definition_file: Path | None) -> BuildContext:
    settings = get_settings()
    path = definition_file or settings.definition_file
    context = BuildContext(settings=settings)
    try:
        load_definition(path, context)
    except (ValueError, FileNotFoundError, RootStackError) as e:
        raise typer.BadParameter(str(e), param_hint="--file") from e
    logger.debug(
        f"Loaded {len(context.registry.names)} target(s), "
        f"{len(context.registry.rules)} rule(s)"
    )
    return context


def _doit(context: BuildContext, argv: list[str]) -> None:
    code = run_doit(context.registry, context.settings, argv)
    if code != 0:
        raise typer.Exit(code=code)


@app.command()
def build(
    targets: Targets = None,
    definition_file: DefinitionFile = None,
    verbose: Verbose = False,
) -> None:
    """Bring TARGETS up to date (every rule when none are given)."""
    _configure_logging(verbose)
    context = _load(definition_file)
    _doit(context, ["run", *(targets or [])])


@app.command("list")
def list_tasks(
    definition_file: DefinitionFile = None,
    verbose: Verbose = False,
) -> None:
    """List the rules and groups known to the build."""
    _configure_logging(verbose)
    context = _load(definition_file)
    _doit(context, ["list"])


@app.command()
def clean(
    targets: Targets = None,
    definition_file: DefinitionFile = None,
    verbose: Verbose = False,
) -> None:
    """Remove generated files of TARGETS (all targets when none are given)."""
    _configure_logging(verbose)
    context = _load(definition_file)
    _doit(context, ["clean", *(targets or ["--clean-all"])])


@app.command()
def plan(
    group: Annotated[
        Optional[str],
        typer.Option("--group", "-g", help="Only show what GROUP needs.", metavar="GROUP"),
    ] = None,
    definition_file: DefinitionFile = None,
    verbose: Verbose = False,
) -> None:
    """Print rules and groups without running anything."""
    _configure_logging(verbose)
    registry = _load(definition_file).registry

    if group is not None:
        if group not in registry.groups:
            raise typer.BadParameter(f"Unknown group: {group}", param_hint="--group")
        selected = [t for t in registry.group_closure(group) if t in registry.rules]
    else:
        selected = list(registry.rules)

    for target in selected:
        rule = registry.rules[target]
        typer.echo(target)
        for prerequisite in rule.prerequisites:
            typer.echo(f"  <- {prerequisite}")
        for command in rule.commands:
            typer.echo(f"  $ {command.describe()}")

    if group is None:
        for name, members in registry.groups.items():
            typer.echo(f"[{name}] {' '.join(members)}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
