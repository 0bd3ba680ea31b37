"""Loading build-definition files."""

from __future__ import annotations

import logging
import os
import runpy
from pathlib import Path
from typing import TYPE_CHECKING

from .manifest import DefinitionError, read_manifest

if TYPE_CHECKING:
    from .context import BuildContext

logger = logging.getLogger(__name__)

PYTHON_SUFFIXES = {".py"}
YAML_SUFFIXES = {".yaml", ".yml"}


def load_definition(path: str | os.PathLike[str], context: BuildContext) -> None:
    """Process a definition file with its directory as the current root.

    Python files run with the context's declaration functions as globals;
    YAML manifests list their includes and declarations. Includes are
    processed before the file's own declarations.

    Args:
        path: Definition file, relative to the process working directory
        context: Context receiving the declarations
    """
    path_str = os.fspath(path)
    suffix = os.path.splitext(path_str)[1].lower()
    if suffix not in PYTHON_SUFFIXES | YAML_SUFFIXES:
        raise DefinitionError(f"Unsupported definition file type: {path_str}")
    if not os.path.isfile(path_str):
        raise FileNotFoundError(f"Definition file not found: {path_str}")

    logger.info("Loading definitions from %s", path_str)
    with context.roots.entered(path_str):
        if suffix in PYTHON_SUFFIXES:
            runpy.run_path(
                path_str, init_globals=context.namespace(), run_name="__doctasks__"
            )
            return

        manifest = read_manifest(Path(path_str))
        for included in manifest.include:
            context.include(included)
        for declaration in manifest.targets:
            context.declare(declaration)
