from __future__ import annotations

import logging
import os
import shutil
import subprocess
from typing import Iterable, Literal, Mapping

from ..core.models import Command

logger = logging.getLogger(__name__)


class MissingToolError(RuntimeError):
    """Raised when an external tool cannot be found."""


def run_logged(
    argv: Iterable[str],
    *,
    cwd: str | None = None,
    env: Mapping[str, str] | None = None,
    echo: Literal["always", "on_error", "never"] = "on_error",
) -> subprocess.CompletedProcess[str]:
    """
    Run a tool with its output captured and passed to the log.
    Stdout goes to DEBUG; stderr goes to ERROR when the tool fails (or to
    WARNING with echo="always"). Raises CalledProcessError on a non-zero exit.
    """
    result = subprocess.run(
        list(argv),
        capture_output=True,
        text=True,
        cwd=cwd,
        env=env,
    )
    for line in result.stdout.splitlines():
        logger.debug("  | %s", line)
    failed = result.returncode != 0
    if echo == "always" or (echo == "on_error" and failed):
        level = logging.ERROR if failed else logging.WARNING
        for line in result.stderr.splitlines():
            logger.log(level, "  ! %s", line)
    if failed:
        raise subprocess.CalledProcessError(
            result.returncode, result.args, output=result.stdout, stderr=result.stderr
        )
    return result


def resolve_tool(name: str, cwd: str | None = None) -> str | None:
    """Locate ``name`` the way it will be launched from ``cwd``.

    Bare names are looked up on PATH. Relative paths are taken from ``cwd``.
    """
    if os.path.dirname(name) and not os.path.isabs(name) and cwd:
        name = os.path.join(cwd, name)
    return shutil.which(name)


def ensure(commands: Iterable[str], cwd: str | None = None) -> None:
    for name in commands:
        if resolve_tool(name, cwd) is None:
            raise MissingToolError(f"missing dependency: {name}")


def execute(command: Command) -> subprocess.CompletedProcess[str]:
    """Run one external tool invocation, raising on a non-zero exit."""
    ensure([command.argv[0]], command.cwd)

    env = None
    if command.env is not None:
        overlay = dict(command.env())
        if overlay:
            env = {**os.environ, **overlay}
            for key, value in overlay.items():
                logger.debug("  %s=%s", key, value)

    logger.info("Running %s", command.describe())
    return run_logged(command.argv, cwd=command.cwd, env=env)


def remove_file_if_exists(path: str) -> bool:
    try:
        os.remove(path)
    except FileNotFoundError:
        return False
    logger.debug("Removed %s", path)
    return True
