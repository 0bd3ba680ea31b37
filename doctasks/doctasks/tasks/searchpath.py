"""Search-path environment variables for the TeX toolchain."""

from __future__ import annotations

import logging
import os
from typing import Iterable, Mapping, Sequence

logger = logging.getLogger(__name__)


def collect_prereq_dirs(prerequisites: Iterable[str], exts: Iterable[str]) -> list[str]:
    """Collect the directories of prerequisites with a matching extension.

    Args:
        prerequisites: Prerequisite paths of a rule
        exts: Extensions of interest, with the leading dot

    Returns:
        Absolute directories in first-seen order, without duplicates
    """
    wanted = set(exts)
    dirs: list[str] = []
    seen: set[str] = set()
    for path in prerequisites:
        if os.path.splitext(path)[1] not in wanted:
            continue
        directory = os.path.abspath(os.path.dirname(path))
        if directory not in seen:
            seen.add(directory)
            dirs.append(directory)
    return dirs


def merge_dirs(dirs: Sequence[str], extra: Iterable[str]) -> list[str]:
    merged = list(dirs)
    for directory in extra:
        if directory not in merged:
            merged.append(directory)
    return merged


def make_env(var: str, dirs: Sequence[str]) -> dict[str, str]:
    """Build ``{var: "d1:d2:...:$var"}``, or nothing when there are no dirs.

    The trailing separator keeps the tool's default search path when the
    variable was unset.
    """
    if not dirs:
        return {}
    return {var: ":".join(dirs) + ":" + os.environ.get(var, "")}


class SearchPaths:
    """Lazily assembled search-path overlays for one typeset document.

    Each slot is computed on first use and reused by the later passes of the
    same document.
    """

    def __init__(self, include_dirs: Sequence[str] = ()) -> None:
        self.include_dirs = list(include_dirs)
        self._cache: dict[str, dict[str, str]] = {}

    def export(
        self,
        slot: str,
        var: str,
        prerequisites: Sequence[str],
        exts: Sequence[str],
        *,
        with_include_dirs: bool = True,
    ) -> Mapping[str, str]:
        cached = self._cache.get(slot)
        if cached is not None:
            return cached

        dirs = collect_prereq_dirs(prerequisites, exts)
        if with_include_dirs:
            dirs = merge_dirs(dirs, self.include_dirs)
        env = make_env(var, dirs)
        logger.debug("Search path %s for %s: %s", var, slot, env.get(var, "<unset>"))
        self._cache[slot] = env
        return env
