"""Path and extension helpers, and the stack of definition-file roots."""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from typing import Iterator

logger = logging.getLogger(__name__)

DEFAULT_ROOT = "./"


class RootStackError(RuntimeError):
    """Raised when pushes and pops on a RootStack do not pair up."""


def ext(path: str, new_ext: str) -> str:
    """Replace the extension of the last component of ``path``.

    A missing leading dot on ``new_ext`` is added; an empty ``new_ext``
    strips the extension.

    Args:
        path: File path as given by the definition author
        new_ext: Extension to apply, with or without the dot

    Returns:
        Path with the extension replaced (or appended)
    """
    if path in (".", ".."):
        return path
    if new_ext and not new_ext.startswith("."):
        new_ext = "." + new_ext
    base, _ = os.path.splitext(path)
    return base + new_ext


def strip_ext(path: str) -> str:
    """Drop the extension, keeping the shared basename of sibling outputs."""
    return ext(path, "")


def rooted(root: str, path: str) -> str:
    """Prefix a relative path with the current definition root."""
    if os.path.isabs(path):
        return path
    return root + path


def root_of(file_path: str | os.PathLike[str]) -> str:
    """Directory of a definition file, always ending with a slash."""
    return (os.path.dirname(os.fspath(file_path)) or ".") + "/"


class RootStack:
    """Directories of the definition files currently being processed.

    The innermost file is on top; relative names declared in that file are
    resolved against it.
    """

    def __init__(self) -> None:
        self._entries: list[str] = []

    def __len__(self) -> int:
        return len(self._entries)

    def push(self, file_path: str | os.PathLike[str]) -> str:
        root = root_of(file_path)
        self._entries.append(root)
        logger.debug("Entered definition root %s (depth %d)", root, len(self))
        return root

    def pop(self) -> str:
        if not self._entries:
            raise RootStackError("pop() on an empty root stack")
        root = self._entries.pop()
        logger.debug("Left definition root %s (depth %d)", root, len(self))
        return root

    def current(self) -> str:
        if not self._entries:
            return DEFAULT_ROOT
        return self._entries[-1]

    @contextmanager
    def entered(self, file_path: str | os.PathLike[str]) -> Iterator[str]:
        """Push the root of ``file_path`` for the duration of the block.

        The stack is restored to its entry depth even when the block raises.
        A block that leaves extra entries behind, or pops entries it did not
        push, raises RootStackError.
        """
        depth = len(self._entries)
        root = self.push(file_path)
        try:
            yield root
        except BaseException:
            del self._entries[depth:]
            raise
        balanced = len(self._entries) == depth + 1 and self._entries[-1] == root
        del self._entries[depth:]
        if not balanced:
            raise RootStackError(
                f"Unbalanced root stack while processing {os.fspath(file_path)}"
            )
