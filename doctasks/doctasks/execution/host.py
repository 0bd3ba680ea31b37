"""The build-host contract and the in-memory registry implementing it."""

from __future__ import annotations

import logging
from typing import Iterable, Protocol

from ..core.models import FileRule, TargetPlan

logger = logging.getLogger(__name__)


class DuplicateTargetError(ValueError):
    """Raised when two rules claim to produce the same file."""


class BuildHost(Protocol):
    def register_file_rule(self, rule: FileRule) -> None: ...

    def register_group(self, group: str, members: Iterable[str]) -> None: ...

    def register_clean(self, owner: str, paths: Iterable[str]) -> None: ...


class RuleRegistry:
    """Collects rules, group members and clean paths in declaration order."""

    def __init__(self) -> None:
        self.rules: dict[str, FileRule] = {}
        self.groups: dict[str, list[str]] = {}
        self.cleanups: dict[str, list[str]] = {}
        self.names: list[str] = []

    def register_file_rule(self, rule: FileRule) -> None:
        if rule.target in self.rules:
            raise DuplicateTargetError(f"Two rules produce {rule.target}")
        self.rules[rule.target] = rule
        logger.debug("Rule %s <- %s", rule.target, ", ".join(rule.prerequisites))

    def register_group(self, group: str, members: Iterable[str]) -> None:
        existing = self.groups.setdefault(group, [])
        for member in members:
            if member not in existing:
                existing.append(member)

    def register_clean(self, owner: str, paths: Iterable[str]) -> None:
        self.cleanups.setdefault(owner, []).extend(paths)

    def add(self, plan: TargetPlan) -> str:
        """Register every rule, group membership and clean path of ``plan``."""
        for rule in plan.rules:
            self.register_file_rule(rule)
        for group, members in plan.groups.items():
            self.register_group(group, members)
        # Cleaning any output of a declaration cleans all of its files.
        for rule in plan.rules:
            self.register_clean(rule.target, plan.clean)
        self.names.append(plan.name)
        return plan.name

    def group_cleanup(self, group: str) -> list[str]:
        """Clean paths of every declaration with an output in ``group``."""
        paths: list[str] = []
        for member in self.groups.get(group, []):
            for path in self.cleanups.get(member, []):
                if path not in paths:
                    paths.append(path)
        return paths

    def group_closure(self, group: str) -> list[str]:
        """Every file a group needs, following prerequisites produced by rules."""
        ordered: list[str] = []
        pending = list(reversed(self.groups.get(group, [])))
        while pending:
            path = pending.pop()
            if path in ordered:
                continue
            ordered.append(path)
            rule = self.rules.get(path)
            if rule is not None:
                pending.extend(reversed(rule.prerequisites))
        return ordered
