"""Hand registered rules to doit, which decides what is stale and runs it."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Sequence

from doit.cmd_base import TaskLoader2
from doit.doit_cmd import DoitMain
from doit.task import Task

from ..core.models import Command, FileRule
from ..settings import Settings
from .host import RuleRegistry
from .process import execute, remove_file_if_exists

logger = logging.getLogger(__name__)


def run_commands(commands: Sequence[Command]) -> None:
    for command in commands:
        execute(command)


def remove_files(paths: Iterable[str]) -> None:
    removed = [path for path in paths if remove_file_if_exists(path)]
    if removed:
        logger.info("Removed %d file(s)", len(removed))


def rule_task(rule: FileRule, clean: Sequence[str] = ()) -> Task:
    return Task(
        rule.target,
        [(run_commands, [rule.commands], {})],
        file_dep=list(rule.prerequisites),
        targets=[rule.target],
        clean=[(remove_files, [list(clean)], {})] if clean else [],
        doc="; ".join(command.describe() for command in rule.commands),
    )


def group_task(group: str, members: Sequence[str], clean: Sequence[str] = ()) -> Task:
    # No actions: doit builds the members through the rules targeting them.
    return Task(
        group,
        None,
        file_dep=list(members),
        clean=[(remove_files, [list(clean)], {})] if clean else [],
        doc=f"Build all {group} ({len(members)} file(s))",
    )


def build_tasks(registry: RuleRegistry) -> list[Task]:
    tasks = [
        rule_task(rule, registry.cleanups.get(target, ()))
        for target, rule in registry.rules.items()
    ]
    tasks.extend(
        group_task(group, members, registry.group_cleanup(group))
        for group, members in registry.groups.items()
    )
    return tasks


class RegistryTaskLoader(TaskLoader2):
    """doit task loader serving the rules collected in a RuleRegistry."""

    def __init__(self, registry: RuleRegistry, settings: Settings) -> None:
        super().__init__()
        self.registry = registry
        self.settings = settings

    def setup(self, opt_values: dict[str, Any]) -> None:
        pass

    def load_doit_config(self) -> dict[str, Any]:
        return {
            "dep_file": self.settings.dep_file,
            "backend": "json",
            "check_file_uptodate": self.settings.check_file_uptodate,
            "verbosity": 2,
        }

    def load_tasks(self, cmd: Any, pos_args: list[str]) -> list[Task]:
        tasks = build_tasks(self.registry)
        logger.debug("Loaded %d doit task(s)", len(tasks))
        return tasks


def run_doit(registry: RuleRegistry, settings: Settings, argv: Sequence[str]) -> int:
    """Run a doit command (``run``, ``list``, ``clean``...) over the registry.

    Returns the command's exit code. doit's ``clean`` returns None on
    success, which is reported as 0.
    """
    logger.debug("doit %s", " ".join(argv))
    return DoitMain(RegistryTaskLoader(registry, settings)).run(list(argv)) or 0
