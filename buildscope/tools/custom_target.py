# SPDX-License-Identifier: MIT
"""Custom (utility) targets.

A custom target is a named command with no outputs, recorded as target
properties in the scope store (TYPE=UTILITY, COMMAND, DEPENDS, COMMENT).
The clang-format and include-what-you-use helpers register their
commands this way; run_custom_target executes one.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from buildscope.core.errors import ConfigurationError, ToolError
from buildscope.core.scope import TargetScope

if TYPE_CHECKING:
    from collections.abc import Sequence

    from buildscope.configure.config import Configure
    from buildscope.util.process import ProcessResult, ProcessRunner

logger = logging.getLogger(__name__)


def collect_sources(
    config: Configure,
    sources: Sequence[str],
    targets: Sequence[str],
    operation: str,
) -> list[str]:
    """Gather the SOURCES of each target, then the explicit sources.

    Raises:
        ConfigurationError: If nothing was gathered.
    """
    result: list[str] = []
    for target in targets:
        result.extend(config.store.get(TargetScope(target), "SOURCES") or [])
    result.extend(sources)
    if not result:
        raise ConfigurationError("no sources specified", operation)
    return result


def add_custom_target(
    config: Configure,
    name: str,
    command: Sequence[str],
    *,
    depends: Sequence[str] = (),
    comment: str | None = None,
    operation: str = "add_custom_target",
) -> TargetScope:
    """Register a utility target that runs a command.

    Args:
        config: Configure context.
        name: Target name; must not already exist.
        command: Program followed by its arguments.
        depends: Targets this one depends on.
        comment: Message logged when the target runs.
        operation: Name reported in error messages.

    Returns:
        The new target's scope.

    Raises:
        ConfigurationError: If the name is taken or the command is empty.
    """
    if not name:
        raise ConfigurationError("target name not specified", operation)
    if not command:
        raise ConfigurationError("command not specified", operation)
    target = TargetScope(name)
    if config.store.get(target, "TYPE") is not None:
        raise ConfigurationError(f"target '{name}' already exists", operation)

    config.store.set(target, "TYPE", "UTILITY")
    config.store.set(target, "COMMAND", [str(part) for part in command])
    config.store.set(target, "DEPENDS", list(depends))
    if comment is not None:
        config.store.set(target, "COMMENT", comment)
    logger.debug("Added custom target %s: %s", name, " ".join(map(str, command)))
    return target


def run_custom_target(
    config: Configure,
    name: str,
    *,
    runner: ProcessRunner | None = None,
) -> ProcessResult:
    """Run a custom target's command in the current directory.

    Raises:
        ConfigurationError: If name is not a custom target.
        ToolError: If the command exits non-zero.
    """
    operation = "run_custom_target"
    target = TargetScope(name)
    command = config.store.get(target, "COMMAND")
    if config.store.get(target, "TYPE") != "UTILITY" or not command:
        raise ConfigurationError(f"'{name}' is not a custom target", operation)

    comment = config.store.get(target, "COMMENT")
    if comment:
        logger.info("%s", comment)

    runner = runner or config.runner
    result = runner.run(command[0], command[1:], config.current_directory)
    if not result.ok:
        raise ToolError(
            f"target '{name}' failed with exit status {result.returncode}",
            operation,
            returncode=result.returncode,
            stderr=result.stderr.strip(),
        )
    return result
