# SPDX-License-Identifier: MIT
"""include-what-you-use integration.

Two ways to run include-what-you-use:

- add_iwyu_target: a custom target that runs it over a set of sources.
- enable_iwyu / target_enable_iwyu: record it as the per-language
  include-what-you-use launcher, globally or for one target.

Using either turns on compile command export, which the tool relies on.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from buildscope.core.errors import ToolNotFoundError
from buildscope.core.scope import TargetScope
from buildscope.tools.custom_target import add_custom_target, collect_sources

if TYPE_CHECKING:
    from collections.abc import Sequence

    from buildscope.configure.config import Configure, ProgramInfo

logger = logging.getLogger(__name__)

IWYU_PROGRAM = "include-what-you-use"
DEFAULT_LANGUAGES: tuple[str, ...] = ("CXX",)


def _find_iwyu(config: Configure) -> ProgramInfo | None:
    info = config.find_program(IWYU_PROGRAM, host=True)
    if info is not None:
        config.set("CMAKE_EXPORT_COMPILE_COMMANDS", True, cache_type="INTERNAL")
    return info


def _launcher(
    config: Configure,
    required: bool,
    iwyu_args: Sequence[str],
    operation: str,
) -> list[str] | None:
    info = _find_iwyu(config)
    if info is None:
        if required:
            raise ToolNotFoundError(IWYU_PROGRAM, operation)
        logger.debug("%s: %s not found, skipping", operation, IWYU_PROGRAM)
        return None
    return [str(info.path), *iwyu_args]


def add_iwyu_target(
    config: Configure,
    name: str,
    *,
    sources: Sequence[str] = (),
    targets: Sequence[str] = (),
    iwyu_args: Sequence[str] = (),
) -> TargetScope:
    """Add a target that runs include-what-you-use over sources.

    Raises:
        ToolNotFoundError: If include-what-you-use is not installed.
        ConfigurationError: If no sources were specified.
    """
    operation = "add_iwyu_target"
    info = _find_iwyu(config)
    if info is None:
        raise ToolNotFoundError(IWYU_PROGRAM, operation)

    all_sources = collect_sources(config, sources, targets, operation)
    command = [str(info.path), *all_sources, *iwyu_args]
    return add_custom_target(
        config,
        name,
        command,
        depends=targets,
        comment="Executing include-what-you-use",
        operation=operation,
    )


def enable_iwyu(
    config: Configure,
    *,
    languages: Sequence[str] | None = None,
    iwyu_args: Sequence[str] = (),
    required: bool = False,
) -> bool:
    """Run include-what-you-use alongside every compile.

    Sets the CMAKE_<LANG>_INCLUDE_WHAT_YOU_USE variable for each language.

    Args:
        config: Configure context.
        languages: Languages to enable it for (default: CXX).
        iwyu_args: Extra arguments for include-what-you-use.
        required: Raise if the tool is not installed.

    Returns:
        True if enabled, False if the tool was not found.
    """
    launcher = _launcher(config, required, iwyu_args, "enable_iwyu")
    if launcher is None:
        return False
    for lang in languages or DEFAULT_LANGUAGES:
        config.set_variable(f"CMAKE_{lang}_INCLUDE_WHAT_YOU_USE", launcher)
    config.set("CMAKE_INCLUDE_WHAT_YOU_USE_ENABLED", True, cache_type="INTERNAL")
    return True


def target_enable_iwyu(
    config: Configure,
    target: str,
    *,
    languages: Sequence[str] | None = None,
    iwyu_args: Sequence[str] = (),
    required: bool = False,
) -> bool:
    """Run include-what-you-use alongside one target's compiles.

    Sets the <LANG>_INCLUDE_WHAT_YOU_USE property on the target.

    Returns:
        True if enabled, False if the tool was not found.
    """
    launcher = _launcher(config, required, iwyu_args, "target_enable_iwyu")
    if launcher is None:
        return False
    scope = TargetScope(target)
    for lang in languages or DEFAULT_LANGUAGES:
        config.store.set(scope, f"{lang}_INCLUDE_WHAT_YOU_USE", launcher)
    return True
