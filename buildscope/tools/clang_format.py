# SPDX-License-Identifier: MIT
"""clang-format integration.

Registers a custom target that runs clang-format over a set of sources,
gathered from explicit paths and from the SOURCES property of targets.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from buildscope.core.errors import ToolNotFoundError
from buildscope.tools.custom_target import add_custom_target, collect_sources

if TYPE_CHECKING:
    from collections.abc import Sequence

    from buildscope.configure.config import Configure
    from buildscope.core.scope import TargetScope


def add_clang_format_target(
    config: Configure,
    name: str,
    *,
    sources: Sequence[str] = (),
    targets: Sequence[str] = (),
    style: str | None = None,
    inplace: bool = False,
    verbose: bool = False,
    clang_format_args: Sequence[str] = (),
) -> TargetScope:
    """Add a target that formats sources with clang-format.

    Args:
        config: Configure context.
        name: Name of the new target.
        sources: Source files to format.
        targets: Targets whose SOURCES are formatted; the new target
            depends on them.
        style: clang-format style; defaults to "file".
        inplace: Edit files in place (-i).
        verbose: Pass -verbose.
        clang_format_args: Extra arguments placed before the sources.

    Returns:
        The new target's scope.

    Raises:
        ToolNotFoundError: If clang-format is not installed.
        ConfigurationError: If no sources were specified.
    """
    operation = "add_clang_format_target"
    info = config.find_program("clang-format", host=True)
    if info is None:
        raise ToolNotFoundError("clang-format", operation)

    all_sources = collect_sources(config, sources, targets, operation)

    command = [str(info.path), f"-style={style or 'file'}"]
    if inplace:
        command.append("-i")
    if verbose:
        command.append("-verbose")
    command.extend(clang_format_args)
    command.extend(all_sources)

    return add_custom_target(
        config, name, command, depends=targets, operation=operation
    )
