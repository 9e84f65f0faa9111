# SPDX-License-Identifier: MIT
"""Include guards for configure scripts."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from buildscope.core.errors import ConfigurationError
from buildscope.core.scope import DirectoryScope, GlobalScope, VariableScope

if TYPE_CHECKING:
    from buildscope.configure.config import Configure
    from buildscope.core.scope import ScopeRef


def include_guard(
    config: Configure,
    file: Path | str,
    scope: str | None = None,
) -> bool:
    """Mark a script as processed and report whether it already was.

    Usage at the top of a helper script:

        if include_guard(config, __file__, "GLOBAL"):
            return

    Args:
        config: Configure context.
        file: The script being processed.
        scope: None for the variable namespace, "DIRECTORY" for the
            script's directory, or "GLOBAL" for the whole build.

    Returns:
        True if the file was already processed for this scope.

    Raises:
        ConfigurationError: If scope is not one of the above.
    """
    file = Path(file)
    key = f"GUARD_{file.as_posix()}"

    guard_scope: ScopeRef
    if scope is None:
        guard_scope = VariableScope()
    elif scope == "DIRECTORY":
        guard_scope = DirectoryScope(file.parent.as_posix())
    elif scope == "GLOBAL":
        guard_scope = GlobalScope()
    else:
        raise ConfigurationError(f"unknown option '{scope}'", "include_guard")

    if config.store.get(guard_scope, key):
        return True
    config.store.set(guard_scope, key, True)
    return False
