# SPDX-License-Identifier: MIT
"""Debugging helpers for configure scripts.

dump_variables logs the variable namespace; watch_variables logs every
access to matching variables as it happens.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

from buildscope.core.scope import ScopeKind, VariableScope

if TYPE_CHECKING:
    from buildscope.configure.config import Configure
    from buildscope.core.scope import ScopeRef
    from buildscope.core.store import Watcher

logger = logging.getLogger(__name__)


def _matcher(matching: str | None) -> re.Pattern[str] | None:
    return re.compile(matching) if matching else None


def dump_variables(
    config: Configure, matching: str | None = None
) -> list[tuple[str, Any]]:
    """Log every variable, optionally filtered by a regular expression.

    Args:
        config: Configure context.
        matching: Only variables whose name matches (re.search).

    Returns:
        The (name, value) pairs that were logged, sorted by name.
    """
    pattern = _matcher(matching)
    store = config.store
    scope = VariableScope()
    dumped: list[tuple[str, Any]] = []
    for name in sorted(store.keys(scope)):
        if pattern is not None and not pattern.search(name):
            continue
        value = store.get(scope, name)
        logger.info("%s = '%s'", name, value)
        dumped.append((name, value))
    return dumped


def watch_variables(config: Configure, matching: str | None = None) -> Watcher:
    """Log each read, write and removal of matching variables.

    Unlike dump_variables this also covers variables created later.

    Returns:
        The registered watcher, for config.store.remove_watcher().
    """
    pattern = _matcher(matching)

    def watcher(access: str, scope: ScopeRef, key: str, value: Any) -> None:
        if scope.kind is not ScopeKind.VARIABLE:
            return
        if pattern is not None and not pattern.search(key):
            return
        logger.info("ACCESS(%s): %s = '%s'", access, key, value)

    config.store.add_watcher(watcher)
    return watcher
