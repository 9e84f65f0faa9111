# SPDX-License-Identifier: MIT
"""Compiler launching through ccache."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from buildscope.core.errors import ToolNotFoundError
from buildscope.core.scope import GlobalScope

if TYPE_CHECKING:
    from buildscope.configure.config import Configure

logger = logging.getLogger(__name__)

CCACHE_CACHE_VAR = "CCACHE_PATH"


def enable_ccache(
    config: Configure,
    *,
    required: bool = False,
    verbose: bool = False,
) -> Path | None:
    """Launch every compile and link through ccache, if it is installed.

    ccache is always looked up on the host, even when cross compiling.
    When found, the global RULE_LAUNCH_COMPILE and RULE_LAUNCH_LINK
    properties are set to its path.

    Args:
        config: Configure context.
        required: Raise if ccache is not installed.
        verbose: Report the outcome at INFO level instead of DEBUG.

    Returns:
        Path to ccache, or None if it was not found.

    Raises:
        ToolNotFoundError: If required and ccache is not installed.
    """
    info = config.find_program(
        "ccache", cache_var=CCACHE_CACHE_VAR, version_flag=None, host=True
    )
    if info is not None:
        launcher = str(info.path)
        config.store.set(GlobalScope(), "RULE_LAUNCH_COMPILE", launcher)
        config.store.set(GlobalScope(), "RULE_LAUNCH_LINK", launcher)

    level = logging.INFO if verbose else logging.DEBUG
    logger.log(level, "CCache enabled" if info else "CCache not enabled")

    if required and info is None:
        raise ToolNotFoundError("ccache", operation="enable_ccache")
    return info.path if info else None
