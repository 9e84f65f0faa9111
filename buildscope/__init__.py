# SPDX-License-Identifier: MIT
"""
buildscope: configure-time helpers for build scripts.

Moves properties between build scopes (targets, tests, source files,
directories, cache entries, variables), manages the set of valid build
configurations, and wires developer tools (ccache, git, clang-format,
include-what-you-use) into a configure run.
"""

from __future__ import annotations

__version__ = "0.1.0"

# Re-export commonly used classes for convenient imports
from buildscope.configure.config import Configure  # noqa: E402
from buildscope.core.configurations import (  # noqa: E402
    DEFAULT_CONFIGURATIONS,
    BuildConfigurations,
)
from buildscope.core.errors import (  # noqa: E402
    BuildScopeError,
    ConfigurationError,
    InvalidConfigurationError,
)
from buildscope.core.scope import (  # noqa: E402
    CacheScope,
    DirectoryScope,
    GlobalScope,
    SourceScope,
    TargetScope,
    TestScope,
    VariableScope,
)
from buildscope.core.store import MemoryScopeStore  # noqa: E402
from buildscope.core.transfer import copy_properties, map_properties  # noqa: E402

# Public API exports
__all__ = [
    # Version
    "__version__",
    # Context
    "Configure",
    # Configuration registry
    "BuildConfigurations",
    "DEFAULT_CONFIGURATIONS",
    # Property transfer
    "copy_properties",
    "map_properties",
    # Scopes and storage
    "CacheScope",
    "DirectoryScope",
    "GlobalScope",
    "SourceScope",
    "TargetScope",
    "TestScope",
    "VariableScope",
    "MemoryScopeStore",
    # Errors
    "BuildScopeError",
    "ConfigurationError",
    "InvalidConfigurationError",
]
