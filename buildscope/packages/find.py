# SPDX-License-Identifier: MIT
"""Package discovery.

Host-side wrappers around program/path discovery, and find modules for
header-only packages. A found package becomes an imported interface
target carrying its include directory, so other targets can copy or map
its usage properties.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from buildscope.core.errors import ConfigurationError, ToolNotFoundError
from buildscope.core.scope import CacheScope, TargetScope

if TYPE_CHECKING:
    from collections.abc import Sequence

    from buildscope.configure.config import Configure, ProgramInfo

logger = logging.getLogger(__name__)


def find_host_program(
    config: Configure, name: str, **kwargs: Any
) -> ProgramInfo | None:
    """Find a program on the host, ignoring find_root_path."""
    return config.find_program(name, host=True, **kwargs)


def find_host_path(
    config: Configure, var: str, names: Sequence[str], **kwargs: Any
) -> Path | None:
    """Find a directory on the host, ignoring find_root_path."""
    return config.find_path(var, names, host=True, **kwargs)


@dataclass(frozen=True)
class FindModule:
    """How to locate a header-only package.

    Attributes:
        name: Package name, also the prefix of its cache entries.
        headers: Relative header paths that identify the include dir.
        target: Name of the imported target to create.
        doc: Help string for the include dir cache entry.
    """

    name: str
    headers: tuple[str, ...]
    target: str
    doc: str


FIND_MODULES: dict[str, FindModule] = {
    "Catch2": FindModule(
        name="Catch2",
        headers=("catch.hpp",),
        target="Catch2::Catch2",
        doc="Catch2 unit-test include directory",
    ),
    "GSL": FindModule(
        name="GSL",
        headers=("gsl/gsl", "gsl/gsl_byte", "gsl/gsl_span"),
        target="GSL::GSL",
        doc="Guideline-Support Library include directory",
    ),
}


@dataclass
class PackageResult:
    """Outcome of find_package.

    Attributes:
        name: Package name.
        found: Whether the package was located.
        include_dirs: Include directories (empty if not found).
        target: Imported target name, or None if not found.
    """

    name: str
    found: bool
    include_dirs: list[Path] = field(default_factory=list)
    target: str | None = None


def find_package(
    config: Configure,
    name: str,
    *,
    required: bool = False,
    hints: Sequence[Path | str] | None = None,
) -> PackageResult:
    """Locate a package with one of the built-in find modules.

    On success, caches <Name>_INCLUDE_DIR and <Name>_INCLUDE_DIRS, sets
    the <Name>_FOUND variable, and creates the package's imported
    interface target (unless a target of that name already exists).

    Args:
        config: Configure context.
        name: Package name (a key of FIND_MODULES).
        required: Raise if the package is not found.
        hints: Directories to search first.

    Raises:
        ConfigurationError: If there is no find module for name.
        ToolNotFoundError: If required and not found.
    """
    operation = "find_package"
    module = FIND_MODULES.get(name)
    if module is None:
        known = ", ".join(sorted(FIND_MODULES))
        raise ConfigurationError(
            f"no find module for '{name}' (known: {known})", operation
        )

    include_var = f"{module.name}_INCLUDE_DIR"
    include_dir = config.find_path(
        include_var, module.headers, hints=hints, doc=module.doc
    )
    config.set_variable(f"{module.name}_FOUND", include_dir is not None)

    if include_dir is None:
        logger.info("Could NOT find %s (missing: %s)", module.name, include_var)
        if required:
            raise ToolNotFoundError(module.name, operation)
        return PackageResult(name=module.name, found=False)

    logger.info("Found %s: %s", module.name, include_dir)
    include_dirs = [include_dir]
    config.set(
        f"{module.name}_INCLUDE_DIRS",
        [str(d) for d in include_dirs],
        cache_type="FILEPATH",
        doc=f"Include directory for {module.name}",
    )
    config.store.set(
        CacheScope(f"{module.name}_INCLUDE_DIRS"), "ADVANCED", True
    )

    target = TargetScope(module.target)
    if config.store.get(target, "TYPE") is None:
        config.store.set(target, "TYPE", "INTERFACE_LIBRARY")
        config.store.set(target, "IMPORTED", True)
        config.store.set(
            target, "INTERFACE_INCLUDE_DIRECTORIES", [str(d) for d in include_dirs]
        )

    return PackageResult(
        name=module.name,
        found=True,
        include_dirs=include_dirs,
        target=module.target,
    )
