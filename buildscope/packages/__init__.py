# SPDX-License-Identifier: MIT
"""Package discovery helpers."""

from buildscope.packages.find import (
    FIND_MODULES,
    PackageResult,
    find_host_path,
    find_host_program,
    find_package,
)

__all__ = [
    "FIND_MODULES",
    "PackageResult",
    "find_host_path",
    "find_host_program",
    "find_package",
]
