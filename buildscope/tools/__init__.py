# SPDX-License-Identifier: MIT
"""Developer tool integrations (ccache, git, clang-format, IWYU)."""

from buildscope.tools.ccache import enable_ccache
from buildscope.tools.clang_format import add_clang_format_target
from buildscope.tools.custom_target import add_custom_target, run_custom_target
from buildscope.tools.git import git_branch, git_sha1
from buildscope.tools.iwyu import add_iwyu_target, enable_iwyu, target_enable_iwyu

__all__ = [
    # ccache
    "enable_ccache",
    # git
    "git_branch",
    "git_sha1",
    # Custom targets
    "add_custom_target",
    "run_custom_target",
    "add_clang_format_target",
    "add_iwyu_target",
    # Compile-time include-what-you-use
    "enable_iwyu",
    "target_enable_iwyu",
]
