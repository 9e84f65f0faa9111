# SPDX-License-Identifier: MIT
"""Repository information from git."""

from __future__ import annotations

from typing import TYPE_CHECKING

from buildscope.core.errors import ToolError, ToolNotFoundError

if TYPE_CHECKING:
    from buildscope.configure.config import Configure
    from buildscope.util.process import ProcessRunner


def _rev_parse(
    config: Configure,
    args: list[str],
    operation: str,
    what: str,
    runner: ProcessRunner | None,
) -> str:
    git = config.find_program("git")
    if git is None:
        raise ToolNotFoundError("git", operation)
    runner = runner or config.runner
    result = runner.run(
        git.path, ["rev-parse", *args, "HEAD"], config.current_directory
    )
    if not result.ok:
        stderr = result.stderr.strip()
        raise ToolError(
            f"error retrieving {what}. {stderr}".rstrip(),
            operation,
            returncode=result.returncode,
            stderr=stderr,
        )
    return result.stdout.strip()


def git_sha1(
    config: Configure,
    *,
    short: bool = False,
    runner: ProcessRunner | None = None,
) -> str:
    """Return the commit hash of HEAD in the current directory.

    Args:
        config: Configure context.
        short: Return the abbreviated hash.
        runner: Process runner override.

    Raises:
        ToolNotFoundError: If git is not installed.
        ToolError: If git fails (e.g. not a repository).
    """
    args = ["--short"] if short else []
    return _rev_parse(config, args, "git_sha1", "commit hash", runner)


def git_branch(config: Configure, *, runner: ProcessRunner | None = None) -> str:
    """Return the branch name checked out in the current directory.

    A detached HEAD reports "HEAD".
    """
    return _rev_parse(config, ["--abbrev-ref"], "git_branch", "branch name", runner)
