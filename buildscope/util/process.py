# SPDX-License-Identifier: MIT
"""Process runner for shelling out to developer tools.

Tool integrations (git, clang-format, include-what-you-use, version
probes) never call subprocess directly; they go through a ProcessRunner so
tests can substitute a fake one.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from buildscope.core.errors import ToolError, ToolNotFoundError

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


@dataclass
class ProcessResult:
    """Captured result of a finished process.

    Attributes:
        stdout: Standard output as text.
        stderr: Standard error as text.
        returncode: Exit status.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ProcessRunner:
    """Runs an executable and captures its output.

    Attributes:
        timeout: Seconds before the process is abandoned, or None.
    """

    def __init__(self, *, timeout: float | None = None) -> None:
        self.timeout = timeout

    def run(
        self,
        executable: Path | str,
        args: Sequence[str] = (),
        working_directory: Path | str | None = None,
    ) -> ProcessResult:
        """Run a program to completion.

        A non-zero exit status is not an error here; callers decide.

        Args:
            executable: Program to run.
            args: Arguments passed after the program.
            working_directory: Directory to run in (default: current).

        Returns:
            The captured ProcessResult.

        Raises:
            ToolNotFoundError: If the executable does not exist.
            ToolError: If the working directory does not exist, or the
                process cannot be started or times out.
        """
        if working_directory is not None and not Path(working_directory).is_dir():
            raise ToolError(
                f"working directory does not exist: {working_directory}"
            )

        cmd = [str(executable), *(str(arg) for arg in args)]
        logger.debug("Running: %s", " ".join(cmd))

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                cwd=working_directory,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            raise ToolNotFoundError(str(executable)) from None
        except subprocess.TimeoutExpired as e:
            raise ToolError(f"{executable} timed out after {e.timeout}s") from e
        except OSError as e:
            raise ToolError(f"failed to run {executable}: {e}") from e

        return ProcessResult(
            stdout=result.stdout or "",
            stderr=result.stderr or "",
            returncode=result.returncode,
        )
