# SPDX-License-Identifier: MIT
"""Custom exceptions for buildscope.

All buildscope exceptions inherit from BuildScopeError, which includes
the name of the failing operation for better error messages.
"""

from __future__ import annotations


class BuildScopeError(Exception):
    """Base class for all buildscope exceptions.

    Attributes:
        message: The error message.
        operation: Optional name of the operation that failed.
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
    ) -> None:
        self.message = message
        self.operation = operation
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.operation:
            return f"{self.operation}: {self.message}"
        return self.message


class ConfigurationError(BuildScopeError):
    """Malformed or insufficient arguments to a configure-time operation.

    Always raised before any state is mutated.
    """


class PropertyCountMismatchError(ConfigurationError):
    """Source and destination property lists differ in length.

    Attributes:
        source_count: Number of source properties.
        destination_count: Number of destination properties.
    """

    def __init__(
        self,
        source_count: int,
        destination_count: int,
        operation: str | None = None,
    ) -> None:
        self.source_count = source_count
        self.destination_count = destination_count
        if source_count > destination_count:
            message = (
                "more source properties than destination properties specified "
                f"({source_count} > {destination_count})"
            )
        else:
            message = (
                "more destination properties than source properties specified "
                f"({destination_count} > {source_count})"
            )
        super().__init__(message, operation)


class InvalidConfigurationError(BuildScopeError):
    """The selected build configuration is not a valid one.

    Attributes:
        value: The offending configuration name.
        valid: The configurations that would have been accepted.
    """

    def __init__(
        self,
        value: str,
        valid: list[str],
        operation: str | None = None,
    ) -> None:
        self.value = value
        self.valid = list(valid)
        valid_str = ";".join(self.valid)
        super().__init__(
            f"invalid build type specified '{value}'. "
            f"Valid types are '{valid_str}'",
            operation,
        )


class ToolNotFoundError(ConfigurationError):
    """Required tool was not found.

    Attributes:
        tool: The name of the tool that was not found.
    """

    def __init__(
        self,
        tool: str,
        operation: str | None = None,
    ) -> None:
        self.tool = tool
        super().__init__(f"{tool} not found", operation)


class ToolError(BuildScopeError):
    """An external tool failed.

    Attributes:
        returncode: Exit status of the process, if it ran.
        stderr: Captured standard error, stripped.
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        *,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message, operation)
