# SPDX-License-Identifier: MIT
"""Scope references.

A scope reference identifies where a property lives: the global table,
a directory, a target, a source file, a test, a cache entry, or the
variable namespace. Each kind is its own frozen dataclass carrying only
the identifier that kind needs, so references can be used as dict keys.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

from buildscope.core.errors import ConfigurationError


class ScopeKind(Enum):
    """The kinds of addressable property scopes."""

    GLOBAL = "GLOBAL"
    DIRECTORY = "DIRECTORY"
    TARGET = "TARGET"
    SOURCE = "SOURCE"
    TEST = "TEST"
    CACHE = "CACHE"
    VARIABLE = "VARIABLE"


def _require_identifier(value: str, what: str) -> None:
    if not isinstance(value, str) or not value:
        raise ConfigurationError(f"{what} must be a non-empty string, got {value!r}")


@dataclass(frozen=True)
class GlobalScope:
    """The process-wide global property table."""

    kind: ClassVar[ScopeKind] = ScopeKind.GLOBAL

    def __str__(self) -> str:
        return "GLOBAL"


@dataclass(frozen=True)
class DirectoryScope:
    """A directory's property table.

    A path of None means the current directory.
    """

    path: str | None = None

    kind: ClassVar[ScopeKind] = ScopeKind.DIRECTORY

    def __post_init__(self) -> None:
        if self.path is not None:
            _require_identifier(self.path, "directory path")

    @property
    def is_current(self) -> bool:
        return self.path is None

    def __str__(self) -> str:
        return f"DIRECTORY {self.path}" if self.path else "DIRECTORY"


@dataclass(frozen=True)
class TargetScope:
    """A build target's property table."""

    name: str

    kind: ClassVar[ScopeKind] = ScopeKind.TARGET

    def __post_init__(self) -> None:
        _require_identifier(self.name, "target name")

    def __str__(self) -> str:
        return f"TARGET {self.name}"


@dataclass(frozen=True)
class SourceScope:
    """A source file's property table."""

    path: str

    kind: ClassVar[ScopeKind] = ScopeKind.SOURCE

    def __post_init__(self) -> None:
        _require_identifier(self.path, "source file path")

    def __str__(self) -> str:
        return f"SOURCE {self.path}"


@dataclass(frozen=True)
class TestScope:
    """A test's property table."""

    # Keep pytest from collecting this class
    __test__: ClassVar[bool] = False

    name: str

    kind: ClassVar[ScopeKind] = ScopeKind.TEST

    def __post_init__(self) -> None:
        _require_identifier(self.name, "test name")

    def __str__(self) -> str:
        return f"TEST {self.name}"


@dataclass(frozen=True)
class CacheScope:
    """A cache entry's property table.

    The entry's value lives in its VALUE property.
    """

    name: str

    kind: ClassVar[ScopeKind] = ScopeKind.CACHE

    def __post_init__(self) -> None:
        _require_identifier(self.name, "cache entry name")

    def __str__(self) -> str:
        return f"CACHE {self.name}"


@dataclass(frozen=True)
class VariableScope:
    """The current variable namespace, keyed by variable name."""

    kind: ClassVar[ScopeKind] = ScopeKind.VARIABLE

    def __str__(self) -> str:
        return "VARIABLE"


ScopeRef = Union[
    GlobalScope,
    DirectoryScope,
    TargetScope,
    SourceScope,
    TestScope,
    CacheScope,
    VariableScope,
]

_SCOPE_TYPES: dict[ScopeKind, type] = {
    ScopeKind.GLOBAL: GlobalScope,
    ScopeKind.DIRECTORY: DirectoryScope,
    ScopeKind.TARGET: TargetScope,
    ScopeKind.SOURCE: SourceScope,
    ScopeKind.TEST: TestScope,
    ScopeKind.CACHE: CacheScope,
    ScopeKind.VARIABLE: VariableScope,
}


def scope_key(scope: ScopeRef) -> str:
    """Encode a scope reference as a string.

    The encoding is "KIND" for scopes without an identifier and
    "KIND:identifier" otherwise. It is used as the key in saved caches.

    Examples:
        >>> scope_key(TargetScope("app"))
        'TARGET:app'
        >>> scope_key(GlobalScope())
        'GLOBAL'
    """
    if isinstance(scope, (TargetScope, TestScope, CacheScope)):
        return f"{scope.kind.value}:{scope.name}"
    if isinstance(scope, SourceScope):
        return f"{scope.kind.value}:{scope.path}"
    if isinstance(scope, DirectoryScope) and scope.path is not None:
        return f"{scope.kind.value}:{scope.path}"
    return scope.kind.value


def parse_scope(text: str) -> ScopeRef:
    """Decode a string produced by scope_key().

    Raises:
        ConfigurationError: If the kind is unknown or an identifier is
            missing for a kind that requires one.
    """
    kind_name, sep, ident = text.partition(":")
    try:
        kind = ScopeKind(kind_name.upper())
    except ValueError:
        raise ConfigurationError(f"unknown scope kind '{kind_name}'") from None

    scope_type = _SCOPE_TYPES[kind]
    if kind in (ScopeKind.GLOBAL, ScopeKind.VARIABLE):
        if sep and ident:
            raise ConfigurationError(f"{kind.value} scope takes no identifier")
        return scope_type()
    if kind is ScopeKind.DIRECTORY:
        return DirectoryScope(ident or None)
    scope: ScopeRef = scope_type(ident)
    return scope
