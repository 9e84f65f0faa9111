# SPDX-License-Identifier: MIT
"""Scope store: the key/value backing for every property scope.

The property transfer engine and the configuration registry never hold
state of their own. Everything they read or write goes through a
ScopeStore, addressed by a ScopeRef and a property key.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Protocol

from buildscope.core.scope import (
    CacheScope,
    DirectoryScope,
    ScopeRef,
    parse_scope,
    scope_key,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

# Called as watcher(access, scope, key, value); access is READ, WRITE or REMOVE.
Watcher = Callable[[str, ScopeRef, str, Any], None]


class ScopeStore(Protocol):
    """Capability interface consumed by the transfer engine and registry."""

    def get(self, scope: ScopeRef, key: str) -> Any:
        """Return the value, or None if the key is unset. Never raises."""
        ...

    def set(self, scope: ScopeRef, key: str, value: Any) -> None:
        """Write a value, creating the key if absent."""
        ...

    def keys(self, scope: ScopeRef) -> list[str]:
        """Return the keys set on a scope, in insertion order."""
        ...

    def get_allowed_values(self, scope: CacheScope) -> list[str] | None:
        """Return a cache entry's allowed values, None if never populated."""
        ...

    def set_allowed_values(self, scope: CacheScope, values: Iterable[str]) -> None:
        """Replace a cache entry's allowed values."""
        ...

    def append_allowed_values(
        self, scope: CacheScope, values: Iterable[str]
    ) -> None:
        """Append to a cache entry's allowed values."""
        ...


def _copy_value(value: Any) -> Any:
    if isinstance(value, list):
        return list(value)
    if isinstance(value, dict):
        return dict(value)
    return value


class MemoryScopeStore:
    """In-memory ScopeStore.

    Values are untyped. Lists and dicts are copied on the way in and out
    so callers never alias stored state.

    Directory scopes are normalized against current_directory, so
    DirectoryScope() and DirectoryScope(<current dir>) address the same
    table, and relative directory paths are resolved against it.

    Example:
        store = MemoryScopeStore()
        store.set(TargetScope("app"), "OUTPUT_NAME", "app")
        store.get(TargetScope("app"), "OUTPUT_NAME")  # 'app'
        store.get(TargetScope("app"), "MISSING")      # None
    """

    def __init__(self, *, current_directory: Path | str | None = None) -> None:
        self.current_directory = Path(current_directory or Path.cwd())
        self._tables: dict[ScopeRef, dict[str, Any]] = {}
        self._allowed_values: dict[str, list[str]] = {}
        self._watchers: list[Watcher] = []

    def _resolve(self, scope: ScopeRef) -> ScopeRef:
        if isinstance(scope, DirectoryScope):
            if scope.path is None:
                return DirectoryScope(self.current_directory.as_posix())
            path = Path(scope.path)
            if not path.is_absolute():
                path = self.current_directory / path
            return DirectoryScope(path.as_posix())
        return scope

    def _notify(self, access: str, scope: ScopeRef, key: str, value: Any) -> None:
        for watcher in self._watchers:
            watcher(access, scope, key, value)

    def get(self, scope: ScopeRef, key: str) -> Any:
        scope = self._resolve(scope)
        value = _copy_value(self._tables.get(scope, {}).get(key))
        self._notify("READ", scope, key, value)
        return value

    def set(self, scope: ScopeRef, key: str, value: Any) -> None:
        scope = self._resolve(scope)
        self._tables.setdefault(scope, {})[key] = _copy_value(value)
        self._notify("WRITE", scope, key, value)

    def unset(self, scope: ScopeRef, key: str) -> None:
        """Remove a key. Removing an unset key is a no-op."""
        scope = self._resolve(scope)
        table = self._tables.get(scope)
        if table is not None and key in table:
            del table[key]
            self._notify("REMOVE", scope, key, None)

    def has(self, scope: ScopeRef, key: str) -> bool:
        """Check whether a key is set, without notifying watchers."""
        return key in self._tables.get(self._resolve(scope), {})

    def keys(self, scope: ScopeRef) -> list[str]:
        return list(self._tables.get(self._resolve(scope), {}).keys())

    def scopes(self) -> list[ScopeRef]:
        """Return every scope that has a property table."""
        return list(self._tables.keys())

    def get_allowed_values(self, scope: CacheScope) -> list[str] | None:
        values = self._allowed_values.get(scope.name)
        return list(values) if values is not None else None

    def set_allowed_values(self, scope: CacheScope, values: Iterable[str]) -> None:
        self._allowed_values[scope.name] = list(values)

    def append_allowed_values(
        self, scope: CacheScope, values: Iterable[str]
    ) -> None:
        self._allowed_values.setdefault(scope.name, []).extend(values)

    def add_watcher(self, watcher: Watcher) -> None:
        """Register a callback for every read, write and removal."""
        self._watchers.append(watcher)

    def remove_watcher(self, watcher: Watcher) -> None:
        self._watchers.remove(watcher)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "properties": {
                scope_key(scope): dict(table)
                for scope, table in self._tables.items()
                if table
            },
            "allowed_values": {
                name: list(values) for name, values in self._allowed_values.items()
            },
        }

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        *,
        current_directory: Path | str | None = None,
    ) -> MemoryScopeStore:
        """Rebuild a store from the output of to_dict().

        Raises:
            ConfigurationError: If a scope key cannot be decoded.
        """
        store = cls(current_directory=current_directory)
        for key, table in data.get("properties", {}).items():
            scope = store._resolve(parse_scope(key))
            store._tables[scope] = dict(table)
        for name, values in data.get("allowed_values", {}).items():
            store._allowed_values[name] = list(values)
        return store

    def __repr__(self) -> str:
        return (
            f"MemoryScopeStore(scopes={len(self._tables)}, "
            f"current_directory={self.current_directory})"
        )
