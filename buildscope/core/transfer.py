# SPDX-License-Identifier: MIT
"""Property transfer between scopes.

Two primitives move property values from one scope to another:

- copy_properties: the same key at both ends.
- map_properties: index i of the source key list maps to index i of the
  destination key list.

Both validate every argument before touching the store, and read every
source value before writing any destination value, so a failed call
performs no writes and overlapping keys on the same scope are safe.

The fixed-kind wrappers (copy_target_properties, map_test_properties, ...)
build the scope references and delegate to the primitives.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from buildscope.core.errors import ConfigurationError, PropertyCountMismatchError
from buildscope.core.scope import DirectoryScope, SourceScope, TargetScope, TestScope

if TYPE_CHECKING:
    from collections.abc import Sequence

    from buildscope.core.scope import ScopeRef
    from buildscope.core.store import ScopeStore

logger = logging.getLogger(__name__)


def _check_properties(
    properties: Sequence[str] | None, operation: str, what: str
) -> list[str]:
    if not properties:
        raise ConfigurationError(f"{what} not specified", operation)
    if isinstance(properties, str):
        raise ConfigurationError(
            f"{what} must be a list of names, got the string {properties!r}",
            operation,
        )
    result = list(properties)
    for prop in result:
        if not isinstance(prop, str) or not prop:
            raise ConfigurationError(
                f"{what} contain an empty property name: {result!r}", operation
            )
    return result


def _transfer(
    store: ScopeStore,
    source: ScopeRef,
    destination: ScopeRef,
    pairs: list[tuple[str, str]],
) -> None:
    # Snapshot every read before the first write.
    values: list[Any] = [store.get(source, src_key) for src_key, _ in pairs]
    for (src_key, dest_key), value in zip(pairs, values):
        logger.debug(
            "%s[%s] -> %s[%s] = %r", source, src_key, destination, dest_key, value
        )
        store.set(destination, dest_key, value)


def copy_properties(
    store: ScopeStore,
    source: ScopeRef | None,
    destination: ScopeRef | None,
    properties: Sequence[str] | None,
    *,
    operation: str = "copy_properties",
) -> None:
    """Copy properties between two scopes under the same key names.

    Args:
        store: Scope store to read from and write to.
        source: Scope to read from. Never mutated.
        destination: Scope to write to.
        properties: Property keys, applied in order.
        operation: Name reported in error messages.

    Raises:
        ConfigurationError: If any argument is missing or empty.

    Example:
        copy_properties(
            store,
            TargetScope("core"),
            TargetScope("core_tests"),
            ["CXX_STANDARD", "INCLUDE_DIRECTORIES"],
        )
    """
    if source is None:
        raise ConfigurationError("source not specified", operation)
    if destination is None:
        raise ConfigurationError("destination not specified", operation)
    props = _check_properties(properties, operation, "properties")

    _transfer(store, source, destination, [(prop, prop) for prop in props])


def map_properties(
    store: ScopeStore,
    source: ScopeRef | None,
    destination: ScopeRef | None,
    source_properties: Sequence[str] | None,
    destination_properties: Sequence[str] | None,
    *,
    operation: str = "map_properties",
) -> None:
    """Map properties between two scopes under different key names.

    source_properties[i] is read from source and written to
    destination_properties[i] on destination.

    Args:
        store: Scope store to read from and write to.
        source: Scope to read from. Never mutated unless it is also the
            destination.
        destination: Scope to write to.
        source_properties: Keys to read.
        destination_properties: Keys to write; same length as
            source_properties.
        operation: Name reported in error messages.

    Raises:
        ConfigurationError: If any argument is missing or empty.
        PropertyCountMismatchError: If the two key lists differ in length.
    """
    if source is None:
        raise ConfigurationError("source not specified", operation)
    if destination is None:
        raise ConfigurationError("destination not specified", operation)
    src_props = _check_properties(source_properties, operation, "source properties")
    dest_props = _check_properties(
        destination_properties, operation, "destination properties"
    )
    if len(src_props) != len(dest_props):
        raise PropertyCountMismatchError(len(src_props), len(dest_props), operation)

    _transfer(store, source, destination, list(zip(src_props, dest_props)))


def _named_scopes(
    scope_type: Callable[[str], ScopeRef],
    noun: str,
    source: str | None,
    destination: str | None,
    operation: str,
) -> tuple[ScopeRef, ScopeRef]:
    if not source:
        raise ConfigurationError(f"source {noun} not specified", operation)
    if not destination:
        raise ConfigurationError(f"destination {noun} not specified", operation)
    return scope_type(source), scope_type(destination)


def _directory_scopes(
    source: str | None, destination: str | None, operation: str
) -> tuple[DirectoryScope, DirectoryScope]:
    if not source and not destination:
        raise ConfigurationError(
            "both source and destination not specified", operation
        )
    return DirectoryScope(source or None), DirectoryScope(destination or None)


def copy_target_properties(
    store: ScopeStore,
    source: str,
    destination: str,
    properties: Sequence[str],
) -> None:
    """Copy properties from one target to another."""
    operation = "copy_target_properties"
    props = _check_properties(properties, operation, "properties")
    src, dest = _named_scopes(TargetScope, "target", source, destination, operation)
    copy_properties(store, src, dest, props, operation=operation)


def copy_test_properties(
    store: ScopeStore,
    source: str,
    destination: str,
    properties: Sequence[str],
) -> None:
    """Copy properties from one test to another."""
    operation = "copy_test_properties"
    props = _check_properties(properties, operation, "properties")
    src, dest = _named_scopes(TestScope, "test", source, destination, operation)
    copy_properties(store, src, dest, props, operation=operation)


def copy_source_file_properties(
    store: ScopeStore,
    source: str,
    destination: str,
    properties: Sequence[str],
) -> None:
    """Copy properties from one source file to another."""
    operation = "copy_source_file_properties"
    props = _check_properties(properties, operation, "properties")
    src, dest = _named_scopes(SourceScope, "file", source, destination, operation)
    copy_properties(store, src, dest, props, operation=operation)


def copy_directory_properties(
    store: ScopeStore,
    properties: Sequence[str],
    *,
    source: str | None = None,
    destination: str | None = None,
) -> None:
    """Copy properties between directories.

    Either directory may be omitted to mean the current directory, but
    not both.
    """
    operation = "copy_directory_properties"
    props = _check_properties(properties, operation, "properties")
    src, dest = _directory_scopes(source, destination, operation)
    copy_properties(store, src, dest, props, operation=operation)


def map_target_properties(
    store: ScopeStore,
    source: str,
    destination: str,
    source_properties: Sequence[str],
    destination_properties: Sequence[str],
) -> None:
    """Map properties from one target onto another."""
    operation = "map_target_properties"
    src, dest = _named_scopes(TargetScope, "target", source, destination, operation)
    map_properties(
        store,
        src,
        dest,
        source_properties,
        destination_properties,
        operation=operation,
    )


def map_test_properties(
    store: ScopeStore,
    source: str,
    destination: str,
    source_properties: Sequence[str],
    destination_properties: Sequence[str],
) -> None:
    """Map properties from one test onto another."""
    operation = "map_test_properties"
    src, dest = _named_scopes(TestScope, "test", source, destination, operation)
    map_properties(
        store,
        src,
        dest,
        source_properties,
        destination_properties,
        operation=operation,
    )


def map_source_file_properties(
    store: ScopeStore,
    source: str,
    destination: str,
    source_properties: Sequence[str],
    destination_properties: Sequence[str],
) -> None:
    """Map properties from one source file onto another."""
    operation = "map_source_file_properties"
    src, dest = _named_scopes(SourceScope, "file", source, destination, operation)
    map_properties(
        store,
        src,
        dest,
        source_properties,
        destination_properties,
        operation=operation,
    )


def map_directory_properties(
    store: ScopeStore,
    source_properties: Sequence[str],
    destination_properties: Sequence[str],
    *,
    source: str | None = None,
    destination: str | None = None,
) -> None:
    """Map properties between directories.

    Either directory may be omitted to mean the current directory, but
    not both.
    """
    operation = "map_directory_properties"
    src, dest = _directory_scopes(source, destination, operation)
    map_properties(
        store,
        src,
        dest,
        source_properties,
        destination_properties,
        operation=operation,
    )
