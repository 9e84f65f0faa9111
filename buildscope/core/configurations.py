# SPDX-License-Identifier: MIT
"""Registry of valid build configurations.

Single-config generators bake one configuration in at configure time;
multi-config generators choose among several at build time. The registry
hides that difference:

- Multi-config: the ordered list in the VALUE of cache entry
  CONFIGURATION_TYPES is the whole truth.
- Single-config: the allowed values of cache entry BUILD_TYPE are the
  valid set, and the VALUE of BUILD_TYPE is the selected configuration
  (possibly unset).

The registry keeps no state of its own; everything lives in the store.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from buildscope.core.errors import InvalidConfigurationError
from buildscope.core.scope import CacheScope

if TYPE_CHECKING:
    from collections.abc import Iterable

    from buildscope.core.store import ScopeStore

logger = logging.getLogger(__name__)

DEFAULT_CONFIGURATIONS: tuple[str, ...] = (
    "Debug",
    "Release",
    "MinSizeRel",
    "RelWithDebInfo",
)

BUILD_TYPE = CacheScope("BUILD_TYPE")
CONFIGURATION_TYPES = CacheScope("CONFIGURATION_TYPES")
VALUE = "VALUE"


class BuildConfigurations:
    """The set of valid build configurations and the selected one.

    Example:
        configs = BuildConfigurations(store)
        configs.set_default("Release")
        configs.add("Coverage")
        configs.ensure_valid()

    Attributes:
        multi_config: True when backed by a multi-config generator.
    """

    def __init__(self, store: ScopeStore, *, multi_config: bool = False) -> None:
        self._store = store
        self.multi_config = multi_config

    def _read_types(self) -> list[str] | None:
        # A string value is a ;-separated list
        value = self._store.get(CONFIGURATION_TYPES, VALUE)
        if value is None:
            return None
        if isinstance(value, str):
            return [name for name in value.split(";") if name]
        return list(value)

    def _write_types(self, names: list[str], doc: str) -> None:
        self._store.set(CONFIGURATION_TYPES, VALUE, names)
        self._store.set(CONFIGURATION_TYPES, "TYPE", "STRING")
        self._store.set(CONFIGURATION_TYPES, "HELPSTRING", doc)

    @property
    def is_populated(self) -> bool:
        """Whether the configuration set has been written at least once."""
        if self.multi_config:
            return self._store.get(CONFIGURATION_TYPES, VALUE) is not None
        return self._store.get_allowed_values(BUILD_TYPE) is not None

    @property
    def selected(self) -> str | None:
        """The selected single configuration, or None if unset."""
        value = self._store.get(BUILD_TYPE, VALUE)
        return value or None

    def add(self, name: str) -> None:
        """Append a configuration. Duplicates are not detected."""
        if self.multi_config:
            types = self._read_types() or []
            types.append(name)
            self._write_types(types, "The supported configurations")
        else:
            self._store.append_allowed_values(BUILD_TYPE, [name])
        logger.debug("Added build configuration %s", name)

    def set(self, names: Iterable[str]) -> None:
        """Replace the whole configuration set. An empty set is allowed."""
        names = list(names)
        if self.multi_config:
            self._write_types(names, "The supported configurations")
        else:
            self._store.set_allowed_values(BUILD_TYPE, names)
        logger.debug("Set build configurations to %s", names)

    def get(self) -> list[str]:
        """Return the current configuration set.

        Not always a pure read: in single-config mode, if the allowed
        values have never been populated they are initialized to
        DEFAULT_CONFIGURATIONS first.
        """
        if self.multi_config:
            return self._read_types() or []

        values = self._store.get_allowed_values(BUILD_TYPE)
        if values is None:
            logger.debug("Initializing build configurations to defaults")
            values = list(DEFAULT_CONFIGURATIONS)
            self._store.set_allowed_values(BUILD_TYPE, values)
        return values

    def set_default(self, name: str, *, populate_defaults: bool = False) -> None:
        """Select a configuration unless one is already selected.

        A no-op in multi-config mode or when a configuration is already
        selected; an explicit user choice always wins.

        Args:
            name: Configuration to select.
            populate_defaults: Also reset the allowed values to
                DEFAULT_CONFIGURATIONS when the selection is made.
        """
        if self.multi_config or self.selected is not None:
            return
        self._store.set(BUILD_TYPE, VALUE, name)
        self._store.set(BUILD_TYPE, "TYPE", "STRING")
        self._store.set(BUILD_TYPE, "HELPSTRING", "The configuration to be built")
        if populate_defaults:
            self._store.set_allowed_values(BUILD_TYPE, DEFAULT_CONFIGURATIONS)
        logger.debug("Default build configuration set to %s", name)

    def reset(self) -> None:
        """Overwrite the configuration set with DEFAULT_CONFIGURATIONS."""
        if self.multi_config:
            self._write_types(
                list(DEFAULT_CONFIGURATIONS), "The configurations to be built"
            )
        else:
            self._store.set_allowed_values(BUILD_TYPE, DEFAULT_CONFIGURATIONS)
        logger.debug("Build configurations reset to defaults")

    def ensure_valid(self) -> None:
        """Check the selected configuration against the valid set.

        Only applies in single-config mode with a selection. Names are
        compared case-insensitively.

        Raises:
            InvalidConfigurationError: If the selection matches no valid
                configuration.
        """
        selected = self.selected
        if self.multi_config or selected is None:
            return

        valid = self.get()
        wanted = selected.upper()
        for name in valid:
            if name.upper() == wanted:
                return
        raise InvalidConfigurationError(
            selected, valid, operation="ensure_valid_build_configuration"
        )

    def __repr__(self) -> str:
        mode = "multi" if self.multi_config else "single"
        return f"BuildConfigurations(mode={mode}, selected={self.selected!r})"
