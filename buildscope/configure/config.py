# SPDX-License-Identifier: MIT
"""Configure context for buildscope.

The Configure class is the context object for one configure run. It owns
the scope store, the build configuration registry and the process runner,
handles program/path discovery, and caches everything to a JSON file in
the build directory.
"""

from __future__ import annotations

import json
import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from buildscope.core.configurations import VALUE, BuildConfigurations
from buildscope.core.errors import (
    BuildScopeError,
    ConfigurationError,
    ToolNotFoundError,
)
from buildscope.core.scope import CacheScope, VariableScope
from buildscope.core.store import MemoryScopeStore
from buildscope.util.process import ProcessRunner

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

DEFAULT_CACHE_FILE = "buildscope_cache.json"
DEFAULT_INCLUDE_DIRS: tuple[Path, ...] = (
    Path("/usr/local/include"),
    Path("/usr/include"),
)
INCLUDE_PATH_ENV_VARS = ("CPATH", "C_INCLUDE_PATH", "CPLUS_INCLUDE_PATH")


def program_cache_var(name: str) -> str:
    """Default cache entry name for a program, e.g. clang-format ->
    CLANG_FORMAT_EXECUTABLE."""
    return name.upper().replace("-", "_").replace(".", "_") + "_EXECUTABLE"


@dataclass
class ProgramInfo:
    """Information about a found program.

    Attributes:
        path: Path to the program executable.
        version: Version string if detected.
    """

    path: Path
    version: str | None = None


class Configure:
    """Context for the configure phase.

    The Configure class manages:
    - The scope store (cache entries, variables, properties)
    - The build configuration registry
    - Program and include path discovery
    - Configuration caching

    Example:
        config = Configure(build_dir=Path("build"))
        config.configurations.set_default("Release")
        config.configurations.ensure_valid()

        git = config.find_program("git")
        if git:
            print(f"Found git at {git.path}")

        config.save()

    Attributes:
        build_dir: Directory for build outputs and cache.
        store: The scope store for this run.
        configurations: Build configuration registry over the store.
        runner: Process runner used by tool integrations.
        find_root_path: Roots that non-host searches are re-rooted under
            (for cross compiling). Empty means search the host.
        include_search_dirs: System directories searched by find_path.
    """

    def __init__(
        self,
        *,
        build_dir: Path | str = "build",
        cache_file: str = DEFAULT_CACHE_FILE,
        multi_config: bool = False,
        current_directory: Path | str | None = None,
        runner: ProcessRunner | None = None,
    ) -> None:
        """Create a configure context.

        Args:
            build_dir: Directory for build outputs.
            cache_file: Name of the cache file within build_dir.
            multi_config: True for multi-config generators.
            current_directory: Current source directory (default: cwd).
            runner: Process runner (default: a new ProcessRunner).
        """
        self.build_dir = Path(build_dir)
        self._cache_file = cache_file
        self._current_directory = Path(current_directory or Path.cwd())
        self.runner = runner or ProcessRunner(timeout=30)
        self.find_root_path: list[Path] = []
        self.include_search_dirs: list[Path] = list(DEFAULT_INCLUDE_DIRS)
        self._programs: dict[str, ProgramInfo] = {}

        # Try to load existing cache
        self.store = self._load_cache()
        self.configurations = BuildConfigurations(
            self.store, multi_config=multi_config
        )

        # Multi-config generators start out with the default set
        if multi_config and not self.configurations.is_populated:
            self.configurations.reset()

        self._load_environment()

    @property
    def current_directory(self) -> Path:
        return self.store.current_directory

    def _cache_path(self) -> Path:
        """Get the path to the cache file."""
        return self.build_dir / self._cache_file

    def _load_cache(self) -> MemoryScopeStore:
        """Load the store from the cache file if it exists."""
        cache_path = self._cache_path()
        if cache_path.exists():
            try:
                return load_cache(
                    cache_path, current_directory=self._current_directory
                )
            except (ValueError, OSError, ConfigurationError) as e:
                logger.warning("Ignoring unreadable cache %s: %s", cache_path, e)
        return MemoryScopeStore(current_directory=self._current_directory)

    def _load_environment(self) -> None:
        """Apply BUILDSCOPE_BUILD_TYPE and BUILDSCOPE_VARS."""
        build_type = os.environ.get("BUILDSCOPE_BUILD_TYPE")
        if build_type:
            self.configurations.set_default(build_type)

        raw_vars = os.environ.get("BUILDSCOPE_VARS")
        if raw_vars:
            try:
                variables = json.loads(raw_vars)
            except json.JSONDecodeError:
                variables = {}
            if isinstance(variables, dict):
                for name, value in variables.items():
                    self.set_variable(name, value)

    def save(self, path: Path | None = None) -> None:
        """Save the store to the cache file.

        Args:
            path: Optional path override for cache file.
        """
        cache_path = path or self._cache_path()
        cache_path.parent.mkdir(parents=True, exist_ok=True)

        with open(cache_path, "w") as f:
            json.dump(self.store.to_dict(), f, indent=2, default=str)
            f.write("\n")
        logger.debug("Saved cache to %s", cache_path)

    def set(
        self,
        name: str,
        value: Any,
        *,
        cache_type: str = "STRING",
        doc: str | None = None,
    ) -> None:
        """Set a cache entry.

        Args:
            name: Cache entry name.
            value: Value to store.
            cache_type: Entry type (STRING, BOOL, PATH, FILEPATH, INTERNAL).
            doc: Optional help string.
        """
        scope = CacheScope(name)
        self.store.set(scope, VALUE, value)
        self.store.set(scope, "TYPE", cache_type)
        if doc is not None:
            self.store.set(scope, "HELPSTRING", doc)

    def get(self, name: str, default: Any = None) -> Any:
        """Get a cache entry's value.

        Args:
            name: Cache entry name.
            default: Default value if not set.

        Returns:
            The cached value or default.
        """
        value = self.store.get(CacheScope(name), VALUE)
        return default if value is None else value

    def set_variable(self, name: str, value: Any) -> None:
        """Set a variable in the variable namespace."""
        self.store.set(VariableScope(), name, value)

    def get_variable(self, name: str, default: Any = None) -> Any:
        """Get a variable from the variable namespace."""
        value = self.store.get(VariableScope(), name)
        return default if value is None else value

    def _reroot(self, path: Path, host: bool) -> list[Path]:
        """Apply find_root_path to a search location."""
        if host or not self.find_root_path:
            return [path]
        relative = path.relative_to(path.anchor) if path.is_absolute() else path
        return [root / relative for root in self.find_root_path]

    def find_program(
        self,
        name: str,
        *,
        hints: Sequence[Path | str] | None = None,
        version_flag: str | None = "--version",
        required: bool = False,
        cache_var: str | None = None,
        host: bool = False,
    ) -> ProgramInfo | None:
        """Find a program on the system.

        Searches for the program in:
        1. The cache entry, if it still points at an existing file
        2. Hint paths (if provided)
        3. PATH environment variable

        Args:
            name: Program name (e.g., 'git', 'clang-format').
            hints: Additional paths to search.
            version_flag: Flag to get version, or None to skip detection.
            required: If True, raise error if not found.
            cache_var: Cache entry to store the path in
                (default: program_cache_var(name)).
            host: Search the host even when find_root_path is set.

        Returns:
            ProgramInfo if found, None otherwise.

        Raises:
            ToolNotFoundError: If required and not found.
        """
        cache_var = cache_var or program_cache_var(name)
        scope = CacheScope(cache_var)

        # Check cache first
        cached = self.get(cache_var)
        if cached:
            path = Path(cached)
            if path.exists():
                version = self.store.get(scope, "VERSION")
                info = ProgramInfo(path=path, version=version)
                self._programs[name] = info
                return info

        found_path = self._search_program(name, hints, host)
        if found_path is None:
            if required:
                raise ToolNotFoundError(name, operation="find_program")
            logger.debug("Program %s not found", name)
            return None

        version = None
        if version_flag:
            version = self._get_program_version(found_path, version_flag)

        # Cache the result
        self.set(
            cache_var, str(found_path), cache_type="FILEPATH", doc=f"Path to {name}"
        )
        self.store.set(scope, "ADVANCED", True)
        if version is not None:
            self.store.set(scope, "VERSION", version)

        logger.debug("Found %s: %s", name, found_path)
        info = ProgramInfo(path=found_path, version=version)
        self._programs[name] = info
        return info

    def _search_program(
        self, name: str, hints: Sequence[Path | str] | None, host: bool
    ) -> Path | None:
        # Check hints first
        for hint in hints or []:
            for hint_path in self._reroot(Path(hint), host):
                if hint_path.is_file() and os.access(hint_path, os.X_OK):
                    return hint_path
                # Check if hint is a directory containing the program
                candidate = hint_path / name
                if os.name == "nt" and not candidate.suffix:
                    candidate = candidate.with_suffix(".exe")
                if candidate.is_file() and os.access(candidate, os.X_OK):
                    return candidate

        if host or not self.find_root_path:
            return self._which(name)

        path_env = os.environ.get("PATH", "")
        path_dirs = [Path(d) for d in path_env.split(os.pathsep) if d]
        rerooted = [str(p) for d in path_dirs for p in self._reroot(d, host)]
        return self._which(name, os.pathsep.join(rerooted))

    def _which(self, name: str, path: str | None = None) -> Path | None:
        """Find a program in PATH using shutil.which."""
        result = shutil.which(name, path=path)
        if result:
            return Path(result)
        return None

    def _get_program_version(self, path: Path, version_flag: str) -> str | None:
        """Try to get the version of a program."""
        try:
            result = self.runner.run(path, [version_flag])
        except BuildScopeError:
            return None
        if result.ok:
            # Return first non-empty line
            for line in result.stdout.split("\n"):
                line = line.strip()
                if line:
                    return line
        return None

    def find_path(
        self,
        var: str,
        names: Sequence[str],
        *,
        hints: Sequence[Path | str] | None = None,
        doc: str | None = None,
        host: bool = False,
    ) -> Path | None:
        """Find a directory containing one of the given files.

        Searches hints, then the include path environment variables
        (CPATH, C_INCLUDE_PATH, CPLUS_INCLUDE_PATH), then
        include_search_dirs. The result is cached in cache entry var.

        Args:
            var: Cache entry to store the directory in.
            names: Relative file names to look for (e.g. "gsl/gsl").
            hints: Directories to search first.
            doc: Help string for the cache entry.
            host: Search the host even when find_root_path is set.

        Returns:
            The directory, or None if not found.
        """
        cached = self.get(var)
        if cached and Path(cached).is_dir():
            return Path(cached)

        search_dirs: list[Path] = [Path(h) for h in hints or []]
        for env_var in INCLUDE_PATH_ENV_VARS:
            value = os.environ.get(env_var, "")
            search_dirs.extend(Path(d) for d in value.split(os.pathsep) if d)
        search_dirs.extend(self.include_search_dirs)

        for search_dir in search_dirs:
            for directory in self._reroot(search_dir, host):
                for file_name in names:
                    if (directory / file_name).exists():
                        self.set(var, str(directory), cache_type="PATH", doc=doc)
                        logger.debug("Found %s in %s", file_name, directory)
                        return directory
        return None

    def __repr__(self) -> str:
        return (
            f"Configure(build_dir={self.build_dir}, "
            f"configurations={self.configurations!r})"
        )


def load_cache(
    path: Path | str = f"build/{DEFAULT_CACHE_FILE}",
    *,
    current_directory: Path | str | None = None,
) -> MemoryScopeStore:
    """Load a saved cache into a new store.

    Args:
        path: Path to the cache file.
        current_directory: Current directory for the new store.

    Returns:
        The loaded MemoryScopeStore.

    Raises:
        FileNotFoundError: If cache file doesn't exist.
        ConfigurationError: If the file is not a saved store.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Cache file not found: {path}")

    with open(path) as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ConfigurationError(f"malformed cache file: {path}")
    return MemoryScopeStore.from_dict(data, current_directory=current_directory)
