# SPDX-License-Identifier: MIT
"""Tests for buildscope.configure.config."""

import json
from pathlib import Path

import pytest

from buildscope.configure.config import (
    DEFAULT_CACHE_FILE,
    Configure,
    ProgramInfo,
    load_cache,
    program_cache_var,
)
from buildscope.core.configurations import BUILD_TYPE, CONFIGURATION_TYPES
from buildscope.core.errors import ConfigurationError, ToolError, ToolNotFoundError
from buildscope.core.scope import (
    CacheScope,
    DirectoryScope,
    TargetScope,
    VariableScope,
)


class TestProgramCacheVar:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("git", "GIT_EXECUTABLE"),
            ("clang-format", "CLANG_FORMAT_EXECUTABLE"),
            ("python3.12", "PYTHON3_12_EXECUTABLE"),
        ],
    )
    def test_names(self, name, expected):
        assert program_cache_var(name) == expected


class TestProgramInfo:
    def test_creation(self):
        info = ProgramInfo(path=Path("/usr/bin/gcc"))
        assert info.path == Path("/usr/bin/gcc")
        assert info.version is None


class TestConfigure:
    def test_creation(self, tmp_path):
        config = Configure(build_dir=tmp_path, current_directory=tmp_path)
        assert config.build_dir == tmp_path
        assert config.current_directory == tmp_path
        assert not config.configurations.multi_config

    def test_set_get(self, config):
        config.set("MY_VAR", "value", doc="Something")
        assert config.get("MY_VAR") == "value"
        assert config.store.get(CacheScope("MY_VAR"), "TYPE") == "STRING"
        assert config.store.get(CacheScope("MY_VAR"), "HELPSTRING") == "Something"

    def test_get_default(self, config):
        assert config.get("MISSING", "default") == "default"

    def test_variables(self, config):
        config.set_variable("VERSION", "1.0")
        assert config.get_variable("VERSION") == "1.0"
        assert config.get_variable("MISSING", 7) == 7

    def test_multi_config_seeds_defaults(self, tmp_path):
        config = Configure(
            build_dir=tmp_path, current_directory=tmp_path, multi_config=True
        )
        assert config.configurations.get() == [
            "Debug",
            "Release",
            "MinSizeRel",
            "RelWithDebInfo",
        ]

    def test_repr(self, config):
        assert "Configure(build_dir=" in repr(config)


class TestCache:
    def test_save_and_reload(self, tmp_path):
        config = Configure(build_dir=tmp_path, current_directory=tmp_path)
        config.set("MY_VAR", "value")
        config.store.set(DirectoryScope(), "LABELS", ["top"])
        config.configurations.set(["Debug", "Profile"])
        config.save()

        assert (tmp_path / DEFAULT_CACHE_FILE).exists()

        reloaded = Configure(build_dir=tmp_path, current_directory=tmp_path)
        assert reloaded.get("MY_VAR") == "value"
        assert reloaded.store.get(DirectoryScope(), "LABELS") == ["top"]
        assert reloaded.configurations.get() == ["Debug", "Profile"]

    def test_save_creates_build_dir(self, tmp_path):
        build_dir = tmp_path / "out" / "build"
        config = Configure(build_dir=build_dir, current_directory=tmp_path)
        config.save()
        assert (build_dir / DEFAULT_CACHE_FILE).exists()

    def test_save_path_override(self, tmp_path):
        config = Configure(build_dir=tmp_path, current_directory=tmp_path)
        config.set("X", "1")
        other = tmp_path / "other.json"
        config.save(other)
        data = json.loads(other.read_text())
        assert data["properties"]["CACHE:X"]["VALUE"] == "1"

    def test_corrupt_cache_ignored(self, tmp_path, caplog):
        (tmp_path / DEFAULT_CACHE_FILE).write_text("{not json")
        config = Configure(build_dir=tmp_path, current_directory=tmp_path)
        assert config.get("ANYTHING") is None
        assert "Ignoring unreadable cache" in caplog.text

    def test_load_cache_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_cache(tmp_path / "missing.json")

    def test_load_cache_not_a_dict(self, tmp_path):
        path = tmp_path / "cache.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigurationError, match="malformed cache file"):
            load_cache(path)

    def test_load_cache(self, tmp_path):
        path = tmp_path / "cache.json"
        path.write_text(
            json.dumps({"properties": {"TARGET:app": {"TYPE": "EXECUTABLE"}}})
        )
        store = load_cache(path, current_directory=tmp_path)
        assert store.get(TargetScope("app"), "TYPE") == "EXECUTABLE"


class TestEnvironment:
    def test_build_type(self, tmp_path, monkeypatch):
        monkeypatch.setenv("BUILDSCOPE_BUILD_TYPE", "Release")
        config = Configure(build_dir=tmp_path, current_directory=tmp_path)
        assert config.configurations.selected == "Release"

    def test_build_type_does_not_override_cache(self, tmp_path, monkeypatch):
        config = Configure(build_dir=tmp_path, current_directory=tmp_path)
        config.set(BUILD_TYPE.name, "Debug")
        config.save()

        monkeypatch.setenv("BUILDSCOPE_BUILD_TYPE", "Release")
        reloaded = Configure(build_dir=tmp_path, current_directory=tmp_path)
        assert reloaded.configurations.selected == "Debug"

    def test_build_type_ignored_for_multi_config(self, tmp_path, monkeypatch):
        monkeypatch.setenv("BUILDSCOPE_BUILD_TYPE", "Release")
        config = Configure(
            build_dir=tmp_path, current_directory=tmp_path, multi_config=True
        )
        assert config.configurations.selected is None
        assert config.store.get(CONFIGURATION_TYPES, "VALUE")

    def test_vars(self, tmp_path, monkeypatch):
        monkeypatch.setenv("BUILDSCOPE_VARS", '{"PORT": "linux", "LEVEL": 3}')
        config = Configure(build_dir=tmp_path, current_directory=tmp_path)
        assert config.get_variable("PORT") == "linux"
        assert config.get_variable("LEVEL") == 3

    def test_malformed_vars_ignored(self, tmp_path, monkeypatch):
        monkeypatch.setenv("BUILDSCOPE_VARS", "not json")
        config = Configure(build_dir=tmp_path, current_directory=tmp_path)
        assert config.store.keys(VariableScope()) == []


class TestFindProgram:
    def test_not_found(self, config):
        assert config.find_program("nonexistent_program_12345") is None

    def test_not_found_required(self, config):
        with pytest.raises(ToolNotFoundError) as exc_info:
            config.find_program("nonexistent_program_12345", required=True)
        assert exc_info.value.operation == "find_program"

    def test_found_on_path(self, config, make_tool, runner):
        tool = make_tool("mytool")

        info = config.find_program("mytool")

        assert info is not None
        assert info.path == tool
        assert info.version == "tool 1.0"
        runner.run.assert_called_once_with(tool, ["--version"])
        assert config.get("MYTOOL_EXECUTABLE") == str(tool)
        scope = CacheScope("MYTOOL_EXECUTABLE")
        assert config.store.get(scope, "TYPE") == "FILEPATH"
        assert config.store.get(scope, "ADVANCED") is True
        assert config.store.get(scope, "VERSION") == "tool 1.0"

    def test_skip_version(self, config, make_tool, runner):
        make_tool("mytool")
        info = config.find_program("mytool", version_flag=None)
        assert info is not None
        assert info.version is None
        runner.run.assert_not_called()

    def test_version_failure(self, config, make_tool, runner):
        make_tool("mytool")
        runner.run.side_effect = ToolError("boom")
        info = config.find_program("mytool")
        assert info is not None
        assert info.version is None

    def test_version_probe_tool_vanished(self, config, make_tool, runner):
        make_tool("mytool")
        runner.run.side_effect = ToolNotFoundError("mytool")
        info = config.find_program("mytool")
        assert info is not None
        assert info.version is None

    def test_hint_directory(self, config, make_tool, tmp_path):
        tool = make_tool("mytool", tmp_path / "hints")
        info = config.find_program("mytool", hints=[tmp_path / "hints"])
        assert info is not None
        assert info.path == tool

    def test_hint_file(self, config, make_tool, tmp_path):
        tool = make_tool("mytool-9", tmp_path / "hints")
        info = config.find_program("mytool", hints=[tool])
        assert info is not None
        assert info.path == tool

    def test_custom_cache_var(self, config, make_tool):
        tool = make_tool("mytool")
        config.find_program("mytool", cache_var="MY_TOOL")
        assert config.get("MY_TOOL") == str(tool)

    def test_cached_path_reused(self, config, make_tool, tmp_path, runner):
        tool = make_tool("elsewhere", tmp_path / "opt")
        config.set("MYTOOL_EXECUTABLE", str(tool))

        info = config.find_program("mytool")

        assert info is not None
        assert info.path == tool
        runner.run.assert_not_called()

    def test_stale_cache_searches_again(self, config, make_tool, tmp_path):
        config.set("MYTOOL_EXECUTABLE", str(tmp_path / "gone"))
        tool = make_tool("mytool")
        info = config.find_program("mytool")
        assert info is not None
        assert info.path == tool

    def test_find_root_path(self, config, make_tool, tmp_path, monkeypatch):
        sysroot = tmp_path / "sysroot"
        tool = make_tool("mytool", sysroot / "usr" / "bin")
        monkeypatch.setenv("PATH", "/usr/bin")
        config.find_root_path = [sysroot]

        info = config.find_program("mytool")

        assert info is not None
        assert info.path == tool

    def test_host_ignores_find_root_path(self, config, make_tool, tmp_path):
        tool = make_tool("mytool")
        config.find_root_path = [tmp_path / "sysroot"]

        assert config.find_program("mytool", host=True).path == tool
        config.set("MYTOOL_EXECUTABLE", None)
        assert config.find_program("mytool") is None


class TestFindPath:
    def test_found_in_hint(self, config, tmp_path):
        include = tmp_path / "include"
        (include / "gsl").mkdir(parents=True)
        (include / "gsl" / "gsl").write_text("")

        found = config.find_path("GSL_INCLUDE_DIR", ["gsl/gsl"], hints=[include])

        assert found == include
        assert config.get("GSL_INCLUDE_DIR") == str(include)
        assert config.store.get(CacheScope("GSL_INCLUDE_DIR"), "TYPE") == "PATH"

    def test_any_name_matches(self, config, tmp_path):
        include = tmp_path / "include"
        include.mkdir()
        (include / "b.h").write_text("")
        assert config.find_path("X_DIR", ["a.h", "b.h"], hints=[include]) == include

    def test_not_found(self, config, tmp_path):
        assert config.find_path("X_DIR", ["missing.h"], hints=[tmp_path]) is None
        assert config.get("X_DIR") is None

    def test_env_include_path(self, config, tmp_path, monkeypatch):
        include = tmp_path / "env_include"
        include.mkdir()
        (include / "catch.hpp").write_text("")
        monkeypatch.setenv("CPLUS_INCLUDE_PATH", str(include))

        assert config.find_path("CATCH_DIR", ["catch.hpp"]) == include

    def test_include_search_dirs(self, config, tmp_path):
        include = tmp_path / "system"
        include.mkdir()
        (include / "foo.h").write_text("")
        config.include_search_dirs = [include]

        assert config.find_path("FOO_DIR", ["foo.h"]) == include

    def test_cached(self, config, tmp_path):
        config.set("FOO_DIR", str(tmp_path))
        assert config.find_path("FOO_DIR", ["never.h"]) == tmp_path

    def test_find_root_path(self, config, tmp_path):
        sysroot = tmp_path / "sysroot"
        (sysroot / "usr" / "include").mkdir(parents=True)
        (sysroot / "usr" / "include" / "foo.h").write_text("")
        config.include_search_dirs = [Path("/usr/include")]
        config.find_root_path = [sysroot]

        assert config.find_path("FOO_DIR", ["foo.h"]) == sysroot / "usr" / "include"
