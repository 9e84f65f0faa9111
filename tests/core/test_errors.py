# SPDX-License-Identifier: MIT
"""Tests for buildscope.core.errors."""

from buildscope.core.errors import (
    BuildScopeError,
    ConfigurationError,
    InvalidConfigurationError,
    PropertyCountMismatchError,
    ToolError,
    ToolNotFoundError,
)


class TestBuildScopeError:
    def test_message_only(self):
        err = BuildScopeError("something went wrong")
        assert str(err) == "something went wrong"
        assert err.operation is None

    def test_with_operation(self):
        err = BuildScopeError("source not specified", "copy_properties")
        assert str(err) == "copy_properties: source not specified"
        assert err.message == "source not specified"


class TestPropertyCountMismatchError:
    def test_more_source(self):
        err = PropertyCountMismatchError(3, 1, "map_properties")
        assert isinstance(err, ConfigurationError)
        assert "more source properties than destination properties" in str(err)
        assert "(3 > 1)" in str(err)

    def test_more_destination(self):
        err = PropertyCountMismatchError(1, 2)
        assert "more destination properties than source properties" in str(err)
        assert "(2 > 1)" in str(err)


class TestInvalidConfigurationError:
    def test_message(self):
        err = InvalidConfigurationError("Rel", ["Debug", "Release"])
        assert str(err) == (
            "invalid build type specified 'Rel'. Valid types are 'Debug;Release'"
        )
        assert err.value == "Rel"
        assert err.valid == ["Debug", "Release"]
        assert not isinstance(err, ConfigurationError)


class TestToolErrors:
    def test_tool_not_found(self):
        err = ToolNotFoundError("ccache", "enable_ccache")
        assert isinstance(err, ConfigurationError)
        assert str(err) == "enable_ccache: ccache not found"
        assert err.tool == "ccache"

    def test_tool_error(self):
        err = ToolError("failed", "git_sha1", returncode=128, stderr="fatal")
        assert err.returncode == 128
        assert err.stderr == "fatal"
        assert isinstance(err, BuildScopeError)
