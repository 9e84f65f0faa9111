# SPDX-License-Identifier: MIT
"""Tests for buildscope.debug."""

import logging

from buildscope.core.scope import TargetScope
from buildscope.debug import dump_variables, watch_variables


class TestDumpVariables:
    def test_all_sorted(self, config, caplog):
        config.set_variable("ZETA", "z")
        config.set_variable("ALPHA", "a")

        with caplog.at_level(logging.INFO, logger="buildscope"):
            dumped = dump_variables(config)

        assert dumped == [("ALPHA", "a"), ("ZETA", "z")]
        assert "ALPHA = 'a'" in caplog.text

    def test_matching(self, config):
        config.set_variable("PROJECT_VERSION", "1.0")
        config.set_variable("PROJECT_NAME", "demo")
        config.set_variable("OTHER", "x")

        assert dump_variables(config, "VERSION") == [("PROJECT_VERSION", "1.0")]
        assert [name for name, _ in dump_variables(config, "^PROJECT_")] == [
            "PROJECT_NAME",
            "PROJECT_VERSION",
        ]

    def test_empty(self, config):
        assert dump_variables(config) == []


class TestWatchVariables:
    def test_logs_access(self, config, caplog):
        watch_variables(config, "^FOO$")

        with caplog.at_level(logging.INFO, logger="buildscope"):
            config.set_variable("FOO", "1")
            config.get_variable("FOO")
            config.set_variable("FOOBAR", "2")
            config.store.set(TargetScope("FOO"), "FOO", "3")

        assert "ACCESS(WRITE): FOO = '1'" in caplog.text
        assert "ACCESS(READ): FOO = '1'" in caplog.text
        assert "FOOBAR" not in caplog.text
        assert "'3'" not in caplog.text

    def test_remove(self, config, caplog):
        watcher = watch_variables(config)
        config.store.remove_watcher(watcher)

        with caplog.at_level(logging.INFO, logger="buildscope"):
            config.set_variable("FOO", "1")

        assert "ACCESS" not in caplog.text
