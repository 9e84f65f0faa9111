# SPDX-License-Identifier: MIT
"""Shared fixtures for buildscope tests."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from buildscope.configure.config import Configure
from buildscope.util.process import ProcessResult, ProcessRunner

ENVIRONMENT_VARS = (
    "BUILDSCOPE_BUILD_DIR",
    "BUILDSCOPE_BUILD_TYPE",
    "BUILDSCOPE_VARS",
    "CPATH",
    "C_INCLUDE_PATH",
    "CPLUS_INCLUDE_PATH",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the caller's environment out of every test."""
    for name in ENVIRONMENT_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def bin_dir(tmp_path: Path, monkeypatch) -> Path:
    """An empty directory that is the whole of PATH."""
    path = tmp_path / "bin"
    path.mkdir()
    monkeypatch.setenv("PATH", str(path))
    return path


@pytest.fixture
def make_tool(bin_dir: Path) -> Callable[..., Path]:
    """Factory for fake executables on PATH."""
    if os.name == "nt":
        pytest.skip("Fake shell-script tools are POSIX only")

    def make(name: str, directory: Path | None = None) -> Path:
        tool = (directory or bin_dir) / name
        tool.parent.mkdir(parents=True, exist_ok=True)
        tool.write_text(f"#!/bin/sh\necho '{name} 1.0'\n")
        tool.chmod(0o755)
        return tool

    return make


@pytest.fixture
def runner() -> MagicMock:
    """A ProcessRunner that never starts a process."""
    mock = MagicMock(spec=ProcessRunner)
    mock.run.return_value = ProcessResult(stdout="tool 1.0\n", stderr="", returncode=0)
    return mock


@pytest.fixture
def config(tmp_path: Path, bin_dir: Path, runner: MagicMock) -> Configure:
    """A Configure context in tmp_path with an empty PATH."""
    cfg = Configure(
        build_dir=tmp_path / "build",
        current_directory=tmp_path,
        runner=runner,
    )
    cfg.include_search_dirs = []
    return cfg
