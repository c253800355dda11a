"""Pytest configuration and fixtures."""

import sys
import tempfile
from pathlib import Path

import pytest

from tests.helpers import METADATA_URL, PublishedRelease
from ts3updater.config import UpdaterConfig


@pytest.fixture
def release(tmp_path: Path):
    """Factory for published releases: release("3.13.7")."""

    def make(version: str) -> PublishedRelease:
        return PublishedRelease(tmp_path, version)

    return make


@pytest.fixture
def base_dir(tmp_path: Path) -> Path:
    d = tmp_path / "srv"
    d.mkdir()
    return d


@pytest.fixture
def scratch_tmp(tmp_path: Path, monkeypatch) -> Path:
    """Redirect tempfile so tests can assert the working directory was removed."""

    d = tmp_path / "tmp"
    d.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(d))
    return d


@pytest.fixture
def cfg(base_dir: Path) -> UpdaterConfig:
    return UpdaterConfig(
        raw={
            "metadata_url": METADATA_URL,
            "install_dir": str(base_dir),
            "archive_name": "teamspeak.tar",
            "checksum_tools": ["hashlib"],
        }
    )


@pytest.fixture
def linux_x86_64(monkeypatch):
    monkeypatch.setattr("platform.system", lambda: "Linux")
    monkeypatch.setattr("platform.machine", lambda: "x86_64")


@pytest.fixture
def entry_script(tmp_path: Path, monkeypatch) -> Path:
    script = tmp_path / "bin" / "ts3updater"
    script.parent.mkdir()
    script.write_text("#!/bin/sh\n")
    monkeypatch.setattr(sys, "argv", [str(script)])
    return script
