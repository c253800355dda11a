"""Tests for the updater configuration."""

from pathlib import Path

import pytest

from ts3updater.config import DEFAULT_METADATA_URL, UpdaterConfig, load_config
from ts3updater.errors import ConfigError


def test_defaults() -> None:
    cfg = load_config(None)
    assert cfg.metadata_url == DEFAULT_METADATA_URL
    assert cfg.install_dir == Path(".")
    assert cfg.archive_name == "teamspeak.tar.bz2"
    assert cfg.required_tools == ["tar"]
    assert cfg.checksum_tools == ["sha256sum", "shasum", "sha256", "hashlib"]
    assert cfg.http_timeout == 60
    assert cfg.http_retries == 0
    assert cfg.user_agent.startswith("ts3updater/")


def test_load_yaml(tmp_path: Path) -> None:
    p = tmp_path / "updater.yaml"
    p.write_text("install_dir: /srv/ts3\nhttp:\n  timeout: 5\n  retries: 2\nchecksum_tools: [hashlib]\n")
    cfg = load_config(str(p))
    assert cfg.install_dir == Path("/srv/ts3")
    assert cfg.http_timeout == 5
    assert cfg.http_retries == 2
    assert cfg.checksum_tools == ["hashlib"]


def test_overrides_skip_none() -> None:
    cfg = UpdaterConfig(raw={"install_dir": "/a"})
    assert cfg.with_overrides(install_dir=None).install_dir == Path("/a")
    assert cfg.with_overrides(install_dir="/b").install_dir == Path("/b")


@pytest.mark.parametrize(
    ("name", "text"),
    [
        ("updater.yaml", "- just\n- a list\n"),
        ("updater.yaml", "key: [unclosed\n"),
        ("updater.json", "{}"),
    ],
)
def test_invalid_config(tmp_path: Path, name: str, text: str) -> None:
    p = tmp_path / name
    p.write_text(text)
    with pytest.raises(ConfigError):
        load_config(str(p))


def test_missing_config(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_config(str(tmp_path / "missing.yaml"))
