"""Tests for metadata narrowing and parsing."""

import pytest

from ts3updater.errors import NetworkFailure
from ts3updater.release import parse_release, release_from_document, select_platform

DOC = {
    "linux": {
        "x86_64": {
            "version": "3.13.7",
            "mirrors": {"b-mirror": "https://b/ts.tar.bz2", "a-mirror": "https://a/ts.tar.bz2"},
            "checksum": "ABCDEF" + "0" * 58,
        },
        "x86": {"version": "3.13.7", "mirrors": {}, "checksum": "00"},
    },
    "macos": {"version": "3.13.7", "mirrors": {"m": "https://m/ts.tar.bz2"}, "checksum": "11"},
}


def test_select_platform_follows_dotted_key() -> None:
    assert select_platform(DOC, "linux.x86")["checksum"] == "00"
    assert select_platform(DOC, "macos")["checksum"] == "11"


@pytest.mark.parametrize("key", ["freebsd.x86_64", "linux.arm64", "macos.x86_64"])
def test_missing_platform_is_a_network_failure(key: str) -> None:
    with pytest.raises(NetworkFailure):
        select_platform(DOC, key)


def test_mirror_order_is_preserved() -> None:
    release = release_from_document(DOC, "linux.x86_64")
    assert release.mirror_urls == ["https://b/ts.tar.bz2", "https://a/ts.tar.bz2"]
    assert [name for name, _ in release.mirrors] == ["b-mirror", "a-mirror"]


def test_checksum_is_lowercased() -> None:
    release = release_from_document(DOC, "linux.x86_64")
    assert release.checksum == "abcdef" + "0" * 58


@pytest.mark.parametrize(
    "entry",
    [
        {"mirrors": {}, "checksum": "00"},
        {"version": "1", "checksum": "00"},
        {"version": "1", "mirrors": ["https://a"], "checksum": "00"},
        {"version": "1", "mirrors": {}},
    ],
)
def test_incomplete_entries_are_rejected(entry) -> None:
    with pytest.raises(NetworkFailure):
        parse_release(entry)


def test_to_dict() -> None:
    release = release_from_document(DOC, "macos")
    assert release.to_dict() == {"version": "3.13.7", "mirrors": {"m": "https://m/ts.tar.bz2"}, "checksum": "11"}
