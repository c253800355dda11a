"""Shared test helpers: release archives and a canned HTTP session."""

import hashlib
import io
import json
import shutil
import tarfile
from pathlib import Path

import pytest
import requests

TOP_DIR = "teamspeak3-server_linux_amd64"
METADATA_URL = "https://metadata.example.test/versions/server.json"
MIRROR_1 = "https://mirror-1.example.test/teamspeak.tar"
MIRROR_2 = "https://mirror-2.example.test/teamspeak.tar"
LICENSE_TEXT = "TEAMSPEAK SERVER LICENSE AGREEMENT\n"

START_SCRIPT = """#!/bin/sh
cd "$(dirname "$0")"
echo "$@" >> calls.log
case "$1" in
    start) echo 1234 > ts3server.pid ;;
    stop) rm -f ts3server.pid ;;
esac
"""

requires_tar = pytest.mark.skipif(shutil.which("tar") is None, reason="tar executable not available")


def write_start_script(directory: Path) -> Path:
    script = directory / "ts3server_startscript.sh"
    script.write_text(START_SCRIPT)
    script.chmod(0o755)
    return script


def build_archive(path: Path, version: str, top_dir: str = TOP_DIR) -> bytes:
    """Write an uncompressed server release archive and return its bytes."""

    files = {
        "LICENSE": (LICENSE_TEXT, 0o644),
        "CHANGELOG": (f"## Server Release {version}\n", 0o644),
        "ts3server_startscript.sh": (START_SCRIPT, 0o755),
        "ts3server": (f"binary {version}\n", 0o755),
        "redist/libmariadb.so.2": ("lib\n", 0o644),
    }
    with tarfile.open(path, "w") as tf:
        d = tarfile.TarInfo(top_dir)
        d.type = tarfile.DIRTYPE
        d.mode = 0o755
        tf.addfile(d)
        r = tarfile.TarInfo(f"{top_dir}/redist")
        r.type = tarfile.DIRTYPE
        r.mode = 0o755
        tf.addfile(r)
        for name, (text, mode) in files.items():
            data = text.encode()
            info = tarfile.TarInfo(f"{top_dir}/{name}")
            info.size = len(data)
            info.mode = mode
            tf.addfile(info, io.BytesIO(data))
    return path.read_bytes()


def metadata_document(version: str, checksum: str, mirrors=None) -> dict:
    entry = {
        "version": version,
        "mirrors": mirrors if mirrors is not None else {"teamspeak.com": MIRROR_1, "4netplayers.de": MIRROR_2},
        "checksum": checksum,
    }
    return {
        "linux": {"x86": dict(entry), "x86_64": dict(entry)},
        "freebsd": {"x86": dict(entry), "x86_64": dict(entry)},
        "macos": dict(entry),
    }


class FakeResponse:
    def __init__(self, url, body=b"", status_code=200):
        self.url = url
        self.status_code = status_code
        self._body = body

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} for url {self.url}")

    def json(self):
        return json.loads(self._body.decode())

    def iter_content(self, chunk_size=1):
        for i in range(0, len(self._body), chunk_size):
            yield self._body[i : i + chunk_size]

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class FakeSession:
    """Serves canned bodies per URL; an exception instance is raised instead."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append(url)
        route = self.routes.get(url)
        if route is None:
            return FakeResponse(url, status_code=404)
        if isinstance(route, Exception):
            raise route
        if isinstance(route, FakeResponse):
            return route
        return FakeResponse(url, route)

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


class PublishedRelease:
    """A published release served by a FakeSession."""

    def __init__(self, tmp_path: Path, version: str):
        self.version = version
        self.archive_bytes = build_archive(tmp_path / f"release-{version}.tar", version)
        self.checksum = hashlib.sha256(self.archive_bytes).hexdigest()

    def session(self, *, checksum=None, mirrors=None, overrides=None) -> FakeSession:
        doc = metadata_document(self.version, checksum or self.checksum, mirrors)
        routes = {
            METADATA_URL: json.dumps(doc).encode(),
            MIRROR_1: self.archive_bytes,
            MIRROR_2: self.archive_bytes,
        }
        routes.update(overrides or {})
        return FakeSession(routes)


