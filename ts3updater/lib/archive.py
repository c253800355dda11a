from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from ..errors import InstallPathConflict
from .command import run_cmd

logger = logging.getLogger(__name__)


def list_members(archive: Path, *, tar: str = "tar") -> List[str]:
    r = run_cmd([tar, "-tf", str(archive)])
    return [ln for ln in r.stdout.splitlines() if ln.strip()]


def top_level_dir(members: List[str]) -> str:
    """First path segment of the first entry that contains a separator."""

    for name in members:
        if "/" in name:
            top = name.split("/", 1)[0]
            if top not in ("", "."):
                return top
    raise InstallPathConflict("Archive is not rooted under a single top-level directory")


def read_member(archive: Path, member: str, *, tar: str = "tar") -> str:
    # Undecodable bytes are replaced so a stray byte in LICENSE cannot abort the prompt.
    return run_cmd([tar, "-xOf", str(archive), member], errors="replace").stdout


def extract_stripped(archive: Path, top_dir: str, dest: Path, *, tar: str = "tar") -> None:
    """Extract top_dir from the archive into dest, dropping the top_dir level."""

    dest.mkdir(parents=True, exist_ok=True)
    run_cmd([tar, "--strip-components", "1", "-xf", str(archive), "-C", str(dest), top_dir])
    logger.info("Extracted %s into %s", archive.name, dest)
