from __future__ import annotations

import hashlib
import logging
import re
from pathlib import Path
from typing import Callable, Dict, Sequence

from ..errors import ChecksumMismatch, DependencyMissing
from .command import CommandError, run_cmd, which

logger = logging.getLogger(__name__)

HASHLIB = "hashlib"

_HEX64 = re.compile(r"^[0-9a-fA-F]{64}$")


def sha256_of_file(path: Path) -> str:
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(65536), b""):
            h.update(chunk)
    return h.hexdigest()


def _sha256sum(path: Path) -> str:
    return run_cmd(["sha256sum", str(path)]).stdout[:64]


def _shasum(path: Path) -> str:
    return run_cmd(["shasum", "-a", "256", str(path)]).stdout[:64]


def _sha256(path: Path) -> str:
    return run_cmd(["sha256", "-q", str(path)]).stdout.strip()


_STRATEGIES: Dict[str, Callable[[Path], str]] = {
    "sha256sum": _sha256sum,
    "shasum": _shasum,
    "sha256": _sha256,
    HASHLIB: sha256_of_file,
}


def select_strategy(candidates: Sequence[str]) -> str:
    """Pick the first usable checksum tool, in priority order."""

    unknown = [c for c in candidates if c not in _STRATEGIES]
    if unknown:
        raise DependencyMissing(f"Unknown checksum tool(s): {', '.join(unknown)}")

    for name in candidates:
        if name == HASHLIB or which(name):
            logger.debug("Checksum strategy: %s", name)
            return name

    raise DependencyMissing(
        "Could not generate SHA256 hash. Please make sure at least one of these commands is available: "
        + ", ".join(candidates)
    )


def compute_sha256(path: Path, strategy: str) -> str:
    try:
        digest = _STRATEGIES[strategy](path)
    except (CommandError, OSError) as e:
        raise ChecksumMismatch(f"Could not generate SHA256 hash with {strategy}: {e}") from e

    if not _HEX64.match(digest):
        raise ChecksumMismatch(f"Could not generate SHA256 hash with {strategy}: unexpected output {digest!r}")
    return digest.lower()


def verify_sha256(path: Path, expected: str, strategy: str) -> str:
    actual = compute_sha256(path, strategy)
    if actual != expected.strip().lower():
        raise ChecksumMismatch(
            f"Checksum of downloaded file is incorrect! expected={expected.lower()} actual={actual}"
        )
    logger.info("Checksum is OK")
    return actual
