from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# Never equal to a version published in the metadata document.
NOT_INSTALLED = "-1"


def scan_logs_for_version(install_dir: Path, log_glob: str, version: str) -> Optional[str]:
    """Return the version token of the first "Server <version>" log line, if any.

    Matching is case-insensitive and whole-word. The server logs its version
    at startup, so a match means the running build is that version.
    """

    pattern = re.compile(r"(?<!\w)server (%s)(?!\w)" % re.escape(version), re.IGNORECASE)
    for path in sorted(install_dir.glob(log_glob)):
        if not path.is_file():
            continue
        try:
            with open(path, encoding="utf-8", errors="replace") as f:
                for line in f:
                    m = pattern.search(line)
                    if m:
                        logger.debug("Version %s found in %s", m.group(1), path)
                        return m.group(1)
        except OSError as e:
            logger.warning("Could not read log file %s: %s", path, e)
    return None


def detect_installed_version(
    install_dir: Path,
    *,
    manifest_version: Optional[str],
    changelog_file: str,
    log_glob: str,
    new_version: str,
) -> str:
    """Best-effort installed version.

    The manifest written after each install wins. Installations made before the
    manifest existed are recognised by their CHANGELOG and log history.
    """

    if manifest_version:
        return manifest_version
    if (install_dir / changelog_file).exists():
        return scan_logs_for_version(install_dir, log_glob, new_version) or ""
    return NOT_INSTALLED
