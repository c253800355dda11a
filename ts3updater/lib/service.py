from __future__ import annotations

import logging
import shutil
import sys
from pathlib import Path
from typing import Optional, Sequence

from .command import run_cmd

logger = logging.getLogger(__name__)


def is_installed(install_dir: Path, start_script: str) -> bool:
    return (install_dir / start_script).exists()


def is_running(install_dir: Path, pid_file: str) -> bool:
    # The start script removes the pid file on a clean stop.
    return (install_dir / pid_file).exists()


def stop_server(install_dir: Path, start_script: str) -> None:
    logger.info("Stopping server")
    run_cmd([f"./{start_script}", "stop"], cwd=str(install_dir))


def start_server(install_dir: Path, start_script: str, args: Sequence[str] = ()) -> None:
    logger.info("Starting server")
    r = run_cmd([f"./{start_script}", "start", *args], cwd=str(install_dir))
    if r.stdout.strip():
        logger.info("%s", r.stdout.strip())


def entry_script(entry: Optional[str] = None) -> Optional[Path]:
    """The updater's own launcher file, or None when it cannot be copied.

    Under ``python -m ts3updater`` argv[0] is the package's __main__.py,
    which is not a standalone launcher.
    """

    src = Path(entry if entry is not None else sys.argv[0])
    if not src.is_file() or src.name == "__main__.py":
        return None
    return src


def entry_install_dir(start_script: str, entry: Optional[str] = None) -> Optional[Path]:
    """Directory of the entry script when it sits inside a server installation."""

    src = entry_script(entry)
    if src is None:
        return None
    home = src.resolve().parent
    return home if is_installed(home, start_script) else None


def copy_entry_script(dest_dir: Path, entry: Optional[str] = None) -> Optional[Path]:
    """Copy the running updater entry script into dest_dir, if it is a launcher file."""

    src = entry_script(entry)
    if src is None:
        logger.debug("Entry point %s is not a launcher file; not copying it", entry or sys.argv[0])
        return None
    out = dest_dir / src.name
    shutil.copy2(src, out)
    logger.info("Copied %s to %s", src, out)
    return out
