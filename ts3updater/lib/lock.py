from __future__ import annotations

import fcntl
import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from ..errors import UpdateInProgress

logger = logging.getLogger(__name__)


@contextmanager
def install_lock(directory: Path) -> Iterator[Path]:
    """Hold an exclusive advisory lock on directory for the duration of the block.

    The lock is taken on a read-only descriptor of the directory itself, so
    nothing is written into it.
    """

    fd = os.open(str(directory), os.O_RDONLY)
    try:
        try:
            fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
        except BlockingIOError as e:
            raise UpdateInProgress(f"Another update is already running in {directory}") from e
        logger.debug("Lock acquired: %s", directory)
        try:
            yield directory
        finally:
            fcntl.flock(fd, fcntl.LOCK_UN)
            logger.debug("Lock released: %s", directory)
    finally:
        os.close(fd)
