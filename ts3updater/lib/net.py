from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Sequence

import requests

from ..errors import NetworkFailure

logger = logging.getLogger(__name__)

CHUNK_SIZE = 65536


def build_session(user_agent: str) -> requests.Session:
    sess = requests.Session()
    sess.headers.update({"User-Agent": user_agent})
    return sess


def fetch_json(session: requests.Session, url: str, *, timeout: float) -> Any:
    """GET a JSON document, following redirects."""

    try:
        resp = session.get(url, timeout=timeout, allow_redirects=True)
        resp.raise_for_status()
        return resp.json()
    except (requests.RequestException, ValueError) as e:
        raise NetworkFailure(f"Unable to get {url}: {e}") from e


def download_file(session: requests.Session, url: str, dest: Path, *, timeout: float) -> None:
    """Stream url into dest. A partial file is removed on failure."""

    try:
        with session.get(url, stream=True, timeout=timeout, allow_redirects=True) as r:
            r.raise_for_status()
            with open(dest, "wb") as f:
                for chunk in r.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
    except (requests.RequestException, OSError):
        dest.unlink(missing_ok=True)
        raise


def download_from_mirrors(
    session: requests.Session,
    urls: Sequence[str],
    dest: Path,
    *,
    timeout: float,
    retries: int = 0,
) -> str:
    """Try each mirror in order until one download succeeds; return its URL."""

    for url in urls:
        for attempt in range(retries + 1):
            logger.info("Downloading the file %s", url)
            try:
                download_file(session, url, dest, timeout=timeout)
            except (requests.RequestException, OSError) as e:
                logger.warning("Download from %s failed (attempt %d): %s", url, attempt + 1, e)
                continue
            if dest.is_file():
                logger.info("File saved as %s", dest)
                return url

    raise NetworkFailure(f"Download failed from all mirrors ({len(urls)} tried)")
