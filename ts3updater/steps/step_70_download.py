from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from ..lib.net import download_from_mirrors
from ..pipeline import UpdateCtx

logger = logging.getLogger(__name__)


class DownloadStep:
    step_id = "70_download"

    def run(self, ctx: UpdateCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        release = state["release"]
        state["downloaded_from"] = download_from_mirrors(
            ctx.session,
            release.mirror_urls,
            Path(state["archive"]),
            timeout=ctx.cfg.http_timeout,
            retries=ctx.cfg.http_retries,
        )
        return state
