from __future__ import annotations

import logging
from typing import Any, Dict

from ..errors import NetworkFailure
from ..lib.net import fetch_json
from ..pipeline import UpdateCtx
from ..release import release_from_document

logger = logging.getLogger(__name__)


class FetchMetadataStep:
    step_id = "30_fetch_metadata"

    def run(self, ctx: UpdateCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        url = ctx.cfg.metadata_url
        document = fetch_json(ctx.session, url, timeout=ctx.cfg.http_timeout)
        try:
            release = release_from_document(document, state["platform_key"])
        except NetworkFailure as e:
            raise NetworkFailure(f"Unable to get server.json from {url}: {e}") from e

        logger.info("Downloading information from %s was successful.", url)
        state["release"] = release
        state["remote"] = release.to_dict()
        return state
