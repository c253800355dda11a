from __future__ import annotations

import logging
from typing import Any, Dict

from ..pipeline import UpdateCtx, halt

logger = logging.getLogger(__name__)


class CompareVersionsStep:
    step_id = "50_compare_versions"

    def run(self, ctx: UpdateCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        current = state["installed_version"]
        new = state["release"].version

        if current == new:
            logger.info("The installed server is up-to-date. Version: %s", current)
            return halt(state, "up_to_date")

        logger.info("New version available: %s", new)
        if ctx.options.check_only:
            return halt(state, "check_only")
        return state
