from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.platform_key import resolve_platform_key
from ..pipeline import UpdateCtx

logger = logging.getLogger(__name__)


class ResolvePlatformStep:
    step_id = "20_resolve_platform"

    def run(self, ctx: UpdateCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        state["platform_key"] = resolve_platform_key()
        logger.info("Platform key: %s", state["platform_key"])
        return state
