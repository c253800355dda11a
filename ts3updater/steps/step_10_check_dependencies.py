from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.capabilities import detect_capabilities
from ..pipeline import UpdateCtx

logger = logging.getLogger(__name__)


class CheckDependenciesStep:
    step_id = "10_check_dependencies"

    def run(self, ctx: UpdateCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        caps = detect_capabilities(ctx.cfg.required_tools, ctx.cfg.checksum_tools)
        state["capabilities"] = caps.to_dict()
        return state
