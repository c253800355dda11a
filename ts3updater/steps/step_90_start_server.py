from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from ..lib.service import start_server
from ..pipeline import UpdateCtx

logger = logging.getLogger(__name__)


class StartServerStep:
    step_id = "90_start_server"

    def run(self, ctx: UpdateCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        # A server that was running before the update is always brought back.
        if ctx.options.dont_start and not state.get("server_was_running"):
            logger.info("Not starting the server (--dont-start)")
            return state

        start_server(Path(state["install_dir"]), ctx.cfg.start_script, ctx.options.passthrough)
        return state
