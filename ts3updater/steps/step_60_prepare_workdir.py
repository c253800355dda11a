from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Any, Dict

from ..lib.lock import install_lock
from ..pipeline import UpdateCtx

logger = logging.getLogger(__name__)

WORKDIR_PREFIX = "ts3updater-"


class PrepareWorkdirStep:
    step_id = "60_prepare_workdir"

    def run(self, ctx: UpdateCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        install_dir = Path(state.get("install_dir") or ctx.cfg.install_dir)

        # Held until the server has been restarted.
        ctx.resources.enter_context(install_lock(install_dir))

        work_dir = ctx.resources.enter_context(tempfile.TemporaryDirectory(prefix=WORKDIR_PREFIX))
        logger.info("Working directory: %s", work_dir)

        state["work_dir"] = work_dir
        state["archive"] = str(Path(work_dir) / ctx.cfg.archive_name)
        return state
