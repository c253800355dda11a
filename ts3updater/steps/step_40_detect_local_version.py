from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from ..lib.versions import detect_installed_version
from ..pipeline import UpdateCtx
from ..state_store import read_install_state

logger = logging.getLogger(__name__)


class DetectLocalVersionStep:
    step_id = "40_detect_local_version"

    def run(self, ctx: UpdateCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = ctx.cfg
        install_dir = Path(state.get("install_dir") or cfg.install_dir)

        install = read_install_state(install_dir, cfg)
        state["install"] = install
        state["installed_version"] = detect_installed_version(
            install_dir,
            manifest_version=install["manifest"].get("installed_version"),
            changelog_file=cfg.changelog_file,
            log_glob=cfg.log_glob,
            new_version=state["release"].version,
        )
        logger.debug("Installed version: %r", state["installed_version"])
        return state
