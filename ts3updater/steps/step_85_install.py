from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from ..errors import InstallPathConflict
from ..lib.archive import extract_stripped
from ..lib.service import copy_entry_script, stop_server
from ..pipeline import UpdateCtx
from ..state_store import record_install

logger = logging.getLogger(__name__)


class InstallStep:
    step_id = "85_install"

    def run(self, ctx: UpdateCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = ctx.cfg
        install = state["install"]
        install_dir = Path(install["install_dir"])
        tar = state["capabilities"]["tools"].get("tar", "tar")

        state["server_was_running"] = False
        if install["installed"]:
            if install["server_running"]:
                state["server_was_running"] = True
                stop_server(install_dir, cfg.start_script)
        else:
            new_dir = install_dir / state["top_dir"]
            try:
                new_dir.mkdir()
            except OSError as e:
                raise InstallPathConflict(
                    f"Could not create installation directory {new_dir} ({e.strerror}). If you wanted to "
                    "upgrade an existing installation, make sure to run the updater INSIDE the existing "
                    "installation directory."
                ) from e
            logger.info("Fresh install into %s", new_dir)
            copy_entry_script(new_dir)
            install_dir = new_dir

        extract_stripped(Path(state["archive"]), state["top_dir"], install_dir, tar=tar)
        record_install(install_dir, cfg, version=state["release"].version, platform_key=state["platform_key"])

        state["install_dir"] = str(install_dir)
        return state
