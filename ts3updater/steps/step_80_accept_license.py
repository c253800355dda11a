from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Dict

from ..errors import LicenseDeclined
from ..lib.archive import list_members, read_member, top_level_dir
from ..pipeline import UpdateCtx

logger = logging.getLogger(__name__)

PROMPT = "Accept license agreement (y/N)? "


def ask_accept() -> bool:
    try:
        answer = input(PROMPT)
    except EOFError:
        return False
    return answer[:1].lower() == "y"


class AcceptLicenseStep:
    step_id = "80_accept_license"

    def run(self, ctx: UpdateCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        archive = Path(state["archive"])
        tar = state["capabilities"]["tools"].get("tar", "tar")

        top_dir = top_level_dir(list_members(archive, tar=tar))
        state["top_dir"] = top_dir

        if ctx.options.accept_license or state["install"]["license_accepted"]:
            logger.info("License accepted")
            return state

        sys.stdout.write(read_member(archive, f"{top_dir}/LICENSE", tar=tar))
        sys.stdout.flush()
        if not ask_accept():
            raise LicenseDeclined("License agreement was not accepted")

        logger.info("License accepted")
        return state
