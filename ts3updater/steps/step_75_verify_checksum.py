from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from ..lib.checksum import verify_sha256
from ..pipeline import UpdateCtx

logger = logging.getLogger(__name__)


class VerifyChecksumStep:
    step_id = "75_verify_checksum"

    def run(self, ctx: UpdateCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        strategy = state["capabilities"]["checksum_strategy"]
        state["sha256"] = verify_sha256(Path(state["archive"]), state["release"].checksum, strategy)
        return state
