from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Sequence

from ..errors import DependencyMissing
from .checksum import select_strategy
from .command import which

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Capabilities:
    tools: Dict[str, str]
    checksum_strategy: str

    def to_dict(self) -> Dict[str, Any]:
        return {"tools": dict(self.tools), "checksum_strategy": self.checksum_strategy}


def detect_capabilities(required_tools: Sequence[str], checksum_tools: Sequence[str]) -> Capabilities:
    """Probe the execution path once; fail on the first missing tool."""

    found: Dict[str, str] = {}
    for tool in required_tools:
        path = which(tool)
        if path is None:
            raise DependencyMissing(f"{tool} not found")
        found[tool] = path

    strategy = select_strategy(checksum_tools)
    logger.info("Capabilities: tools=%s checksum=%s", found, strategy)
    return Capabilities(tools=found, checksum_strategy=strategy)
