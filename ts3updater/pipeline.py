from __future__ import annotations

import logging
from contextlib import ExitStack
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence

import requests

from .config import UpdaterConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Options:
    dont_start: bool = False
    accept_license: bool = False
    check_only: bool = False
    verbose: bool = False
    passthrough: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class UpdateCtx:
    cfg: UpdaterConfig
    options: Options
    session: requests.Session
    # Steps register acquired resources here; the driver closes it on every exit path.
    resources: ExitStack


class Step(Protocol):
    """A single pipeline stage."""

    step_id: str

    def run(self, ctx: UpdateCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        ...


@dataclass(frozen=True)
class PipelineResult:
    state: Dict[str, Any]
    ran_steps: List[str]
    halted_by: Optional[str]

    @property
    def halt_reason(self) -> Optional[str]:
        return (self.state.get("execution") or {}).get("halt")


def halt(state: Dict[str, Any], reason: str) -> Dict[str, Any]:
    """Mark the run as finished early; no further steps run."""

    state.setdefault("execution", {})["halt"] = reason
    return state


def run_pipeline(
    *,
    ctx: UpdateCtx,
    state: Dict[str, Any],
    steps: Sequence[Step],
) -> PipelineResult:
    """Run steps in order until one halts the run or all have run."""

    ran: List[str] = []
    halted_by: Optional[str] = None

    for step in steps:
        exe = state.setdefault("execution", {})
        exe["current_step"] = step.step_id

        logger.debug("Running step %s", step.step_id)
        state = step.run(ctx, state)
        ran.append(step.step_id)

        if (state.get("execution") or {}).get("halt"):
            halted_by = step.step_id
            logger.debug("Halted by %s (%s)", step.step_id, state["execution"]["halt"])
            break

    state.setdefault("execution", {})["current_step"] = None
    return PipelineResult(state=state, ran_steps=ran, halted_by=halted_by)
