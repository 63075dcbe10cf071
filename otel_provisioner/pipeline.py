from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Protocol, Sequence

from .errors import ProvisionError
from .stage import Stage

logger = logging.getLogger(__name__)


class Step(Protocol):
    """A single step; runs once per provisioning run."""

    step_id: str
    stage: Stage

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        ...


@dataclass(frozen=True)
class PipelineResult:
    state: Dict[str, Any]
    ran_steps: List[str]


def ensure_defaults(state: Dict[str, Any]) -> Dict[str, Any]:
    """Fill required keys without overriding caller values."""

    state.setdefault("config", {})
    state.setdefault("runtime", {})
    exe = state.setdefault("execution", {})
    exe.setdefault("current_step", None)
    exe.setdefault("stage", None)
    exe.setdefault("completed_steps", [])
    exe.setdefault("errors", [])
    return state


def mark_step_completed(state: Dict[str, Any], step_id: str) -> None:
    completed = state.setdefault("execution", {}).setdefault("completed_steps", [])
    if step_id not in completed:
        completed.append(step_id)


def run_pipeline(*, state: Dict[str, Any], steps: Sequence[Step]) -> PipelineResult:
    """Run steps in order, stopping at the first failure.

    Failures surface as ProvisionError tagged with the failing stage; the
    state is left in Stage.ABORTED.
    """

    ensure_defaults(state)
    exe = state["execution"]
    ran: List[str] = []

    for step in steps:
        exe["current_step"] = step.step_id
        exe["stage"] = step.stage.value
        logger.info("Running step %s", step.step_id)
        try:
            state = step.run(state)
        except ProvisionError as e:
            if e.stage is None:
                e.stage = step.stage
            _abort(state, step, e)
            raise
        except Exception as e:
            err = ProvisionError(f"{type(e).__name__}: {e}", stage=step.stage)
            _abort(state, step, err)
            raise err from e
        mark_step_completed(state, step.step_id)
        ran.append(step.step_id)

    exe["current_step"] = None
    return PipelineResult(state=state, ran_steps=ran)


def _abort(state: Dict[str, Any], step: Step, error: ProvisionError) -> None:
    exe = state.setdefault("execution", {})
    exe["stage"] = Stage.ABORTED.value
    exe.setdefault("errors", []).append(
        {
            "step": step.step_id,
            "stage": error.stage.value if error.stage else None,
            "error": error.message,
        }
    )
