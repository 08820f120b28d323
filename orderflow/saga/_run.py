"""
Saga execution with automatic rollback.

Steps run strictly in sequence. On the first failure the compensators of
the completed steps run in reverse order and every outcome is written to
the run's Journal.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from combinators import RetryPolicy, retry, lift as L
from kungfu import Result, Ok, Error

from orderflow.saga._types import (
    SagaStep,
    SagaResult,
    SagaError,
    StepState,
    Journal,
    CompensatorWithValue,
)

logger = logging.getLogger(__name__)

# ═══════════════════════════════════════════════════════════════════════════════
# Recorded Compensator
# ═══════════════════════════════════════════════════════════════════════════════

type RecordedCompensator = tuple[
    int, str, object, CompensatorWithValue[object], RetryPolicy[Exception] | None
]

# ═══════════════════════════════════════════════════════════════════════════════
# run_step() — Execute single step
# ═══════════════════════════════════════════════════════════════════════════════

async def run_step[T, E](
    index: int,
    step: SagaStep[T, E],
    compensators: list[RecordedCompensator],
    journal: Journal,
) -> Result[T, E]:
    """Execute single step, recording compensator on success."""
    action = step.action if step.retry is None else retry(step.action, policy=step.retry)
    result = await action
    match result:
        case Ok(value):
            journal.mark(index, step.name, StepState.DONE)
            if step.compensate is not None:
                compensators.append(
                    (index, step.name, value, step.compensate, step.compensate_retry)
                )
            return Ok(value)
        case Error(e):
            journal.mark(index, step.name, StepState.FAILED)
            return Error(e)


# ═══════════════════════════════════════════════════════════════════════════════
# run_compensators() — Rollback
# ═══════════════════════════════════════════════════════════════════════════════

async def run_compensators(
    compensators: list[RecordedCompensator],
    journal: Journal,
    retry_policy: RetryPolicy[Exception] | None = None,
) -> tuple[int, int]:
    """
    Run compensators in reverse. Returns (run, failed).

    A step's own compensate_retry wins over retry_policy.
    """
    comp_run = 0
    comp_failed = 0

    for index, name, value, comp, own_retry in reversed(compensators):
        undo = L.catching_async(lambda c=comp, v=value: c(v), on_error=lambda e: e)
        policy = own_retry if own_retry is not None else retry_policy
        if policy is not None:
            undo = retry(undo, policy=policy)

        match await undo:
            case Ok(_):
                journal.mark(index, name, StepState.COMPENSATED)
                comp_run += 1
            case Error(exc):
                logger.error("Compensation of step %r failed", name, exc_info=exc)
                journal.mark(index, name, StepState.COMPENSATION_FAILED)
                comp_failed += 1

    return comp_run, comp_failed


# ═══════════════════════════════════════════════════════════════════════════════
# run() — Execute Saga
# ═══════════════════════════════════════════════════════════════════════════════

async def run[E](
    steps: Sequence[SagaStep[object, E]],
    *,
    compensate: bool = True,
    compensation_retry: RetryPolicy[Exception] | None = None,
) -> Result[SagaResult[object], SagaError[E]]:
    """
    Execute saga steps with automatic rollback on failure.

    On success: returns SagaResult with every step's value, in order.
    On failure: runs compensators in reverse (unless compensate=False),
    returns SagaError.

    Example:
        from orderflow import saga as S

        result = await S.run([
            S.from_async("persist", save, on_error=lambda e: e, compensate=unsave),
            S.from_async("reserve", reserve, on_error=lambda e: e, compensate=release),
        ])

        match result:
            case Ok(r):
                print(f"Done: {r.values}")
            case Error(e):
                print(f"Failed at {e.step_name}, rolled back: {e.rollback_complete}")
    """
    journal = Journal()
    compensators: list[RecordedCompensator] = []
    values: list[object] = []

    for index, saga_step in enumerate(steps):
        match await run_step(index, saga_step, compensators, journal):
            case Ok(value):
                values.append(value)

            case Error(error):
                comp_run, comp_failed = 0, 0
                if compensate and compensators:
                    logger.warning(
                        "Saga step %r failed, compensating %d completed step(s)",
                        saga_step.name,
                        len(compensators),
                    )
                    comp_run, comp_failed = await run_compensators(
                        compensators, journal, compensation_retry
                    )

                return Error(SagaError(
                    error=error,
                    step_failed=index + 1,
                    step_name=saga_step.name,
                    compensators_run=comp_run,
                    compensators_failed=comp_failed,
                    rollback_complete=comp_failed == 0 and (compensate or not compensators),
                    journal=journal,
                ))

    return Ok(SagaResult(
        values=tuple(values),
        steps_executed=len(values),
        compensators_recorded=len(compensators),
        journal=journal,
    ))


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = ("run", "run_step", "run_compensators")
