"""
Saga — sequential side effects with compensation.

    from orderflow import saga as S

    result = await S.run([
        S.from_async("persist", save, on_error=lambda e: e, compensate=unsave),
        S.from_async("reserve", reserve, on_error=lambda e: e, compensate=release),
    ])
"""

from __future__ import annotations

from orderflow.saga._types import (
    CompensatorWithValue,
    SagaStep,
    StepState,
    JournalEntry,
    Journal,
    SagaResult,
    SagaError,
)
from orderflow.saga._step import step, from_async
from orderflow.saga._run import run

__all__ = (
    "CompensatorWithValue",
    "SagaStep",
    "StepState",
    "JournalEntry",
    "Journal",
    "SagaResult",
    "SagaError",
    "step",
    "from_async",
    "run",
)
