"""
Saga types — steps, journal, results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from collections.abc import Callable, Awaitable
from enum import Enum, auto

from combinators import RetryPolicy

from orderflow._types import Lazy

# ═══════════════════════════════════════════════════════════════════════════════
# Compensator — Undo Action
# ═══════════════════════════════════════════════════════════════════════════════

type CompensatorWithValue[T] = Callable[[T], Awaitable[None]]
"""Compensation function that receives the action result and undoes it."""

# ═══════════════════════════════════════════════════════════════════════════════
# SagaStep — Single Step with Compensation
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class SagaStep[T, E]:
    """
    A single saga step: action + compensator.

    When action succeeds, compensator is recorded.
    retry re-runs a failing action per the given backoff before giving up.
    compensate_retry does the same for the compensator; when unset the
    run-wide compensation_retry applies.
    If later step fails, compensators run in reverse.
    """

    name: str
    action: Lazy[T, E]
    compensate: CompensatorWithValue[T] | None
    retry: RetryPolicy[E] | None = None
    compensate_retry: RetryPolicy[Exception] | None = None


# ═══════════════════════════════════════════════════════════════════════════════
# Journal — Compensation Record
# ═══════════════════════════════════════════════════════════════════════════════


class StepState(Enum):
    """
    Lifecycle of a step inside one saga run.

        DONE → COMPENSATED
             → COMPENSATION_FAILED
        FAILED
    """

    DONE = auto()
    FAILED = auto()
    COMPENSATED = auto()
    COMPENSATION_FAILED = auto()


@dataclass(frozen=True, slots=True)
class JournalEntry:
    index: int
    name: str
    state: StepState


@dataclass(slots=True)
class Journal:
    """
    What ran, what failed, what was undone.

    Note: One entry per step index; later states overwrite earlier ones.
    A COMPENSATION_FAILED entry names work that must be redone by hand.
    """

    entries: list[JournalEntry] = field(default_factory=list[JournalEntry])

    def mark(self, index: int, name: str, state: StepState) -> None:
        entry = JournalEntry(index, name, state)
        for i, existing in enumerate(self.entries):
            if existing.index == index:
                self.entries[i] = entry
                return
        self.entries.append(entry)

    def state_of(self, name: str) -> StepState | None:
        for entry in self.entries:
            if entry.name == name:
                return entry.state
        return None

    @property
    def outstanding(self) -> tuple[JournalEntry, ...]:
        """Steps whose effect is still in place after a failed rollback."""
        return tuple(
            e for e in self.entries if e.state is StepState.COMPENSATION_FAILED
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Result Types
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class SagaResult[T]:
    """Successful saga result with metadata."""

    values: tuple[T, ...]
    steps_executed: int
    compensators_recorded: int
    journal: Journal


@dataclass(frozen=True, slots=True)
class SagaError[E]:
    """Saga error with rollback status."""

    error: E
    step_failed: int
    step_name: str
    compensators_run: int
    compensators_failed: int
    rollback_complete: bool
    journal: Journal


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "CompensatorWithValue",
    "SagaStep",
    "StepState",
    "JournalEntry",
    "Journal",
    "SagaResult",
    "SagaError",
)
