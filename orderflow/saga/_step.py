"""
Saga step creation.
"""

from __future__ import annotations

from collections.abc import Callable, Awaitable
from combinators import RetryPolicy, lift as L

from orderflow._types import Lazy
from orderflow.saga._types import SagaStep, CompensatorWithValue

# ═══════════════════════════════════════════════════════════════════════════════
# step() — Primary Constructor
# ═══════════════════════════════════════════════════════════════════════════════


def step[T, E](
    name: str,
    action: Lazy[T, E],
    compensate: CompensatorWithValue[T] | None = None,
    *,
    retry: RetryPolicy[E] | None = None,
    compensate_retry: RetryPolicy[Exception] | None = None,
) -> SagaStep[T, E]:
    """
    Create a compensated saga step.

    Args:
        name: Label recorded in the journal
        action: The operation to perform (LazyCoroResult)
        compensate: The compensation action if rollback needed
        retry: Optional backoff for re-running a failed action
        compensate_retry: Optional backoff for re-running a failed compensator

    Example:
        from orderflow import saga as S
        from combinators import lift as L

        reserve = S.step(
            "reserve:product-1",
            action=L.catching_async(
                lambda: inventory.reserve("product-1", 2),
                on_error=lambda e: e,
            ),
            compensate=lambda _: inventory.release("product-1", 2),
        )
    """
    return SagaStep(
        name=name,
        action=action,
        compensate=compensate,
        retry=retry,
        compensate_retry=compensate_retry,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# from_async() — Create step from async callable
# ═══════════════════════════════════════════════════════════════════════════════


def from_async[T, E](
    name: str,
    action: Callable[[], Awaitable[T]],
    on_error: Callable[[Exception], E],
    compensate: CompensatorWithValue[T] | None = None,
    *,
    retry: RetryPolicy[E] | None = None,
    compensate_retry: RetryPolicy[Exception] | None = None,
) -> SagaStep[T, E]:
    """
    Create step from async callable with error handling.

    Example:
        S.from_async(
            "persist",
            lambda: repository.save(order),
            on_error=lambda e: e,
            compensate=lambda saved: repository.save(cancelled(saved)),
        )
    """
    return SagaStep(
        name=name,
        action=L.catching_async(action, on_error=on_error),
        compensate=compensate,
        retry=retry,
        compensate_retry=compensate_retry,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = ("step", "from_async")
