"""
Lifecycle policy — behavior configuration.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, auto

from combinators import RetryPolicy


# ═══════════════════════════════════════════════════════════════════════════════
# Notification Failure — What To Do When The Notifier Raises
# ═══════════════════════════════════════════════════════════════════════════════


class NotificationFailure(Enum):
    """
    Notification runs after the state change is committed; it never rolls
    that change back.

    PROPAGATE: Re-raise the notifier's exception to the caller.
    LOG: Log it and return the committed result.
    """

    PROPAGATE = auto()
    LOG = auto()


PROPAGATE = NotificationFailure.PROPAGATE
LOG = NotificationFailure.LOG


# ═══════════════════════════════════════════════════════════════════════════════
# Policy — Full Configuration
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Policy:
    """
    Order lifecycle policy.

    Example:
        policy = (
            Policy()
            .with_reservation_retry(times=3, delay_seconds=0.2)
            .with_on_notification_failure(LOG)
        )

    compensate: Undo completed steps of create/cancel when a later step
        raises. False leaves partial effects in place.
    reservation_retry: Backoff for reserve/release calls and their
        compensations. None means a single attempt.

    Note: Immutable — each method returns new Policy.
    """

    compensate: bool = True
    reservation_retry: RetryPolicy[Exception] | None = None
    on_notification_failure: NotificationFailure = NotificationFailure.PROPAGATE

    def with_compensation(self, enabled: bool = True) -> Policy:
        return replace(self, compensate=enabled)

    def with_reservation_retry(
        self,
        *,
        times: int | None = None,
        delay_seconds: float = 0.0,
        policy: RetryPolicy[Exception] | None = None,
    ) -> Policy:
        """
        Retry inventory calls before treating them as failed.

        Example:
            .with_reservation_retry(times=3)
            .with_reservation_retry(policy=RetryPolicy.exponential(times=5))
        """
        if policy is None:
            if times is None:
                raise ValueError("Must provide times or policy")
            policy = RetryPolicy.fixed(times, delay_seconds)
        return replace(self, reservation_retry=policy)

    def with_on_notification_failure(self, strategy: NotificationFailure) -> Policy:
        return replace(self, on_notification_failure=strategy)


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "NotificationFailure",
    "PROPAGATE",
    "LOG",
    "Policy",
)
