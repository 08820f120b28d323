"""
Collaborator protocols — what the lifecycle service consumes.

Implementations may raise any exception; the service never translates it.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from typing import Protocol, runtime_checkable

from kungfu import Option

from orderflow._types import CustomerId, OrderId, ProductId
from orderflow.domain import Order

# ═══════════════════════════════════════════════════════════════════════════════
# Repository
# ═══════════════════════════════════════════════════════════════════════════════


@runtime_checkable
class OrderRepository(Protocol):
    """
    Durable order storage.

    save() is create-or-update and returns the canonical persisted copy
    (with its version bumped). Saving a stale version raises StaleOrderError.
    """

    async def save(self, order: Order) -> Order: ...

    async def find_by_id(self, order_id: OrderId) -> Option[Order]: ...


# ═══════════════════════════════════════════════════════════════════════════════
# Inventory
# ═══════════════════════════════════════════════════════════════════════════════


@runtime_checkable
class Inventory(Protocol):
    async def is_in_stock(self, product_id: ProductId, quantity: int) -> bool: ...

    async def reserve(self, product_id: ProductId, quantity: int) -> None: ...

    async def release(self, product_id: ProductId, quantity: int) -> None: ...


# ═══════════════════════════════════════════════════════════════════════════════
# Notifier
# ═══════════════════════════════════════════════════════════════════════════════


@runtime_checkable
class Notifier(Protocol):
    async def send_order_confirmation(self, customer_id: CustomerId, order_id: OrderId) -> None: ...

    async def send_cancellation_confirmation(
        self, customer_id: CustomerId, order_id: OrderId
    ) -> None: ...


# ═══════════════════════════════════════════════════════════════════════════════
# Identity
# ═══════════════════════════════════════════════════════════════════════════════

type IdGenerator = Callable[[], OrderId]
"""Produces a fresh order id on each call."""


def uuid_ids() -> IdGenerator:
    """Default id generator: random UUID4 strings."""
    return lambda: str(uuid.uuid4())


# ═══════════════════════════════════════════════════════════════════════════════
# Collaborator Errors
# ═══════════════════════════════════════════════════════════════════════════════


class StaleOrderError(Exception):
    """Order was saved by someone else since it was read."""

    def __init__(self, order_id: OrderId, expected: int, actual: int) -> None:
        super().__init__(
            f"Order {order_id} is stale: saving version {expected}, stored {actual}"
        )
        self.order_id = order_id
        self.expected = expected
        self.actual = actual


__all__ = (
    "OrderRepository",
    "Inventory",
    "Notifier",
    "IdGenerator",
    "uuid_ids",
    "StaleOrderError",
)
