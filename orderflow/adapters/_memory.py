"""
In-memory collaborators.

Note: Single process only — tests, demos, embedding.
No cross-process lock; nothing survives a restart.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field, replace

from kungfu import Option, Some, Nothing

from orderflow._types import CustomerId, OrderId, ProductId
from orderflow.domain import Order
from orderflow.ports import StaleOrderError

# ═══════════════════════════════════════════════════════════════════════════════
# Repository
# ═══════════════════════════════════════════════════════════════════════════════


class InMemoryOrderRepository:
    """
    Dict-backed order repository with optimistic versioning.

    save() accepts an order only if its version matches the stored one
    (or the id is new), then stores and returns it with version + 1.
    """

    def __init__(self) -> None:
        self._orders: dict[OrderId, Order] = {}
        self._lock = asyncio.Lock()

    async def save(self, order: Order) -> Order:
        async with self._lock:
            existing = self._orders.get(order.id)
            stored_version = existing.version if existing is not None else 0
            if order.version != stored_version:
                raise StaleOrderError(order.id, order.version, stored_version)

            saved = replace(order, version=order.version + 1)
            self._orders[order.id] = saved
            return saved

    async def find_by_id(self, order_id: OrderId) -> Option[Order]:
        async with self._lock:
            order = self._orders.get(order_id)
            return Some(order) if order is not None else Nothing()

    def put(self, order: Order) -> Order:
        """Seed an order as-is (e.g. one already SHIPPED by fulfillment)."""
        self._orders[order.id] = order
        return order

    def __len__(self) -> int:
        return len(self._orders)


# ═══════════════════════════════════════════════════════════════════════════════
# Inventory
# ═══════════════════════════════════════════════════════════════════════════════


class OutOfStockError(Exception):
    def __init__(self, product_id: ProductId, requested: int, available: int) -> None:
        super().__init__(f"{product_id}: need {requested}, have {available}")
        self.product_id = product_id
        self.requested = requested
        self.available = available


class ReleaseError(Exception):
    def __init__(self, product_id: ProductId, requested: int, reserved: int) -> None:
        super().__init__(
            f"{product_id}: cannot release {requested}, only {reserved} reserved"
        )
        self.product_id = product_id
        self.requested = requested
        self.reserved = reserved


@dataclass
class InMemoryInventory:
    """
    Per-product counters: available stock and quantity on hold.

    reserve moves quantity from available to reserved; release moves it back.
    """

    available: dict[ProductId, int] = field(default_factory=dict[ProductId, int])
    reserved: dict[ProductId, int] = field(default_factory=dict[ProductId, int])

    async def is_in_stock(self, product_id: ProductId, quantity: int) -> bool:
        return self.available.get(product_id, 0) >= quantity

    async def reserve(self, product_id: ProductId, quantity: int) -> None:
        available = self.available.get(product_id, 0)
        if available < quantity:
            raise OutOfStockError(product_id, quantity, available)
        self.available[product_id] = available - quantity
        self.reserved[product_id] = self.reserved.get(product_id, 0) + quantity

    async def release(self, product_id: ProductId, quantity: int) -> None:
        held = self.reserved.get(product_id, 0)
        if held < quantity:
            raise ReleaseError(product_id, quantity, held)
        self.reserved[product_id] = held - quantity
        self.available[product_id] = self.available.get(product_id, 0) + quantity


# ═══════════════════════════════════════════════════════════════════════════════
# Notifier
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Notification:
    kind: str  # "confirmation" | "cancellation"
    customer_id: CustomerId
    order_id: OrderId


@dataclass
class RecordingNotifier:
    """Keeps every notification instead of delivering it."""

    sent: list[Notification] = field(default_factory=list[Notification])

    async def send_order_confirmation(self, customer_id: CustomerId, order_id: OrderId) -> None:
        self.sent.append(Notification("confirmation", customer_id, order_id))

    async def send_cancellation_confirmation(
        self, customer_id: CustomerId, order_id: OrderId
    ) -> None:
        self.sent.append(Notification("cancellation", customer_id, order_id))


__all__ = (
    "InMemoryOrderRepository",
    "InMemoryInventory",
    "OutOfStockError",
    "ReleaseError",
    "Notification",
    "RecordingNotifier",
)
