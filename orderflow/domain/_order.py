"""
Order aggregate and its transitions.

Order is immutable. Every transition returns a new Order; the repository
decides which version is canonical.

Allowed status graph:
    PENDING → CANCELLED
    PENDING → SHIPPED   (external fulfillment only)
    SHIPPED, CANCELLED  → nothing reachable from here
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum

from kungfu import Result, Ok, Error

from orderflow._types import CustomerId, Money, OrderId
from orderflow.domain._errors import OrderError, OrderErrors
from orderflow.domain._item import OrderItem, HUNDRED, exact_arithmetic

# ═══════════════════════════════════════════════════════════════════════════════
# Status
# ═══════════════════════════════════════════════════════════════════════════════


class OrderStatus(Enum):
    PENDING = "pending"
    SHIPPED = "shipped"
    CANCELLED = "cancelled"


# ═══════════════════════════════════════════════════════════════════════════════
# Order
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Order:
    """
    Customer order.

    version: Optimistic concurrency token, bumped by the repository on save.
    """

    id: OrderId
    customer_id: CustomerId
    items: tuple[OrderItem, ...]
    total: Money
    status: OrderStatus = OrderStatus.PENDING
    version: int = 0


def new_order(
    order_id: OrderId,
    customer_id: CustomerId,
    items: Sequence[OrderItem],
    total: Money,
) -> Order:
    """Build a PENDING order. Inputs are assumed validated."""
    return Order(
        id=order_id,
        customer_id=customer_id,
        items=tuple(items),
        total=total,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Transitions
# ═══════════════════════════════════════════════════════════════════════════════


def cancel(order: Order) -> Result[Order, OrderError]:
    """PENDING → CANCELLED. Shipped and already cancelled orders conflict."""
    match order.status:
        case OrderStatus.SHIPPED:
            return Error(OrderErrors.shipped(order.id))
        case OrderStatus.CANCELLED:
            return Error(OrderErrors.already_cancelled(order.id))
        case OrderStatus.PENDING:
            return Ok(replace(order, status=OrderStatus.CANCELLED))


def with_total(order: Order, total: Money) -> Order:
    return replace(order, total=total)


def discount(order: Order, percentage: Money) -> Order:
    """
    Take percentage off the current total.

    Compounds when applied repeatedly. percentage must already be in [0, 100].
    Dividing by 100 is an exponent shift, so no digit of the total is lost.
    """
    with exact_arithmetic():
        reduced = (order.total * (HUNDRED - percentage)).scaleb(-2)
    return with_total(order, reduced)


__all__ = (
    "OrderStatus",
    "Order",
    "new_order",
    "cancel",
    "with_total",
    "discount",
)
