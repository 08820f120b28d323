"""
Domain — order values, transitions and error kinds.

    from orderflow import domain as D

    order = D.new_order("ord-1", "customer-123", items, D.calculate_total(items))
    match D.cancel(order):
        case Ok(cancelled): ...
        case Error(err): ...
"""

from __future__ import annotations

from orderflow.domain._errors import OrderErrorKind, OrderError, OrderErrors
from orderflow.domain._item import OrderItem, calculate_total, exact_arithmetic, ZERO, HUNDRED
from orderflow.domain._order import (
    OrderStatus,
    Order,
    new_order,
    cancel,
    with_total,
    discount,
)

__all__ = (
    "OrderErrorKind",
    "OrderError",
    "OrderErrors",
    "OrderItem",
    "calculate_total",
    "exact_arithmetic",
    "ZERO",
    "HUNDRED",
    "OrderStatus",
    "Order",
    "new_order",
    "cancel",
    "with_total",
    "discount",
)
