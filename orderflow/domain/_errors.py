"""
Domain error values.

Errors are returned inside Result, never raised. Callers branch on kind.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


# ═══════════════════════════════════════════════════════════════════════════════
# Error Kind
# ═══════════════════════════════════════════════════════════════════════════════


class OrderErrorKind(Enum):
    """Kinds of order lifecycle errors."""

    VALIDATION = auto()  # Malformed or out-of-range caller input
    INSUFFICIENT_STOCK = auto()  # Product lacks quantity at creation time
    ORDER_NOT_FOUND = auto()  # Unknown order id
    STATE_CONFLICT = auto()  # Transition forbidden by current status


# ═══════════════════════════════════════════════════════════════════════════════
# Order Error
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class OrderError:
    """
    Order lifecycle error.

    Note: product_id is set for INSUFFICIENT_STOCK, order_id for
    ORDER_NOT_FOUND and STATE_CONFLICT.
    """

    kind: OrderErrorKind
    message: str
    product_id: str | None = None
    order_id: str | None = None

    def __str__(self) -> str:
        return self.message


class OrderErrors:
    @staticmethod
    def blank_customer() -> OrderError:
        return OrderError(OrderErrorKind.VALIDATION, "Customer ID cannot be empty")

    @staticmethod
    def no_items() -> OrderError:
        return OrderError(
            OrderErrorKind.VALIDATION, "Order must contain at least one item"
        )

    @staticmethod
    def invalid_item(msg: str) -> OrderError:
        return OrderError(OrderErrorKind.VALIDATION, msg)

    @staticmethod
    def discount_out_of_range() -> OrderError:
        return OrderError(
            OrderErrorKind.VALIDATION, "Discount must be between 0 and 100"
        )

    @staticmethod
    def insufficient_stock(product_id: str) -> OrderError:
        return OrderError(
            OrderErrorKind.INSUFFICIENT_STOCK,
            f"Insufficient stock for product: {product_id}",
            product_id=product_id,
        )

    @staticmethod
    def not_found(order_id: str) -> OrderError:
        return OrderError(
            OrderErrorKind.ORDER_NOT_FOUND,
            f"Order not found: {order_id}",
            order_id=order_id,
        )

    @staticmethod
    def shipped(order_id: str) -> OrderError:
        return OrderError(
            OrderErrorKind.STATE_CONFLICT,
            "Cannot cancel shipped order",
            order_id=order_id,
        )

    @staticmethod
    def already_cancelled(order_id: str) -> OrderError:
        return OrderError(
            OrderErrorKind.STATE_CONFLICT,
            "Order is already cancelled",
            order_id=order_id,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "OrderErrorKind",
    "OrderError",
    "OrderErrors",
)
