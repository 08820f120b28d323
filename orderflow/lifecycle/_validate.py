"""
Input validation. Runs before any collaborator call.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal, InvalidOperation

from kungfu import Result, Ok, Error

from orderflow._types import CustomerId, Money
from orderflow.domain import OrderError, OrderErrors, OrderItem, ZERO, HUNDRED


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def validate_customer(customer_id: CustomerId | None) -> Result[CustomerId, OrderError]:
    if _is_blank(customer_id):
        return Error(OrderErrors.blank_customer())
    return Ok(customer_id)


def validate_items(
    items: Sequence[OrderItem] | None,
) -> Result[tuple[OrderItem, ...], OrderError]:
    if not items:
        return Error(OrderErrors.no_items())

    for item in items:
        if _is_blank(item.product_id):
            return Error(OrderErrors.invalid_item("Product ID cannot be empty"))
        if isinstance(item.quantity, bool) or not isinstance(item.quantity, int):
            return Error(OrderErrors.invalid_item(
                f"Quantity for {item.product_id} must be an integer"
            ))
        if item.quantity <= 0:
            return Error(OrderErrors.invalid_item(
                f"Quantity for {item.product_id} must be positive"
            ))
        # float prices would drift; only Decimal is accepted
        if not isinstance(item.unit_price, Decimal) or not item.unit_price.is_finite():
            return Error(OrderErrors.invalid_item(
                f"Unit price for {item.product_id} must be a finite Decimal"
            ))
        if item.unit_price < ZERO:
            return Error(OrderErrors.invalid_item(
                f"Unit price for {item.product_id} cannot be negative"
            ))

    return Ok(tuple(items))


def parse_percentage(value: Money | int | str) -> Result[Money, OrderError]:
    """Coerce to Decimal and check [0, 100]. Floats and bools are rejected."""
    if isinstance(value, (bool, float)):
        return Error(OrderErrors.discount_out_of_range())
    try:
        percentage = value if isinstance(value, Decimal) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return Error(OrderErrors.discount_out_of_range())

    if not percentage.is_finite() or not ZERO <= percentage <= HUNDRED:
        return Error(OrderErrors.discount_out_of_range())
    return Ok(percentage)


__all__ = ("validate_customer", "validate_items", "parse_percentage")
