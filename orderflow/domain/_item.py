"""
Order line items and price arithmetic.

Money is Decimal and never rounds: line totals, sums and discounts are
computed under exact_arithmetic(), where any inexact result raises
decimal.Inexact instead of being rounded to the ambient precision.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from decimal import Decimal, Inexact, MAX_EMAX, MAX_PREC, MIN_EMIN, localcontext

from orderflow._types import Money, ProductId

ZERO = Decimal(0)
HUNDRED = Decimal(100)


@contextmanager
def exact_arithmetic() -> Iterator[None]:
    """
    Unbounded decimal context for add, multiply and scaleb.

    Note: Division is not safe here. A non-terminating quotient would try
    to expand to MAX_PREC digits.
    """
    with localcontext() as ctx:
        ctx.prec = MAX_PREC
        ctx.Emax = MAX_EMAX
        ctx.Emin = MIN_EMIN
        ctx.traps[Inexact] = True
        yield


@dataclass(frozen=True, slots=True)
class OrderItem:
    """
    Single order line.

    Note: unit_price is Decimal. Floats are rejected by validate_items.
    """

    product_id: ProductId
    quantity: int
    unit_price: Money

    @property
    def line_total(self) -> Money:
        with exact_arithmetic():
            return self.unit_price * self.quantity


def calculate_total(items: Iterable[OrderItem]) -> Money:
    """Exact sum of unit_price × quantity. Zero for no items."""
    with exact_arithmetic():
        return sum((item.line_total for item in items), start=ZERO)


__all__ = ("OrderItem", "calculate_total", "exact_arithmetic", "ZERO", "HUNDRED")
