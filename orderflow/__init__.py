"""
orderflow — purchase order lifecycle on typed results.

    from orderflow import domain as D      # Order values, transitions, errors
    from orderflow import lifecycle as LC  # OrderLifecycleService + Policy
    from orderflow import saga as S        # Compensated side-effect steps
    from orderflow import adapters as A    # In-memory / SQLAlchemy collaborators
"""

from orderflow import domain
from orderflow import ports
from orderflow import saga
from orderflow import lifecycle
from orderflow import adapters
from orderflow._types import (
    Lazy,
    OrderId,
    CustomerId,
    ProductId,
    Money,
)

__version__ = "0.1.0"

__all__ = (
    "domain",
    "ports",
    "saga",
    "lifecycle",
    "adapters",
    "Lazy",
    "OrderId",
    "CustomerId",
    "ProductId",
    "Money",
)
