"""
Adapters — reference collaborator implementations.

    from orderflow import adapters as A

    repository = A.InMemoryOrderRepository()
    inventory = A.InMemoryInventory(available={"product-1": 10})
    notifier = A.RecordingNotifier()
"""

from __future__ import annotations

from orderflow.adapters._memory import (
    InMemoryOrderRepository,
    InMemoryInventory,
    OutOfStockError,
    ReleaseError,
    Notification,
    RecordingNotifier,
)
from orderflow.adapters._sqlalchemy import (
    DecimalText,
    Base,
    OrderTable,
    OrderItemTable,
    SQLAlchemyOrderRepository,
)

__all__ = (
    "InMemoryOrderRepository",
    "InMemoryInventory",
    "OutOfStockError",
    "ReleaseError",
    "Notification",
    "RecordingNotifier",
    "DecimalText",
    "Base",
    "OrderTable",
    "OrderItemTable",
    "SQLAlchemyOrderRepository",
)
