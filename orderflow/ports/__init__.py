"""
Ports — collaborator contracts for the order lifecycle.
"""

from __future__ import annotations

from orderflow.ports._protocols import (
    OrderRepository,
    Inventory,
    Notifier,
    IdGenerator,
    uuid_ids,
    StaleOrderError,
)

__all__ = (
    "OrderRepository",
    "Inventory",
    "Notifier",
    "IdGenerator",
    "uuid_ids",
    "StaleOrderError",
)
