"""
Lifecycle — the order lifecycle service and its policy.

    from orderflow import lifecycle as LC

    service = LC.OrderLifecycleService(
        repository,
        inventory,
        notifier,
        policy=LC.Policy().with_reservation_retry(times=3),
    )
    result = await service.create_order("customer-123", items)
"""

from __future__ import annotations

from orderflow.lifecycle._policy import NotificationFailure, PROPAGATE, LOG, Policy
from orderflow.lifecycle._validate import (
    validate_customer,
    validate_items,
    parse_percentage,
)
from orderflow.lifecycle._service import OrderLifecycleService

__all__ = (
    "NotificationFailure",
    "PROPAGATE",
    "LOG",
    "Policy",
    "validate_customer",
    "validate_items",
    "parse_percentage",
    "OrderLifecycleService",
)
