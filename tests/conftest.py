"""Shared fixtures — mocked collaborators and an in-memory wiring.

Mocked collaborators answer interaction questions (was it called, with
what, how often). The in-memory adapters answer state questions (what
is stored, what is reserved).
"""

from unittest.mock import AsyncMock

import pytest

from orderflow import adapters as A
from orderflow.lifecycle import OrderLifecycleService, Policy
from orderflow.ports import Inventory, Notifier, OrderRepository
from tests._factories import NEW_ORDER_ID


@pytest.fixture
def repository() -> AsyncMock:
    repo = AsyncMock(spec=OrderRepository)
    repo.save.side_effect = lambda order: order
    return repo


@pytest.fixture
def inventory() -> AsyncMock:
    inv = AsyncMock(spec=Inventory)
    inv.is_in_stock.return_value = True
    return inv


@pytest.fixture
def notifier() -> AsyncMock:
    return AsyncMock(spec=Notifier)


@pytest.fixture
def service(repository, inventory, notifier) -> OrderLifecycleService:
    return OrderLifecycleService(
        repository, inventory, notifier, ids=lambda: NEW_ORDER_ID
    )


@pytest.fixture
def memory_repository() -> A.InMemoryOrderRepository:
    return A.InMemoryOrderRepository()


@pytest.fixture
def memory_inventory() -> A.InMemoryInventory:
    return A.InMemoryInventory(available={"product-1": 10, "product-2": 5})


@pytest.fixture
def recording_notifier() -> A.RecordingNotifier:
    return A.RecordingNotifier()


@pytest.fixture
def memory_service(
    memory_repository, memory_inventory, recording_notifier
) -> OrderLifecycleService:
    return OrderLifecycleService(
        memory_repository,
        memory_inventory,
        recording_notifier,
        ids=lambda: NEW_ORDER_ID,
        policy=Policy(),
    )
