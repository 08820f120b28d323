"""In-memory collaborators — versioning, stock counters, recording."""

from dataclasses import replace
from decimal import Decimal

import pytest
from kungfu import Nothing

from orderflow import adapters as A
from orderflow.domain import OrderStatus, new_order, OrderItem
from orderflow.ports import Inventory, Notifier, OrderRepository, StaleOrderError


def _fresh():
    return new_order(
        "order-1", "customer-1", [OrderItem("product-1", 1, Decimal("3.00"))], Decimal("3.00")
    )


def test_adapters_satisfy_protocols():
    assert isinstance(A.InMemoryOrderRepository(), OrderRepository)
    assert isinstance(A.InMemoryInventory(), Inventory)
    assert isinstance(A.RecordingNotifier(), Notifier)


async def test_save_bumps_version_and_find_returns_copy():
    repo = A.InMemoryOrderRepository()

    saved = await repo.save(_fresh())

    assert saved.version == 1
    assert (await repo.find_by_id("order-1")).unwrap() == saved


async def test_find_unknown_is_nothing():
    assert await A.InMemoryOrderRepository().find_by_id("missing") == Nothing()


async def test_stale_save_is_rejected():
    repo = A.InMemoryOrderRepository()
    first = await repo.save(_fresh())
    await repo.save(replace(first, status=OrderStatus.CANCELLED))

    with pytest.raises(StaleOrderError) as excinfo:
        await repo.save(replace(first, total=Decimal("1.00")))

    assert excinfo.value.expected == 1
    assert excinfo.value.actual == 2


async def test_creating_existing_id_is_stale():
    repo = A.InMemoryOrderRepository()
    await repo.save(_fresh())

    with pytest.raises(StaleOrderError):
        await repo.save(_fresh())


async def test_inventory_reserve_and_release():
    inventory = A.InMemoryInventory(available={"product-1": 5})

    assert await inventory.is_in_stock("product-1", 5)
    assert not await inventory.is_in_stock("product-1", 6)
    assert not await inventory.is_in_stock("unknown", 1)

    await inventory.reserve("product-1", 3)
    assert inventory.available == {"product-1": 2}
    assert inventory.reserved == {"product-1": 3}

    await inventory.release("product-1", 3)
    assert inventory.available == {"product-1": 5}
    assert inventory.reserved == {"product-1": 0}


async def test_inventory_refuses_overreservation_and_overrelease():
    inventory = A.InMemoryInventory(available={"product-1": 1})

    with pytest.raises(A.OutOfStockError):
        await inventory.reserve("product-1", 2)
    with pytest.raises(A.ReleaseError):
        await inventory.release("product-1", 1)


async def test_recording_notifier_keeps_order():
    notifier = A.RecordingNotifier()

    await notifier.send_order_confirmation("customer-1", "order-1")
    await notifier.send_cancellation_confirmation("customer-1", "order-1")

    assert notifier.sent == [
        A.Notification("confirmation", "customer-1", "order-1"),
        A.Notification("cancellation", "customer-1", "order-1"),
    ]
