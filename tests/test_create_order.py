"""create_order — validation, stock check, persist → reserve → notify."""

from dataclasses import replace
from decimal import Decimal
from unittest.mock import call

import pytest
from kungfu import Ok, Error

from orderflow.domain import OrderErrorKind, OrderItem, OrderStatus
from tests._factories import NEW_ORDER_ID


def _no_interactions(*mocks) -> bool:
    return all(m.mock_calls == [] for m in mocks)


async def test_creates_order_for_valid_customer_and_items(service, repository, inventory, notifier):
    items = [OrderItem("product-1", 2, Decimal("10.00"))]

    result = await service.create_order("customer-123", items)

    assert isinstance(result, Ok)
    order = result.value
    assert order.id == NEW_ORDER_ID
    assert order.customer_id == "customer-123"
    assert order.items == tuple(items)
    assert order.total == Decimal("20.00")
    assert order.status is OrderStatus.PENDING
    inventory.reserve.assert_awaited_once_with("product-1", 2)
    notifier.send_order_confirmation.assert_awaited_once_with("customer-123", NEW_ORDER_ID)


async def test_total_matches_calculate_total(service, repository):
    items = [
        OrderItem("product-1", 3, Decimal("19.99")),
        OrderItem("product-2", 1, Decimal("0.01")),
    ]

    result = await service.create_order("customer-1", items)

    assert result.unwrap().total == service.calculate_total(items) == Decimal("59.98")
    saved = repository.save.await_args.args[0]
    assert saved.total == Decimal("59.98")


async def test_reserves_every_item_after_persisting(service, repository, inventory):
    items = [
        OrderItem("product-1", 2, Decimal("10.00")),
        OrderItem("product-2", 5, Decimal("1.00")),
    ]
    order_of_calls: list[str] = []
    repository.save.side_effect = lambda o: order_of_calls.append("save") or o
    inventory.reserve.side_effect = lambda p, q: order_of_calls.append(f"reserve:{p}")

    await service.create_order("customer-1", items)

    assert order_of_calls == ["save", "reserve:product-1", "reserve:product-2"]
    assert inventory.reserve.await_args_list == [call("product-1", 2), call("product-2", 5)]


@pytest.mark.parametrize("customer_id", [None, "", "   "])
async def test_rejects_blank_customer_without_collaborators(
    service, repository, inventory, notifier, customer_id
):
    result = await service.create_order(customer_id, [OrderItem("product-1", 1, Decimal("10.00"))])

    assert isinstance(result, Error)
    assert result.error.kind is OrderErrorKind.VALIDATION
    assert "Customer ID cannot be empty" in result.error.message
    assert _no_interactions(repository, inventory, notifier)


@pytest.mark.parametrize("items", [None, []])
async def test_rejects_missing_items_without_collaborators(
    service, repository, inventory, notifier, items
):
    result = await service.create_order("customer-123", items)

    assert isinstance(result, Error)
    assert result.error.kind is OrderErrorKind.VALIDATION
    assert "Order must contain at least one item" in result.error.message
    assert _no_interactions(repository, inventory, notifier)


async def test_insufficient_stock_names_product_and_has_no_side_effects(
    service, repository, inventory, notifier
):
    inventory.is_in_stock.return_value = False

    result = await service.create_order("customer-123", [OrderItem("product-1", 10, Decimal("10.00"))])

    assert isinstance(result, Error)
    assert result.error.kind is OrderErrorKind.INSUFFICIENT_STOCK
    assert result.error.product_id == "product-1"
    assert "product-1" in result.error.message
    repository.save.assert_not_awaited()
    inventory.reserve.assert_not_awaited()
    notifier.send_order_confirmation.assert_not_awaited()


async def test_stock_check_stops_at_first_missing_product(service, inventory):
    inventory.is_in_stock.side_effect = lambda product_id, quantity: product_id != "product-2"
    items = [
        OrderItem("product-1", 1, Decimal("1.00")),
        OrderItem("product-2", 1, Decimal("1.00")),
        OrderItem("product-3", 1, Decimal("1.00")),
    ]

    result = await service.create_order("customer-1", items)

    assert result.unwrap_err().product_id == "product-2"
    assert inventory.is_in_stock.await_args_list == [call("product-1", 1), call("product-2", 1)]
    inventory.reserve.assert_not_awaited()


async def test_returns_repository_copy(service, repository):
    repository.save.side_effect = lambda o: replace(o, version=7)

    result = await service.create_order("customer-1", [OrderItem("product-1", 1, Decimal("1.00"))])

    assert result.unwrap().version == 7


async def test_scenario_customer_123(memory_service, memory_repository, memory_inventory, recording_notifier):
    result = await memory_service.create_order(
        "customer-123", [OrderItem("product-1", 2, Decimal("10.00"))]
    )

    order = result.unwrap()
    assert order.total == Decimal("20.00")
    assert memory_inventory.reserved == {"product-1": 2}
    assert memory_inventory.available["product-1"] == 8
    assert [(n.kind, n.customer_id, n.order_id) for n in recording_notifier.sent] == [
        ("confirmation", "customer-123", NEW_ORDER_ID)
    ]
    assert (await memory_repository.find_by_id(NEW_ORDER_ID)).unwrap() == order
