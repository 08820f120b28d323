"""find_order — blank ids never reach the repository."""

import pytest
from kungfu import Nothing, Some

from tests._factories import make_order


@pytest.mark.parametrize("order_id", [None, "", "   "])
async def test_blank_id_returns_nothing_without_repository(service, repository, order_id):
    result = await service.find_order(order_id)

    assert result == Nothing()
    repository.find_by_id.assert_not_awaited()
    assert repository.mock_calls == []


async def test_returns_order_when_present(service, repository):
    order = make_order(customer_id="customer-1")
    repository.find_by_id.return_value = Some(order)

    result = await service.find_order("order-123")

    match result:
        case Some(found):
            assert found.customer_id == "customer-1"
        case _:
            raise AssertionError(f"expected Some, got {result!r}")
    repository.find_by_id.assert_awaited_once_with("order-123")


async def test_returns_nothing_when_absent(service, repository):
    repository.find_by_id.return_value = Nothing()

    result = await service.find_order("non-existent-order")

    assert isinstance(result, Nothing)
    repository.find_by_id.assert_awaited_once_with("non-existent-order")
