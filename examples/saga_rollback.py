"""
Saga rollback — a reservation fails after the order was persisted.

The persisted order is compensated to CANCELLED and the earlier
reservation is released before the inventory error reaches the caller.

Run: uv run python -m examples.saga_rollback
"""

from orderflow import adapters as A
from orderflow import lifecycle as LC
from examples._infra import banner, run, seeded, item


class FlakyInventory(A.InMemoryInventory):
    """Says MOUSE is in stock, then refuses to reserve it."""

    async def reserve(self, product_id: str, quantity: int) -> None:
        if product_id == "MOUSE":
            raise A.OutOfStockError(product_id, quantity, 0)
        await super().reserve(product_id, quantity)


async def main() -> None:
    banner("Saga: Rollback On Reservation Failure")

    repository, seeded_inventory, notifier = seeded()
    inventory = FlakyInventory(available=dict(seeded_inventory.available))
    service = LC.OrderLifecycleService(
        repository,
        inventory,
        notifier,
        ids=lambda: "ord-demo",
    )

    try:
        await service.create_order("customer-123", [item("KEYBOARD", 1), item("MOUSE", 1)])
    except A.OutOfStockError as exc:
        print(f"\n✗ Failed: {exc}")

    stored = (await repository.find_by_id("ord-demo")).unwrap()
    print(f"  Order status: {stored.status.value}")
    print(f"  Reserved: {inventory.reserved}")
    print(f"  Notifications sent: {len(notifier.sent)}")


if __name__ == "__main__":
    run(main)
