"""
Order lifecycle — create, discount, cancel.

Run: uv run python -m examples.order_lifecycle
"""

from kungfu import Ok, Error

from orderflow import lifecycle as LC
from orderflow.domain import OrderErrorKind
from examples._infra import banner, run, seeded, item


async def main() -> None:
    banner("Order Lifecycle")

    repository, inventory, notifier = seeded()
    service = LC.OrderLifecycleService(repository, inventory, notifier)

    # 1. Create
    print("1. Create order:")
    created = await service.create_order(
        "customer-123", [item("KEYBOARD", 1), item("CABLE", 3)]
    )
    match created:
        case Ok(order):
            print(f"   {order.id}: total={order.total}, status={order.status.value}")
        case Error(e):
            print(f"   Rejected: {e.message}")
            return
    order = created.unwrap()
    print(f"   Stock left: {inventory.available}\n")

    # 2. Out of stock
    print("2. Too many keyboards:")
    match await service.create_order("customer-456", [item("KEYBOARD", 50)]):
        case Error(e) if e.kind is OrderErrorKind.INSUFFICIENT_STOCK:
            print(f"   {e.message}\n")
        case other:
            print(f"   Unexpected: {other}\n")

    # 3. Discount
    print("3. 15% off:")
    match await service.apply_discount(order.id, 15):
        case Ok(discounted):
            print(f"   total={discounted.total}\n")
        case Error(e):
            print(f"   Rejected: {e.message}\n")

    # 4. Cancel twice
    print("4. Cancel (twice):")
    for _ in range(2):
        match await service.cancel_order(order.id):
            case Ok(cancelled):
                print(f"   status={cancelled.status.value}")
            case Error(e):
                print(f"   {e.kind.name}: {e.message}")
    print(f"   Stock back: {inventory.available}\n")

    print(f"Notifications: {[n.kind for n in notifier.sent]}")


if __name__ == "__main__":
    run(main)
