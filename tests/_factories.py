"""Order builders shared by the test modules."""

from decimal import Decimal

from orderflow.domain import Order, OrderItem, OrderStatus

NEW_ORDER_ID = "order-new"


def make_order(
    order_id: str = "order-123",
    *,
    customer_id: str = "customer-1",
    items: tuple[OrderItem, ...] = (OrderItem("product-1", 2, Decimal("10.00")),),
    total: Decimal = Decimal("20.00"),
    status: OrderStatus = OrderStatus.PENDING,
    version: int = 1,
) -> Order:
    return Order(
        id=order_id,
        customer_id=customer_id,
        items=items,
        total=total,
        status=status,
        version=version,
    )
