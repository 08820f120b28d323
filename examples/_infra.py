"""Shared infrastructure for examples."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine
from decimal import Decimal

from orderflow import adapters as A
from orderflow.domain import OrderItem


# Catalog
CATALOG: dict[str, Decimal] = {
    "KEYBOARD": Decimal("89.90"),
    "MOUSE": Decimal("24.50"),
    "CABLE": Decimal("9.99"),
}


def item(product_id: str, quantity: int) -> OrderItem:
    return OrderItem(product_id, quantity, CATALOG[product_id])


# Seeded collaborators
def seeded() -> tuple[A.InMemoryOrderRepository, A.InMemoryInventory, A.RecordingNotifier]:
    return (
        A.InMemoryOrderRepository(),
        A.InMemoryInventory(available={"KEYBOARD": 5, "MOUSE": 20, "CABLE": 100}),
        A.RecordingNotifier(),
    )


# Helpers
def banner(title: str) -> None:
    print(f"\n{'─' * 50}\n{title}\n{'─' * 50}")


def run(main: Callable[[], Coroutine[object, object, None]]) -> None:
    logging.basicConfig(level=logging.INFO, format="  %(levelname)s %(name)s: %(message)s")
    asyncio.run(main())
