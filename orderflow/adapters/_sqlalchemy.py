"""
SQLAlchemy integration — durable order repository.

Usage:
    engine = create_async_engine("sqlite+aiosqlite:///orders.db")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    repository = SQLAlchemyOrderRepository(async_sessionmaker(engine, expire_on_commit=False))

Money columns are stored as decimal strings: SQLite has no exact decimal
type and Numeric would round-trip through float.
"""

from dataclasses import replace
from decimal import Decimal
from typing import Any, cast

from sqlalchemy import ForeignKey, Integer, String, Text, TypeDecorator, select, update
from sqlalchemy.engine import CursorResult, Dialect
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship, selectinload

from kungfu import Option, Some, Nothing

from orderflow.domain import Order, OrderItem, OrderStatus
from orderflow._types import OrderId
from orderflow.ports import StaleOrderError


# ═══════════════════════════════════════════════════════════════════════════════
# Column Types
# ═══════════════════════════════════════════════════════════════════════════════

class DecimalText(TypeDecorator[Decimal]):
    """Exact Decimal stored as its string form."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: Decimal | None, dialect: Dialect) -> str | None:
        return None if value is None else str(value)

    def process_result_value(self, value: str | None, dialect: Dialect) -> Decimal | None:
        return None if value is None else Decimal(value)


# ═══════════════════════════════════════════════════════════════════════════════
# Tables
# ═══════════════════════════════════════════════════════════════════════════════

class Base(DeclarativeBase):
    pass


class OrderTable(Base):
    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    customer_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    total: Mapped[Decimal] = mapped_column(DecimalText, nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    items: Mapped[list["OrderItemTable"]] = relationship(
        back_populates="order",
        order_by="OrderItemTable.position",
        cascade="all, delete-orphan",
    )


class OrderItemTable(Base):
    __tablename__ = "order_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_id: Mapped[str] = mapped_column(
        ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    product_id: Mapped[str] = mapped_column(String(64), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(DecimalText, nullable=False)

    order: Mapped[OrderTable] = relationship(back_populates="items")


# ═══════════════════════════════════════════════════════════════════════════════
# Mapping
# ═══════════════════════════════════════════════════════════════════════════════

def _to_row(order: Order, version: int) -> OrderTable:
    return OrderTable(
        id=order.id,
        customer_id=order.customer_id,
        total=order.total,
        status=order.status.value,
        version=version,
        items=[
            OrderItemTable(
                position=position,
                product_id=item.product_id,
                quantity=item.quantity,
                unit_price=item.unit_price,
            )
            for position, item in enumerate(order.items)
        ],
    )


def _to_order(row: OrderTable) -> Order:
    return Order(
        id=row.id,
        customer_id=row.customer_id,
        items=tuple(
            OrderItem(item.product_id, item.quantity, item.unit_price)
            for item in row.items
        ),
        total=row.total,
        status=OrderStatus(row.status),
        version=row.version,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Repository
# ═══════════════════════════════════════════════════════════════════════════════

class SQLAlchemyOrderRepository:
    """
    Order repository over an async SQLAlchemy session factory.

    Versioning:
        version 0  → INSERT (fails as stale if the id already exists,
                     including when a concurrent insert wins the race)
        version n  → UPDATE ... WHERE version = n, sets n + 1

    Items are fixed at creation, so updates only touch total and status.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def save(self, order: Order) -> Order:
        async with self._session_factory() as session:
            if order.version == 0:
                existing = await session.get(OrderTable, order.id)
                if existing is not None:
                    raise StaleOrderError(order.id, 0, existing.version)
                session.add(_to_row(order, version=1))
                try:
                    await session.commit()
                except IntegrityError as exc:
                    await session.rollback()
                    raise StaleOrderError(order.id, 0, 1) from exc
            else:
                stmt = (
                    update(OrderTable)
                    .where(OrderTable.id == order.id, OrderTable.version == order.version)
                    .values(
                        total=order.total,
                        status=order.status.value,
                        version=order.version + 1,
                    )
                )
                cursor = cast(CursorResult[Any], await session.execute(stmt))
                if cursor.rowcount != 1:
                    stored = await session.scalar(
                        select(OrderTable.version).where(OrderTable.id == order.id)
                    )
                    await session.rollback()
                    raise StaleOrderError(order.id, order.version, stored or 0)
                await session.commit()

        return replace(order, version=order.version + 1)

    async def find_by_id(self, order_id: OrderId) -> Option[Order]:
        async with self._session_factory() as session:
            row = (
                await session.execute(
                    select(OrderTable)
                    .where(OrderTable.id == order_id)
                    .options(selectinload(OrderTable.items))
                )
            ).scalar_one_or_none()

            return Some(_to_order(row)) if row is not None else Nothing()


__all__ = (
    "DecimalText",
    "Base",
    "OrderTable",
    "OrderItemTable",
    "SQLAlchemyOrderRepository",
)
