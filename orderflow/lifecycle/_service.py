"""
Order lifecycle service — create, find, cancel, discount.

Domain outcomes come back as Result / Option values. Exceptions raised by
collaborators are never wrapped: after any compensation the original
exception object is re-raised to the caller.

Side-effect order:
    create_order:  check stock → persist → reserve each item → notify
    cancel_order:  release each item → persist CANCELLED → notify

The persist/reserve and release/persist pairs run as a saga, so a failure
halfway through is compensated instead of leaving a PENDING order with no
reservation or stock released for an order that is still PENDING.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import cast

from kungfu import Result, Ok, Error, Option, Some, Nothing

from orderflow._types import CustomerId, Money, OrderId
from orderflow import saga as S
from orderflow.domain import (
    Order,
    OrderItem,
    OrderError,
    OrderErrors,
    calculate_total,
    new_order,
    cancel,
    discount,
)
from orderflow.lifecycle._policy import Policy, NotificationFailure
from orderflow.lifecycle._validate import (
    validate_customer,
    validate_items,
    parse_percentage,
)
from orderflow.ports import OrderRepository, Inventory, Notifier, IdGenerator, uuid_ids

logger = logging.getLogger(__name__)


def _keep(exc: Exception) -> Exception:
    return exc


class OrderLifecycleService:
    def __init__(
        self,
        repository: OrderRepository,
        inventory: Inventory,
        notifier: Notifier,
        *,
        ids: IdGenerator | None = None,
        policy: Policy | None = None,
    ) -> None:
        self._repository = repository
        self._inventory = inventory
        self._notifier = notifier
        self._ids = ids or uuid_ids()
        self._policy = policy or Policy()

    # ═══════════════════════════════════════════════════════════════════════
    # Operations
    # ═══════════════════════════════════════════════════════════════════════

    async def create_order(
        self,
        customer_id: CustomerId | None,
        items: Sequence[OrderItem] | None,
    ) -> Result[Order, OrderError]:
        """
        Validate, check stock, persist, reserve, notify.

        No collaborator is touched when validation fails, and nothing is
        reserved or persisted when any item is out of stock.
        """
        customer = validate_customer(customer_id)
        if not customer:
            return self._rejected(customer.unwrap_err())
        valid = validate_items(items)
        if not valid:
            return self._rejected(valid.unwrap_err())
        order_items = valid.unwrap()

        stock = await self._check_stock(order_items)
        if not stock:
            return self._rejected(stock.unwrap_err())

        order = new_order(
            self._ids(),
            customer.unwrap(),
            order_items,
            calculate_total(order_items),
        )

        steps: list[S.SagaStep[object, Exception]] = [
            S.from_async(
                "persist",
                lambda: self._repository.save(order),
                on_error=_keep,
                compensate=self._withdraw,
            ),
        ]
        steps.extend(
            S.from_async(
                f"reserve:{item.product_id}",
                lambda i=item: self._inventory.reserve(i.product_id, i.quantity),
                on_error=_keep,
                compensate=lambda _, i=item: self._inventory.release(i.product_id, i.quantity),
                retry=self._policy.reservation_retry,
                compensate_retry=self._policy.reservation_retry,
            )
            for item in order_items
        )

        saved = cast(Order, (await self._run(steps))[0])
        logger.info(
            "Created order %s for customer %s, total %s",
            saved.id,
            saved.customer_id,
            saved.total,
        )

        await self._notify(
            self._notifier.send_order_confirmation, saved.customer_id, saved.id
        )
        return Ok(saved)

    async def find_order(self, order_id: OrderId | None) -> Option[Order]:
        """Blank ids short-circuit to Nothing() without a repository call."""
        if order_id is None or not order_id.strip():
            return Nothing()
        return await self._repository.find_by_id(order_id)

    async def cancel_order(self, order_id: OrderId) -> Result[Order, OrderError]:
        """
        Release stock, persist CANCELLED, notify.

        Missing, shipped, or already cancelled orders are rejected before
        any release or persistence.
        """
        transition = (await self._lookup(order_id)).then(cancel)
        if not transition:
            return self._rejected(transition.unwrap_err())
        cancelled = transition.unwrap()

        steps: list[S.SagaStep[object, Exception]] = [
            S.from_async(
                f"release:{item.product_id}",
                lambda i=item: self._inventory.release(i.product_id, i.quantity),
                on_error=_keep,
                compensate=lambda _, i=item: self._inventory.reserve(i.product_id, i.quantity),
                retry=self._policy.reservation_retry,
                compensate_retry=self._policy.reservation_retry,
            )
            for item in cancelled.items
        ]
        steps.append(
            S.from_async(
                "persist",
                lambda: self._repository.save(cancelled),
                on_error=_keep,
            )
        )

        saved = cast(Order, (await self._run(steps))[-1])
        logger.info("Cancelled order %s", saved.id)

        await self._notify(
            self._notifier.send_cancellation_confirmation, saved.customer_id, order_id
        )
        return Ok(saved)

    @staticmethod
    def calculate_total(items: Sequence[OrderItem]) -> Money:
        return calculate_total(items)

    async def apply_discount(
        self,
        order_id: OrderId,
        percentage: Money | int | str,
    ) -> Result[Order, OrderError]:
        """
        Take percentage off the order's current total and persist it.

        The range check happens before the lookup. Repeated calls compound.
        """
        parsed = parse_percentage(percentage)
        if not parsed:
            return self._rejected(parsed.unwrap_err())

        found = await self._lookup(order_id)
        if not found:
            return self._rejected(found.unwrap_err())

        saved = await self._repository.save(discount(found.unwrap(), parsed.unwrap()))
        logger.info(
            "Applied %s%% discount to order %s, total now %s",
            parsed.unwrap(),
            saved.id,
            saved.total,
        )
        return Ok(saved)

    # ═══════════════════════════════════════════════════════════════════════
    # Helpers
    # ═══════════════════════════════════════════════════════════════════════

    async def _check_stock(self, items: Sequence[OrderItem]) -> Result[None, OrderError]:
        for item in items:
            if not await self._inventory.is_in_stock(item.product_id, item.quantity):
                return Error(OrderErrors.insufficient_stock(item.product_id))
        return Ok(None)

    async def _lookup(self, order_id: OrderId) -> Result[Order, OrderError]:
        match await self._repository.find_by_id(order_id):
            case Some(order):
                return Ok(order)
            case _:
                return Error(OrderErrors.not_found(order_id))

    async def _withdraw(self, saved: object) -> None:
        """Compensate a persisted order by persisting its CANCELLED version."""
        order = cast(Order, saved)
        await self._repository.save(cancel(order).unwrap())

    async def _run(self, steps: list[S.SagaStep[object, Exception]]) -> tuple[object, ...]:
        match await S.run(steps, compensate=self._policy.compensate):
            case Ok(done):
                return done.values
            case Error(failure):
                if failure.compensators_failed:
                    logger.error(
                        "Rollback after %r incomplete, outstanding: %s",
                        failure.step_name,
                        [entry.name for entry in failure.journal.outstanding],
                    )
                raise failure.error

    async def _notify(
        self,
        send: Callable[[CustomerId, OrderId], Awaitable[None]],
        customer_id: CustomerId,
        order_id: OrderId,
    ) -> None:
        try:
            await send(customer_id, order_id)
        except Exception:
            if self._policy.on_notification_failure is NotificationFailure.PROPAGATE:
                raise
            logger.exception(
                "Notification for order %s to customer %s failed", order_id, customer_id
            )

    @staticmethod
    def _rejected(error: OrderError) -> Result[Order, OrderError]:
        logger.info("Rejected: %s", error.message, extra={"error_kind": error.kind.name})
        return Error(error)


__all__ = ("OrderLifecycleService",)
