import random
import time
from typing import Self
from uuid import UUID

import anyio
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import IsolationStrategy, settings
from src.platform.config.di import Container
from src.platform.database.storage_error import ConcurrencyConflictError, StorageError
from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.order_metrics import metrics
from src.service.ticketing.app.interface.i_event_cache import IEventCache
from src.service.ticketing.domain.entity.event_inventory import EventInventory
from src.service.ticketing.domain.entity.order_entity import Order
from src.service.ticketing.domain.errors import (
    EventNotFoundError,
    InvalidQuantityError,
    OrderCreationFailedError,
)


class CreateOrderUseCase:
    """
    Create order use case - the order transaction coordinator

    Flow (one database transaction per attempt):
    1. Read the event row (row lock when pessimistic, plain read when optimistic)
    2. Validate status and availability
    3. Insert the PENDING order
    4. Conditionally decrement available_tickets (expected value = value read in 1)
    5. Commit

    A concurrency conflict (lost conditional update, serialization failure or
    deadlock) rolls back and re-runs the whole attempt with fresh data, up to
    max_attempts in total. In optimistic mode the last attempt after a conflict
    reads with the row lock, so a buyer who keeps losing the race still gets a
    definitive answer (an order or InsufficientTickets). Validation errors are
    final. Every attempt and backoff shares one deadline.

    Dependencies:
    - uow: request-scoped Unit of Work owning the transaction
    - event_cache: invalidated after commit; never read on this path
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        event_cache: IEventCache,
        isolation_strategy: IsolationStrategy = settings.ORDER_ISOLATION_STRATEGY,
        max_attempts: int = settings.ORDER_MAX_ATTEMPTS,
        retry_backoff_seconds: float = settings.ORDER_RETRY_BACKOFF_SECONDS,
        timeout_seconds: float = settings.ORDER_TRANSACTION_TIMEOUT_SECONDS,
    ) -> None:
        self.uow = uow
        self.event_cache = event_cache
        self.isolation_strategy = IsolationStrategy(isolation_strategy)
        self.max_attempts = max(1, max_attempts)
        self.retry_backoff_seconds = retry_backoff_seconds
        self.timeout_seconds = timeout_seconds
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(get_unit_of_work),
        event_cache: IEventCache = Depends(Provide[Container.event_cache]),
    ) -> Self:
        return cls(uow=uow, event_cache=event_cache)

    @Logger.io
    async def create_order(self, *, buyer_id: int, event_id: UUID, quantity: int) -> Order:
        """
        Buy `quantity` tickets of an event for a buyer, all or nothing

        Returns:
            The committed order (status PENDING)

        Raises:
            InvalidQuantityError: quantity is not a positive integer (nothing is read)
            EventNotFoundError: no such event
            EventNotActiveError: event is cancelled or completed
            InsufficientTicketsError: fewer tickets left than requested
            OrderCreationFailedError: storage failure, retries exhausted or deadline expired
        """
        # bool is an int subclass; True must not buy one ticket
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise InvalidQuantityError(quantity)

        strategy = self.isolation_strategy.value
        result = 'aborted'
        start_time = time.perf_counter()
        metrics.orders_in_flight.inc()
        try:
            with self.tracer.start_as_current_span(
                'use_case.create_order',
                attributes={
                    'event.id': str(event_id),
                    'order.buyer_id': buyer_id,
                    'order.quantity': quantity,
                    'order.isolation_strategy': strategy,
                },
            ):
                order = await self._run_with_retry(
                    buyer_id=buyer_id, event_id=event_id, quantity=quantity
                )
            result = 'success'
        except CustomBaseError as e:
            result = e.error_code
            raise
        finally:
            metrics.orders_in_flight.dec()
            metrics.record_order_creation(
                strategy=strategy,
                result=result,
                duration=time.perf_counter() - start_time,
                quantity=quantity,
            )

        await self.event_cache.invalidate(event_id=event_id)
        Logger.base.info(
            f'🎟️ [CREATE-ORDER] Order {order.id} committed: '
            f'buyer {buyer_id}, event {event_id}, quantity {quantity}, amount {order.total_amount}'
        )
        return order

    async def _run_with_retry(self, *, buyer_id: int, event_id: UUID, quantity: int) -> Order:
        last_conflict: ConcurrencyConflictError | None = None
        try:
            with anyio.fail_after(self.timeout_seconds):
                for attempt in range(1, self.max_attempts + 1):
                    try:
                        return await self._attempt(
                            buyer_id=buyer_id,
                            event_id=event_id,
                            quantity=quantity,
                            lock_row=self._locks_row(attempt),
                        )
                    except ConcurrencyConflictError as e:
                        last_conflict = e
                        if attempt == self.max_attempts:
                            break
                        metrics.record_retry(strategy=self.isolation_strategy.value)
                        Logger.base.warning(
                            f'🔁 [CREATE-ORDER] Conflict on event {event_id} '
                            f'(attempt {attempt}/{self.max_attempts}): {e.message}'
                        )
                        await anyio.sleep(self._backoff_delay(attempt))
        except TimeoutError as e:
            Logger.base.error(
                f'⏰ [CREATE-ORDER] Transaction for event {event_id} exceeded '
                f'{self.timeout_seconds}s and was rolled back'
            )
            raise OrderCreationFailedError(e) from e
        except StorageError as e:
            raise OrderCreationFailedError(e) from e

        Logger.base.error(
            f'❌ [CREATE-ORDER] Gave up on event {event_id} after {self.max_attempts} attempts'
        )
        raise OrderCreationFailedError(last_conflict) from last_conflict

    async def _attempt(
        self, *, buyer_id: int, event_id: UUID, quantity: int, lock_row: bool
    ) -> Order:
        async with self.uow:
            inventory = await self._read_inventory(event_id=event_id, lock_row=lock_row)
            if inventory is None:
                raise EventNotFoundError(event_id)
            inventory.ensure_can_sell(quantity=quantity)

            order = Order.create(
                buyer_id=buyer_id,
                event_id=event_id,
                quantity=quantity,
                total_amount=inventory.price_for(
                    quantity=quantity, quantum=settings.CURRENCY_QUANTUM
                ),
            )
            await self.uow.order_command_repo.create(order=order)

            decremented = await self.uow.event_inventory_repo.decrement_available(
                event_id=event_id,
                expected_available=inventory.available_tickets,
                new_available=inventory.available_tickets - quantity,
            )
            if not decremented:
                # Leaving the block rolls back the order insert as well
                raise ConcurrencyConflictError(
                    f'available_tickets of event {event_id} changed since it was read'
                )

            await self.uow.commit()
        return order

    def _locks_row(self, attempt: int) -> bool:
        if self.isolation_strategy == IsolationStrategy.PESSIMISTIC:
            return True
        # optimistic: escalate the final retry
        return attempt > 1 and attempt == self.max_attempts

    async def _read_inventory(self, *, event_id: UUID, lock_row: bool) -> EventInventory | None:
        if lock_row:
            return await self.uow.event_inventory_repo.get_for_update(event_id=event_id)
        return await self.uow.event_inventory_repo.get_snapshot(event_id=event_id)

    def _backoff_delay(self, attempt: int) -> float:
        # linear backoff plus jitter
        base = self.retry_backoff_seconds * attempt
        return base + random.uniform(0, self.retry_backoff_seconds)
