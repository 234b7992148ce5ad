import asyncio
from collections import defaultdict
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional
from unittest.mock import AsyncMock, Mock
from uuid import UUID

import attrs

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.service.ticketing.app.interface.i_event_inventory_repo import IEventInventoryRepo
from src.service.ticketing.app.interface.i_order_command_repo import IOrderCommandRepo
from src.service.ticketing.domain.entity.event_entity import Event
from src.service.ticketing.domain.entity.event_inventory import EventInventory
from src.service.ticketing.domain.entity.order_entity import Order
from src.service.ticketing.domain.enum.event_status import EventStatus
from src.service.ticketing.domain.enum.order_status import OrderStatus
from test.util_constant import (
    BUYER_ID,
    DEFAULT_EVENT_DATE,
    DEFAULT_TICKET_PRICE,
    DEFAULT_TITLE,
    DEFAULT_TOTAL_TICKETS,
    DEFAULT_VENUE_NAME,
    SELLER_ID,
    TEST_EVENT_ID_1,
    TEST_ORDER_ID_1,
)


# =============================================================================
# Builders
# =============================================================================
def make_inventory(**overrides: Any) -> EventInventory:
    fields: dict[str, Any] = {
        'event_id': TEST_EVENT_ID_1,
        'ticket_price': DEFAULT_TICKET_PRICE,
        'available_tickets': DEFAULT_TOTAL_TICKETS,
        'total_tickets': DEFAULT_TOTAL_TICKETS,
        'status': EventStatus.ACTIVE,
    }
    return EventInventory(**(fields | overrides))


def make_event(**overrides: Any) -> Event:
    now = datetime.now(timezone.utc)
    fields: dict[str, Any] = {
        'id': TEST_EVENT_ID_1,
        'organizer_id': SELLER_ID,
        'title': DEFAULT_TITLE,
        'venue_name': DEFAULT_VENUE_NAME,
        'event_date': DEFAULT_EVENT_DATE,
        'ticket_price': DEFAULT_TICKET_PRICE,
        'total_tickets': DEFAULT_TOTAL_TICKETS,
        'available_tickets': DEFAULT_TOTAL_TICKETS,
        'description': 'An evening of live jazz',
        'status': EventStatus.ACTIVE,
        'created_at': now,
        'updated_at': now,
    }
    return Event(**(fields | overrides))


def make_order(**overrides: Any) -> Order:
    now = datetime.now(timezone.utc)
    fields: dict[str, Any] = {
        'id': TEST_ORDER_ID_1,
        'buyer_id': BUYER_ID,
        'event_id': TEST_EVENT_ID_1,
        'quantity': 2,
        'total_amount': Decimal('50.00'),
        'status': OrderStatus.PENDING,
        'created_at': now,
        'updated_at': now,
    }
    return Order(**(fields | overrides))


# =============================================================================
# Unit of Work with mocked repositories
# =============================================================================
class FakeUnitOfWork(AbstractUnitOfWork):
    """Real enter/exit semantics, AsyncMock repositories, counted commits and rollbacks"""

    def __init__(self) -> None:
        self.event_inventory_repo: Mock = AsyncMock(spec=IEventInventoryRepo)
        self.order_command_repo: Mock = AsyncMock(spec=IOrderCommandRepo)
        self.order_command_repo.create.side_effect = lambda *, order: order
        self.committed = 0
        self.rolled_back = 0
        self.entered = 0

    async def __aenter__(self) -> 'FakeUnitOfWork':
        self.entered += 1
        await super().__aenter__()
        return self

    async def _commit(self) -> None:
        self.committed += 1

    async def rollback(self) -> None:
        self.rolled_back += 1


# =============================================================================
# In-memory store with row locks and conditional updates
# =============================================================================
class InMemoryTicketStore:
    """
    Committed state shared by concurrent units of work.

    Each event row has a lock held from the first locking read or write of a
    transaction until it commits or rolls back, like a row lock in the database.
    """

    def __init__(self, *inventories: EventInventory) -> None:
        self.inventories: dict[UUID, EventInventory] = {i.event_id: i for i in inventories}
        self.orders: dict[UUID, Order] = {}
        self.row_locks: defaultdict[UUID, asyncio.Lock] = defaultdict(asyncio.Lock)

    def available(self, event_id: UUID) -> int:
        return self.inventories[event_id].available_tickets

    def orders_for(self, event_id: UUID) -> list[Order]:
        return [order for order in self.orders.values() if order.event_id == event_id]


class InMemoryEventInventoryRepo(IEventInventoryRepo):
    def __init__(self, uow: 'InMemoryUnitOfWork') -> None:
        self.uow = uow

    async def get_for_update(self, *, event_id: UUID) -> Optional[EventInventory]:
        await self.uow.lock_row(event_id)
        # round trip; other transactions queue on the lock meanwhile
        await asyncio.sleep(0)
        return self.uow.store.inventories.get(event_id)

    async def get_snapshot(self, *, event_id: UUID) -> Optional[EventInventory]:
        inventory = self.uow.store.inventories.get(event_id)
        await asyncio.sleep(0)
        return inventory

    async def decrement_available(
        self, *, event_id: UUID, expected_available: int, new_available: int
    ) -> bool:
        if self.uow.fail_decrement_with is not None:
            raise self.uow.fail_decrement_with
        await self.uow.lock_row(event_id)
        current = self.uow.store.inventories.get(event_id)
        if current is None or current.available_tickets != expected_available:
            return False
        self.uow.pending_inventories[event_id] = attrs.evolve(
            current, available_tickets=new_available
        )
        return True


class InMemoryOrderCommandRepo(IOrderCommandRepo):
    def __init__(self, uow: 'InMemoryUnitOfWork') -> None:
        self.uow = uow

    async def create(self, *, order: Order) -> Order:
        self.uow.pending_orders.append(order)
        return order

    async def update_status(self, *, order_id: UUID, status: OrderStatus) -> Optional[Order]:
        order = self.uow.store.orders.get(order_id)
        return order.with_status(status) if order else None

    async def delete(self, *, order_id: UUID) -> bool:
        return order_id in self.uow.store.orders


class InMemoryUnitOfWork(AbstractUnitOfWork):
    def __init__(
        self, store: InMemoryTicketStore, *, fail_decrement_with: Optional[Exception] = None
    ) -> None:
        self.store = store
        self.fail_decrement_with = fail_decrement_with
        self.pending_orders: list[Order] = []
        self.pending_inventories: dict[UUID, EventInventory] = {}
        self.held_locks: list[asyncio.Lock] = []

    async def __aenter__(self) -> 'InMemoryUnitOfWork':
        self.event_inventory_repo = InMemoryEventInventoryRepo(self)
        self.order_command_repo = InMemoryOrderCommandRepo(self)
        await super().__aenter__()
        return self

    async def lock_row(self, event_id: UUID) -> None:
        lock = self.store.row_locks[event_id]
        if lock in self.held_locks:
            return
        await lock.acquire()
        self.held_locks.append(lock)

    async def _commit(self) -> None:
        self.store.inventories.update(self.pending_inventories)
        for order in self.pending_orders:
            self.store.orders[order.id] = order
        self._end_transaction()

    async def rollback(self) -> None:
        self._end_transaction()

    def _end_transaction(self) -> None:
        self.pending_orders = []
        self.pending_inventories = {}
        for lock in self.held_locks:
            lock.release()
        self.held_locks = []
