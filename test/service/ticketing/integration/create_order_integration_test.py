"""
Integration tests for CreateOrderUseCase on a real database (SQLite)

Each call gets its own session and Unit of Work, as an HTTP request does.
"""

import asyncio
from decimal import Decimal
from unittest.mock import AsyncMock, patch
from uuid import UUID

import pytest

from src.platform.config.core_setting import IsolationStrategy, settings
from src.platform.database.orm_db_setting import Database, get_session_maker
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.ticketing.app.command.create_order_use_case import CreateOrderUseCase
from src.service.ticketing.app.interface.i_event_cache import IEventCache
from src.service.ticketing.domain.entity.event_entity import Event
from src.service.ticketing.domain.enum.event_status import EventStatus
from src.service.ticketing.domain.enum.order_status import OrderStatus
from src.service.ticketing.domain.errors import (
    EventNotActiveError,
    EventNotFoundError,
    InsufficientTicketsError,
    OrderCreationFailedError,
)
from src.service.ticketing.driven_adapter.repo.event_command_repo_impl import (
    EventCommandRepoImpl,
)
from src.service.ticketing.driven_adapter.repo.event_inventory_repo_impl import (
    EventInventoryRepoImpl,
)
from src.service.ticketing.driven_adapter.repo.event_query_repo_impl import EventQueryRepoImpl
from src.service.ticketing.driven_adapter.repo.order_query_repo_impl import OrderQueryRepoImpl
from test.util_constant import (
    ANOTHER_BUYER_ID,
    BUYER_ID,
    DEFAULT_EVENT_DATE,
    SELLER_ID,
    UNKNOWN_ID,
)


STRATEGIES = [IsolationStrategy.PESSIMISTIC, IsolationStrategy.OPTIMISTIC]

_database = Database()
event_query_repo = EventQueryRepoImpl(session_factory=_database.session)
order_query_repo = OrderQueryRepoImpl(session_factory=_database.session)


async def _create_event(*, total_tickets: int = 10, ticket_price: str = '25.00') -> Event:
    return await EventCommandRepoImpl(session_factory=_database.session).create(
        event=Event.create(
            organizer_id=SELLER_ID,
            title='Jazz Night',
            description=None,
            venue_name='Blue Note Hall',
            event_date=DEFAULT_EVENT_DATE,
            ticket_price=Decimal(ticket_price),
            total_tickets=total_tickets,
        )
    )


async def _available(event_id: UUID) -> int:
    event = await event_query_repo.get_by_id(event_id=event_id)
    assert event is not None
    return event.available_tickets


async def _create_order(
    *, strategy: IsolationStrategy, event_id: UUID, quantity: int, buyer_id: int = BUYER_ID
):
    async with get_session_maker()() as session:
        use_case = CreateOrderUseCase(
            uow=SqlAlchemyUnitOfWork(session),
            event_cache=AsyncMock(spec=IEventCache),
            isolation_strategy=strategy,
            max_attempts=settings.ORDER_MAX_ATTEMPTS,
            retry_backoff_seconds=0,
            timeout_seconds=5,
        )
        return await use_case.create_order(buyer_id=buyer_id, event_id=event_id, quantity=quantity)


@pytest.mark.integration
class TestCreateOrderOnDatabase:
    @pytest.mark.asyncio
    @pytest.mark.parametrize('strategy', STRATEGIES)
    async def test_purchase_then_oversized_request(self, strategy: IsolationStrategy) -> None:
        # Arrange
        event = await _create_event(total_tickets=10, ticket_price='25.00')

        # Act
        order = await _create_order(strategy=strategy, event_id=event.id, quantity=3)

        # Assert
        stored = await order_query_repo.get_by_id(order_id=order.id)
        assert stored is not None
        assert stored.quantity == 3
        assert stored.total_amount == Decimal('75.00')
        assert stored.status == OrderStatus.PENDING
        assert await _available(event.id) == 7

        # Act - the next buyer wants more than what is left
        with pytest.raises(InsufficientTicketsError) as exc_info:
            await _create_order(
                strategy=strategy, event_id=event.id, quantity=8, buyer_id=ANOTHER_BUYER_ID
            )

        # Assert
        assert (exc_info.value.requested, exc_info.value.available) == (8, 7)
        assert await _available(event.id) == 7
        assert len(await order_query_repo.list_by_event(event_id=event.id)) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize('strategy', STRATEGIES)
    async def test_sell_out_exactly(self, strategy: IsolationStrategy) -> None:
        event = await _create_event(total_tickets=3)

        for _ in range(3):
            await _create_order(strategy=strategy, event_id=event.id, quantity=1)

        with pytest.raises(InsufficientTicketsError):
            await _create_order(strategy=strategy, event_id=event.id, quantity=1)

        assert await _available(event.id) == 0
        orders = await order_query_repo.list_by_event(event_id=event.id)
        assert sum(o.quantity for o in orders) == 3

    @pytest.mark.asyncio
    async def test_cancelled_event(self) -> None:
        event = await _create_event()
        await EventCommandRepoImpl(session_factory=_database.session).update_status(
            event_id=event.id, status=EventStatus.CANCELLED
        )

        with pytest.raises(EventNotActiveError):
            await _create_order(
                strategy=IsolationStrategy.PESSIMISTIC, event_id=event.id, quantity=1
            )

        assert await _available(event.id) == 10

    @pytest.mark.asyncio
    async def test_unknown_event(self) -> None:
        with pytest.raises(EventNotFoundError):
            await _create_order(
                strategy=IsolationStrategy.PESSIMISTIC, event_id=UNKNOWN_ID, quantity=1
            )

    @pytest.mark.asyncio
    async def test_lost_decrement_rolls_back_inserted_order(self) -> None:
        # Arrange - every conditional update loses, as if another writer always won
        event = await _create_event()

        # Act
        with patch.object(
            EventInventoryRepoImpl, 'decrement_available', AsyncMock(return_value=False)
        ):
            with pytest.raises(OrderCreationFailedError):
                await _create_order(
                    strategy=IsolationStrategy.OPTIMISTIC, event_id=event.id, quantity=2
                )

        # Assert - no order without its decrement
        assert await order_query_repo.list_by_event(event_id=event.id) == []
        assert await _available(event.id) == 10

    @pytest.mark.asyncio
    @pytest.mark.parametrize('strategy', STRATEGIES)
    async def test_concurrent_buyers_never_oversell(self, strategy: IsolationStrategy) -> None:
        # Arrange - twelve single-ticket buyers race for five tickets
        event = await _create_event(total_tickets=5)

        # Act
        results = await asyncio.gather(
            *(
                _create_order(
                    strategy=strategy, event_id=event.id, quantity=1, buyer_id=BUYER_ID + i
                )
                for i in range(12)
            ),
            return_exceptions=True,
        )

        # Assert - losers get a definitive sold-out answer, never a transient failure
        orders = [r for r in results if not isinstance(r, BaseException)]
        failures = [r for r in results if isinstance(r, BaseException)]
        assert len(orders) == 5
        assert len(failures) == 7
        assert all(isinstance(f, InsufficientTicketsError) for f in failures), failures
        assert await _available(event.id) == 0
        stored = await order_query_repo.list_by_event(event_id=event.id)
        assert sorted(o.buyer_id for o in stored) == sorted(o.buyer_id for o in orders)
