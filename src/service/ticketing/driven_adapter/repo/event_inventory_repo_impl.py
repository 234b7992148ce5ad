"""
Event Inventory Repository Implementation

Runs on the Unit of Work's session. Reads select plain columns rather than ORM
objects so a retried attempt never sees a stale identity-map copy of the row.
"""

from uuid import UUID

from sqlalchemy import Select, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func

from src.platform.database.storage_error import storage_errors
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_event_inventory_repo import IEventInventoryRepo
from src.service.ticketing.domain.entity.event_inventory import EventInventory
from src.service.ticketing.domain.enum.event_status import EventStatus
from src.service.ticketing.driven_adapter.model.event_model import EventModel


class EventInventoryRepoImpl(IEventInventoryRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _inventory_query(event_id: UUID) -> Select:
        return select(
            EventModel.id,
            EventModel.ticket_price,
            EventModel.available_tickets,
            EventModel.total_tickets,
            EventModel.status,
        ).where(EventModel.id == event_id)

    async def _fetch(self, query: Select) -> EventInventory | None:
        row = (await self.session.execute(query)).one_or_none()
        if row is None:
            return None
        return EventInventory(
            event_id=row.id,
            ticket_price=row.ticket_price,
            available_tickets=row.available_tickets,
            total_tickets=row.total_tickets,
            status=EventStatus(row.status),
        )

    @Logger.io
    @storage_errors
    async def get_for_update(self, *, event_id: UUID) -> EventInventory | None:
        if self.session.get_bind().dialect.name == 'sqlite':
            # sqlite drops FOR UPDATE; a no-op write takes the database write lock instead
            await self.session.execute(
                update(EventModel)
                .where(EventModel.id == event_id)
                .values(
                    available_tickets=EventModel.available_tickets,
                    updated_at=EventModel.updated_at,
                )
                .execution_options(synchronize_session=False)
            )
        return await self._fetch(self._inventory_query(event_id).with_for_update())

    @Logger.io
    @storage_errors
    async def get_snapshot(self, *, event_id: UUID) -> EventInventory | None:
        return await self._fetch(self._inventory_query(event_id))

    @Logger.io
    @storage_errors
    async def decrement_available(
        self, *, event_id: UUID, expected_available: int, new_available: int
    ) -> bool:
        result = await self.session.execute(
            update(EventModel)
            .where(
                EventModel.id == event_id,
                EventModel.available_tickets == expected_available,
            )
            .values(available_tickets=new_available, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1  # type: ignore[attr-defined]
