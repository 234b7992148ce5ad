from datetime import datetime, timezone
from typing import AsyncContextManager, Callable
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.database.storage_error import storage_errors
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.ticketing.domain.entity.event_entity import Event
from src.service.ticketing.domain.enum.event_status import EventStatus
from src.service.ticketing.driven_adapter.model.event_model import EventModel
from src.service.ticketing.driven_adapter.repo.orm_mapper import (
    event_entity_to_model,
    event_model_to_entity,
)


class EventCommandRepoImpl(IEventCommandRepo):
    """Event catalogue writes; each call is its own short transaction"""

    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    @storage_errors
    async def create(self, *, event: Event) -> Event:
        async with self.session_factory() as session:
            session.add(event_entity_to_model(event))
            await session.commit()
        Logger.base.info(f'🎪 [EVENT] Created event {event.id} with {event.total_tickets} tickets')
        return event

    @Logger.io
    @storage_errors
    async def update_status(self, *, event_id: UUID, status: EventStatus) -> Event | None:
        async with self.session_factory() as session:
            event_model = await session.get(EventModel, event_id)
            if event_model is None:
                return None

            event_model.status = status.value
            event_model.updated_at = datetime.now(timezone.utc)
            await session.commit()
            return event_model_to_entity(event_model)

    @Logger.io
    @storage_errors
    async def update_details(self, *, event: Event) -> Event | None:
        async with self.session_factory() as session:
            event_model = await session.get(EventModel, event.id)
            if event_model is None:
                return None

            event_model.title = event.title
            event_model.description = event.description
            event_model.venue_name = event.venue_name
            event_model.event_date = event.event_date
            event_model.ticket_price = event.ticket_price
            event_model.updated_at = datetime.now(timezone.utc)
            await session.commit()
            return event_model_to_entity(event_model)

    @Logger.io
    @storage_errors
    async def delete_unsold(self, *, event_id: UUID) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(
                delete(EventModel).where(
                    EventModel.id == event_id,
                    EventModel.available_tickets == EventModel.total_tickets,
                )
            )
            await session.commit()
        return result.rowcount == 1  # type: ignore[attr-defined]
