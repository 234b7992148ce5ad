"""
Event Query Repository Implementation - CQRS Read Side
"""

from typing import AsyncContextManager, Callable, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.database.storage_error import storage_errors
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.ticketing.domain.entity.event_entity import Event
from src.service.ticketing.domain.enum.event_status import EventStatus
from src.service.ticketing.driven_adapter.model.event_model import EventModel
from src.service.ticketing.driven_adapter.repo.orm_mapper import event_model_to_entity


class EventQueryRepoImpl(IEventQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    @storage_errors
    async def get_by_id(self, *, event_id: UUID) -> Optional[Event]:
        async with self.session_factory() as session:
            event_model = await session.get(EventModel, event_id)
            return event_model_to_entity(event_model) if event_model else None

    @Logger.io
    @storage_errors
    async def list_events(self, *, status: Optional[EventStatus] = None) -> List[Event]:
        query = select(EventModel).order_by(EventModel.event_date, EventModel.id)
        if status is not None:
            query = query.where(EventModel.status == status.value)

        async with self.session_factory() as session:
            result = await session.execute(query)
            return [event_model_to_entity(event_model) for event_model in result.scalars()]

    @Logger.io
    @storage_errors
    async def list_by_organizer(self, *, organizer_id: int) -> List[Event]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(EventModel)
                .where(EventModel.organizer_id == organizer_id)
                .order_by(EventModel.event_date, EventModel.id)
            )
            return [event_model_to_entity(event_model) for event_model in result.scalars()]
