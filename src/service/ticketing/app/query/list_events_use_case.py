from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.ticketing.domain.entity.event_entity import Event
from src.service.ticketing.domain.enum.event_status import EventStatus
from src.service.ticketing.domain.errors import EventValidationError


class ListEventsUseCase:
    def __init__(self, *, event_query_repo: IEventQueryRepo) -> None:
        self.event_query_repo = event_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
    ) -> Self:
        return cls(event_query_repo=event_query_repo)

    @Logger.io
    async def list_events(self, *, status: Optional[str] = None) -> List[Event]:
        status_filter: Optional[EventStatus] = None
        if status is not None:
            try:
                status_filter = EventStatus(status)
            except ValueError:
                raise EventValidationError(f'Invalid event status: {status}')

        events = await self.event_query_repo.list_events(status=status_filter)
        Logger.base.info(f'🌟 [LIST_EVENTS] Found {len(events)} events (status={status_filter})')
        return events

    @Logger.io
    async def list_by_organizer(self, *, organizer_id: int) -> List[Event]:
        events = await self.event_query_repo.list_by_organizer(organizer_id=organizer_id)
        Logger.base.info(
            f'📋 [LIST_BY_ORGANIZER] Found {len(events)} events for organizer {organizer_id}'
        )
        return events
