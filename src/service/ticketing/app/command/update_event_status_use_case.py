from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_event_cache import IEventCache
from src.service.ticketing.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.ticketing.domain.entity.event_entity import Event
from src.service.ticketing.domain.enum.event_status import EventStatus
from src.service.ticketing.domain.errors import EventNotFoundError, EventValidationError


class UpdateEventStatusUseCase:
    def __init__(
        self,
        *,
        event_query_repo: IEventQueryRepo,
        event_command_repo: IEventCommandRepo,
        event_cache: IEventCache,
    ) -> None:
        self.event_query_repo = event_query_repo
        self.event_command_repo = event_command_repo
        self.event_cache = event_cache

    @classmethod
    @inject
    def depends(
        cls,
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
        event_command_repo: IEventCommandRepo = Depends(Provide[Container.event_command_repo]),
        event_cache: IEventCache = Depends(Provide[Container.event_cache]),
    ) -> Self:
        return cls(
            event_query_repo=event_query_repo,
            event_command_repo=event_command_repo,
            event_cache=event_cache,
        )

    @Logger.io
    async def update_status(
        self, *, event_id: UUID, status: str, actor_id: int, is_admin: bool = False
    ) -> Event:
        """
        Change an event's lifecycle status (organizer or admin only)

        Cancelling or completing an event stops further orders; tickets already
        sold are left as they are.
        """
        try:
            new_status = EventStatus(status)
        except ValueError:
            raise EventValidationError(f'Invalid event status: {status}')

        event = await self.event_query_repo.get_by_id(event_id=event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        if not is_admin and event.organizer_id != actor_id:
            raise ForbiddenError('Only the event organizer can change its status')

        updated = await self.event_command_repo.update_status(event_id=event_id, status=new_status)
        if updated is None:
            raise EventNotFoundError(event_id)

        await self.event_cache.invalidate(event_id=event_id)
        Logger.base.info(f'🎪 [EVENT] Event {event_id} status {event.status} -> {new_status}')
        return updated
