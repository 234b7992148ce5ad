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
from src.service.ticketing.domain.errors import EventHasSoldTicketsError, EventNotFoundError


class DeleteEventUseCase:
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
    async def delete(self, *, event_id: UUID, actor_id: int, is_admin: bool = False) -> None:
        event = await self.event_query_repo.get_by_id(event_id=event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        if not is_admin and event.organizer_id != actor_id:
            raise ForbiddenError('Only the event organizer can delete it')
        if event.sold_tickets > 0:
            raise EventHasSoldTicketsError(event_id, event.sold_tickets)

        # the delete re-checks availability, so an order committed since the read wins
        if not await self.event_command_repo.delete_unsold(event_id=event_id):
            current = await self.event_query_repo.get_by_id(event_id=event_id)
            if current is None:
                raise EventNotFoundError(event_id)
            raise EventHasSoldTicketsError(event_id, current.sold_tickets)

        await self.event_cache.invalidate(event_id=event_id)
        Logger.base.info(f'🗑️ [EVENT] Event {event_id} deleted')
