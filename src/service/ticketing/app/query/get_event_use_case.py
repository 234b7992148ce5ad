from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_event_cache import IEventCache
from src.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.ticketing.domain.entity.event_entity import Event
from src.service.ticketing.domain.errors import EventNotFoundError


class GetEventUseCase:
    def __init__(self, *, event_query_repo: IEventQueryRepo, event_cache: IEventCache) -> None:
        self.event_query_repo = event_query_repo
        self.event_cache = event_cache

    @classmethod
    @inject
    def depends(
        cls,
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
        event_cache: IEventCache = Depends(Provide[Container.event_cache]),
    ) -> Self:
        return cls(event_query_repo=event_query_repo, event_cache=event_cache)

    @Logger.io
    async def get_event(self, *, event_id: UUID) -> Event:
        """Cache-aside read of a single event."""
        if cached := await self.event_cache.get(event_id=event_id):
            return cached

        Logger.base.info(f'🎫 [GET_EVENT] Loading event {event_id}')
        event = await self.event_query_repo.get_by_id(event_id=event_id)
        if event is None:
            Logger.base.warning(f'⚠️ [GET_EVENT] Event {event_id} not found')
            raise EventNotFoundError(event_id)

        await self.event_cache.set(event=event)
        return event
