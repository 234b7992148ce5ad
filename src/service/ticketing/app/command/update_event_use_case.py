from datetime import datetime
from decimal import Decimal
from typing import Optional, Self
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
from src.service.ticketing.domain.errors import EventNotFoundError


class UpdateEventUseCase:
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
    async def update_event(
        self,
        *,
        event_id: UUID,
        actor_id: int,
        title: str,
        description: Optional[str],
        venue_name: str,
        event_date: datetime,
        ticket_price: Decimal,
        is_admin: bool = False,
    ) -> Event:
        """
        Replace an active event's details (organizer or admin only)

        Ticket counts are not editable: available_tickets moves only with orders.
        A new price applies to orders placed after the update commits.
        """
        event = await self.event_query_repo.get_by_id(event_id=event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        if not is_admin and event.organizer_id != actor_id:
            raise ForbiddenError('Only the event organizer can update it')

        changed = event.with_details(
            title=title,
            description=description,
            venue_name=venue_name,
            event_date=event_date,
            ticket_price=ticket_price,
        )
        updated = await self.event_command_repo.update_details(event=changed)
        if updated is None:
            raise EventNotFoundError(event_id)

        await self.event_cache.invalidate(event_id=event_id)
        Logger.base.info(f'🎪 [EVENT] Event {event_id} details updated')
        return updated
