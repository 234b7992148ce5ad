from datetime import datetime
from decimal import Decimal
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.ticketing.domain.entity.event_entity import Event


class CreateEventUseCase:
    def __init__(self, *, event_command_repo: IEventCommandRepo) -> None:
        self.event_command_repo = event_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        event_command_repo: IEventCommandRepo = Depends(Provide[Container.event_command_repo]),
    ) -> Self:
        return cls(event_command_repo=event_command_repo)

    @Logger.io
    async def create_event(
        self,
        *,
        organizer_id: int,
        title: str,
        description: Optional[str],
        venue_name: str,
        event_date: datetime,
        ticket_price: Decimal,
        total_tickets: int,
    ) -> Event:
        """
        Create an ACTIVE event with all of its tickets available

        Raises:
            EventValidationError: empty title, negative price or non-positive capacity
        """
        event = Event.create(
            organizer_id=organizer_id,
            title=title,
            description=description,
            venue_name=venue_name,
            event_date=event_date,
            ticket_price=ticket_price,
            total_tickets=total_tickets,
        )
        return await self.event_command_repo.create(event=event)
