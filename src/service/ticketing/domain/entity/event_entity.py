from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.domain.enum.event_status import EventStatus
from src.service.ticketing.domain.errors import EventValidationError


@attrs.define
class Event:
    id: UUID
    organizer_id: int
    title: str
    venue_name: str
    event_date: datetime
    ticket_price: Decimal
    total_tickets: int
    available_tickets: int
    description: Optional[str] = None
    status: EventStatus = EventStatus.ACTIVE
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        organizer_id: int,
        title: str,
        description: Optional[str],
        venue_name: str,
        event_date: datetime,
        ticket_price: Decimal,
        total_tickets: int,
    ) -> 'Event':
        _validate_details(title=title, ticket_price=ticket_price)
        if total_tickets <= 0:
            raise EventValidationError('Total tickets must be greater than 0')

        now = datetime.now(timezone.utc)
        return cls(
            id=uuid7(),
            organizer_id=organizer_id,
            title=title.strip(),
            description=description,
            venue_name=venue_name,
            event_date=event_date,
            ticket_price=ticket_price,
            total_tickets=total_tickets,
            available_tickets=total_tickets,
            status=EventStatus.ACTIVE,
            created_at=now,
            updated_at=now,
        )

    @property
    def sold_tickets(self) -> int:
        return self.total_tickets - self.available_tickets

    def with_details(
        self,
        *,
        title: str,
        description: Optional[str],
        venue_name: str,
        event_date: datetime,
        ticket_price: Decimal,
    ) -> 'Event':
        """Replace the descriptive fields; capacity and availability never change here"""
        if self.status != EventStatus.ACTIVE:
            raise EventValidationError(f'Cannot update {self.status.value.lower()} event')
        _validate_details(title=title, ticket_price=ticket_price)
        return attrs.evolve(
            self,
            title=title.strip(),
            description=description,
            venue_name=venue_name,
            event_date=event_date,
            ticket_price=ticket_price,
            updated_at=datetime.now(timezone.utc),
        )


def _validate_details(*, title: str, ticket_price: Decimal) -> None:
    if not title or not title.strip():
        raise EventValidationError('Event title cannot be empty')
    if ticket_price < 0:
        raise EventValidationError('Ticket price cannot be negative')
