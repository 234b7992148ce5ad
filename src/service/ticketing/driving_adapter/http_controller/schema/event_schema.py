from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from src.service.ticketing.domain.entity.event_entity import Event


class EventCreateRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'title': 'Jazz Night',
                'description': 'An evening of live jazz',
                'venue_name': 'Blue Note Hall',
                'event_date': '2030-06-01T20:00:00Z',
                'ticket_price': '150.00',
                'total_tickets': 100,
            }
        }
    )

    title: str = Field(max_length=255)
    description: Optional[str] = None
    venue_name: str = Field(max_length=255)
    event_date: datetime
    ticket_price: Decimal = Field(max_digits=10, decimal_places=2)
    total_tickets: StrictInt


class EventUpdateRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'title': 'Jazz Night - Late Set',
                'description': 'Second set added',
                'venue_name': 'Blue Note Hall',
                'event_date': '2030-06-01T22:00:00Z',
                'ticket_price': '120.00',
            }
        }
    )

    title: str = Field(max_length=255)
    description: Optional[str] = None
    venue_name: str = Field(max_length=255)
    event_date: datetime
    ticket_price: Decimal = Field(max_digits=10, decimal_places=2)


class EventStatusUpdateRequest(BaseModel):
    model_config = ConfigDict(json_schema_extra={'examples': [{'status': 'CANCELLED'}]})

    status: str


class EventResponse(BaseModel):
    id: UUID
    organizer_id: int
    title: str
    description: Optional[str] = None
    venue_name: str
    event_date: datetime
    status: str
    ticket_price: Decimal
    total_tickets: int
    available_tickets: int

    @classmethod
    def from_entity(cls, event: Event) -> 'EventResponse':
        return cls(
            id=event.id,
            organizer_id=event.organizer_id,
            title=event.title,
            description=event.description,
            venue_name=event.venue_name,
            event_date=event.event_date,
            status=event.status.value,
            ticket_price=event.ticket_price,
            total_tickets=event.total_tickets,
            available_tickets=event.available_tickets,
        )
