"""
Inventory view of an event - the only fields an order decision reads
"""

from decimal import ROUND_HALF_UP, Decimal
from uuid import UUID

import attrs

from src.service.ticketing.domain.enum.event_status import EventStatus
from src.service.ticketing.domain.errors import EventNotActiveError, InsufficientTicketsError


@attrs.define(frozen=True)
class EventInventory:
    event_id: UUID
    ticket_price: Decimal
    available_tickets: int
    total_tickets: int
    status: EventStatus

    def ensure_can_sell(self, *, quantity: int) -> None:
        """
        Raises:
            EventNotActiveError: event is cancelled or completed
            InsufficientTicketsError: fewer tickets left than requested
        """
        if self.status != EventStatus.ACTIVE:
            raise EventNotActiveError(self.event_id, self.status.value)
        if self.available_tickets < quantity:
            raise InsufficientTicketsError(quantity, self.available_tickets)

    def price_for(self, *, quantity: int, quantum: Decimal) -> Decimal:
        return (self.ticket_price * quantity).quantize(quantum, rounding=ROUND_HALF_UP)
