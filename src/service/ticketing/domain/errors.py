"""
Order and event domain errors.

Each error carries a stable ``error_code`` and the structured fields a caller
needs to act on it; the HTTP layer renders ``context`` next to the message.
"""

from typing import Any, Optional
from uuid import UUID

from src.platform.exception.exceptions import CustomBaseError


class InvalidQuantityError(CustomBaseError):
    error_code = 'INVALID_QUANTITY'

    def __init__(self, quantity: Any) -> None:
        self.quantity = quantity
        super().__init__(f'Invalid quantity: {quantity}. Quantity must be greater than 0', 400)

    @property
    def context(self) -> dict[str, Any]:
        return {'quantity': self.quantity}


class EventNotFoundError(CustomBaseError):
    error_code = 'EVENT_NOT_FOUND'

    def __init__(self, event_id: UUID) -> None:
        self.event_id = event_id
        super().__init__(f'Event with ID {event_id} not found', 404)

    @property
    def context(self) -> dict[str, Any]:
        return {'event_id': self.event_id}


class EventNotActiveError(CustomBaseError):
    error_code = 'EVENT_NOT_ACTIVE'

    def __init__(self, event_id: UUID, status: str) -> None:
        self.event_id = event_id
        self.status = status
        super().__init__(f'Event {event_id} is not active (status: {status})', 409)

    @property
    def context(self) -> dict[str, Any]:
        return {'event_id': self.event_id, 'status': self.status}


class InsufficientTicketsError(CustomBaseError):
    error_code = 'INSUFFICIENT_TICKETS'

    def __init__(self, requested: int, available: int) -> None:
        self.requested = requested
        self.available = available
        super().__init__(
            f'Insufficient tickets: requested {requested}, available {available}', 409
        )

    @property
    def context(self) -> dict[str, Any]:
        return {'requested': self.requested, 'available': self.available}


class EventHasSoldTicketsError(CustomBaseError):
    error_code = 'CANNOT_DELETE_WITH_TICKETS'

    def __init__(self, event_id: UUID, sold_tickets: int) -> None:
        self.event_id = event_id
        self.sold_tickets = sold_tickets
        super().__init__(
            f'Event {event_id} cannot be deleted: {sold_tickets} tickets already sold', 409
        )

    @property
    def context(self) -> dict[str, Any]:
        return {'event_id': self.event_id, 'sold_tickets': self.sold_tickets}


class OrderCreationFailedError(CustomBaseError):
    """Storage failure, exhausted retries or deadline expiry; the transaction was rolled back."""

    error_code = 'ORDER_CREATION_FAILED'

    def __init__(self, cause: Optional[BaseException] = None) -> None:
        self.cause = cause
        super().__init__('Failed to create order', 500)


class OrderNotFoundError(CustomBaseError):
    error_code = 'ORDER_NOT_FOUND'

    def __init__(self, order_id: UUID) -> None:
        self.order_id = order_id
        super().__init__(f'Order with ID {order_id} not found', 404)

    @property
    def context(self) -> dict[str, Any]:
        return {'order_id': self.order_id}


class OrderValidationError(CustomBaseError):
    error_code = 'VALIDATION_ERROR'

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class EventValidationError(CustomBaseError):
    error_code = 'VALIDATION_ERROR'

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)
