from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, StrictInt

from src.service.ticketing.domain.entity.order_entity import Order


class OrderCreateRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'examples': [
                {'event_id': '01936d8f-5e73-7c4e-a9c5-123456789abc', 'quantity': 2},
            ]
        }
    )

    event_id: UUID
    quantity: StrictInt  # sign is checked by the use case (INVALID_QUANTITY)


class OrderStatusUpdateRequest(BaseModel):
    model_config = ConfigDict(json_schema_extra={'examples': [{'status': 'COMPLETED'}]})

    status: str


class OrderResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'id': '01936d90-0a11-7b2e-8f3d-abcdef012345',  # UUID7
                'buyer_id': 2,
                'event_id': '01936d8f-5e73-7c4e-a9c5-123456789abc',
                'quantity': 2,
                'total_amount': '300.00',
                'status': 'PENDING',
                'created_at': '2025-01-10T10:30:00Z',
            }
        }
    )

    id: UUID
    buyer_id: int
    event_id: UUID
    quantity: int
    total_amount: Decimal
    status: str
    created_at: datetime | None = None

    @classmethod
    def from_entity(cls, order: Order) -> 'OrderResponse':
        return cls(
            id=order.id,
            buyer_id=order.buyer_id,
            event_id=order.event_id,
            quantity=order.quantity,
            total_amount=order.total_amount,
            status=order.status.value,
            created_at=order.created_at,
        )
