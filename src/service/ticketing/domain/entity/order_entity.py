from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.domain.enum.order_status import OrderStatus


def _validate_positive_quantity(instance: object, attribute: attrs.Attribute, value: int) -> None:
    if value <= 0:
        raise ValueError(f'Order {attribute.name} must be greater than 0')


def _validate_non_negative_amount(
    instance: object, attribute: attrs.Attribute, value: Decimal
) -> None:
    if value < 0:
        raise ValueError(f'Order {attribute.name} cannot be negative')


@attrs.define
class Order:
    id: UUID
    buyer_id: int
    event_id: UUID
    quantity: int = attrs.field(validator=_validate_positive_quantity)
    total_amount: Decimal = attrs.field(validator=_validate_non_negative_amount)
    status: OrderStatus = OrderStatus.PENDING
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls, *, buyer_id: int, event_id: UUID, quantity: int, total_amount: Decimal
    ) -> 'Order':
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid7(),
            buyer_id=buyer_id,
            event_id=event_id,
            quantity=quantity,
            total_amount=total_amount,
            status=OrderStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

    @Logger.io
    def with_status(self, status: OrderStatus) -> 'Order':
        return attrs.evolve(self, status=status, updated_at=datetime.now(timezone.utc))
