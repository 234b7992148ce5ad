from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.database.storage_error import storage_errors
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_order_command_repo import IOrderCommandRepo
from src.service.ticketing.domain.entity.order_entity import Order
from src.service.ticketing.domain.enum.order_status import OrderStatus
from src.service.ticketing.driven_adapter.model.order_model import OrderModel
from src.service.ticketing.driven_adapter.repo.orm_mapper import (
    order_entity_to_model,
    order_model_to_entity,
)


class OrderCommandRepoImpl(IOrderCommandRepo):
    """Order writes on the Unit of Work's session; the caller commits"""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    @storage_errors
    async def create(self, *, order: Order) -> Order:
        self.session.add(order_entity_to_model(order))
        await self.session.flush()
        return order

    @Logger.io
    @storage_errors
    async def update_status(self, *, order_id: UUID, status: OrderStatus) -> Order | None:
        order_model = await self.session.get(OrderModel, order_id)
        if order_model is None:
            return None

        order_model.status = status.value
        order_model.updated_at = datetime.now(timezone.utc)
        await self.session.flush()
        return order_model_to_entity(order_model)

    @Logger.io
    @storage_errors
    async def delete(self, *, order_id: UUID) -> bool:
        result = await self.session.execute(delete(OrderModel).where(OrderModel.id == order_id))
        return result.rowcount > 0  # type: ignore[attr-defined]
