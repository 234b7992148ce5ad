"""
Order Query Repository Implementation - CQRS Read Side
"""

from typing import AsyncContextManager, Callable, List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.database.storage_error import storage_errors
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_order_query_repo import IOrderQueryRepo
from src.service.ticketing.domain.entity.order_entity import Order
from src.service.ticketing.driven_adapter.model.order_model import OrderModel
from src.service.ticketing.driven_adapter.repo.orm_mapper import order_model_to_entity


class OrderQueryRepoImpl(IOrderQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    @storage_errors
    async def get_by_id(self, *, order_id: UUID) -> Order | None:
        async with self.session_factory() as session:
            order_model = await session.get(OrderModel, order_id)
            return order_model_to_entity(order_model) if order_model else None

    @Logger.io
    @storage_errors
    async def list_by_buyer(self, *, buyer_id: int) -> List[Order]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(OrderModel)
                .where(OrderModel.buyer_id == buyer_id)
                .order_by(OrderModel.created_at, OrderModel.id)
            )
            return [order_model_to_entity(order_model) for order_model in result.scalars()]

    @Logger.io
    @storage_errors
    async def list_by_event(self, *, event_id: UUID) -> List[Order]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(OrderModel)
                .where(OrderModel.event_id == event_id)
                .order_by(OrderModel.created_at, OrderModel.id)
            )
            return [order_model_to_entity(order_model) for order_model in result.scalars()]
