from typing import Optional, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_order_query_repo import IOrderQueryRepo
from src.service.ticketing.domain.entity.order_entity import Order
from src.service.ticketing.domain.errors import OrderNotFoundError


class GetOrderUseCase:
    def __init__(self, *, order_query_repo: IOrderQueryRepo) -> None:
        self.order_query_repo = order_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        order_query_repo: IOrderQueryRepo = Depends(Provide[Container.order_query_repo]),
    ) -> Self:
        return cls(order_query_repo=order_query_repo)

    @Logger.io
    async def get_order(
        self, *, order_id: UUID, requester_id: Optional[int] = None, is_admin: bool = False
    ) -> Order:
        """
        Get order by ID

        When requester_id is given, a non-admin requester may only read their own orders.

        Raises:
            OrderNotFoundError: no such order
            ForbiddenError: order belongs to another buyer
        """
        order = await self.order_query_repo.get_by_id(order_id=order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        if requester_id is not None and not is_admin and order.buyer_id != requester_id:
            raise ForbiddenError('You can only view your own orders')

        return order
