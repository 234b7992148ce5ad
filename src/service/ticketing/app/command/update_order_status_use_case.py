from typing import Self
from uuid import UUID

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.domain.entity.order_entity import Order
from src.service.ticketing.domain.enum.order_status import OrderStatus
from src.service.ticketing.domain.errors import OrderNotFoundError, OrderValidationError


class UpdateOrderStatusUseCase:
    """Administrative status change; inventory is not touched"""

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def update_status(self, *, order_id: UUID, status: str) -> Order:
        try:
            new_status = OrderStatus(status)
        except ValueError:
            raise OrderValidationError(f'Invalid order status: {status}')

        async with self.uow:
            order = await self.uow.order_command_repo.update_status(
                order_id=order_id, status=new_status
            )
            if order is None:
                raise OrderNotFoundError(order_id)
            await self.uow.commit()

        Logger.base.info(f'📝 [ORDER] Order {order_id} status set to {new_status}')
        return order
