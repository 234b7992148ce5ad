from typing import Self
from uuid import UUID

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.domain.errors import OrderNotFoundError


class DeleteOrderUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def delete(self, *, order_id: UUID) -> None:
        async with self.uow:
            deleted = await self.uow.order_command_repo.delete(order_id=order_id)
            if not deleted:
                raise OrderNotFoundError(order_id)
            await self.uow.commit()

        Logger.base.info(f'🗑️ [ORDER] Order {order_id} deleted')
