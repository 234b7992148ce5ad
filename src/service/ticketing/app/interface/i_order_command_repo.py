from abc import ABC, abstractmethod
from uuid import UUID

from src.service.ticketing.domain.entity.order_entity import Order
from src.service.ticketing.domain.enum.order_status import OrderStatus


class IOrderCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, order: Order) -> Order:
        """Insert the order inside the current transaction (flushed, not committed)"""
        pass

    @abstractmethod
    async def update_status(self, *, order_id: UUID, status: OrderStatus) -> Order | None:
        pass

    @abstractmethod
    async def delete(self, *, order_id: UUID) -> bool:
        pass
