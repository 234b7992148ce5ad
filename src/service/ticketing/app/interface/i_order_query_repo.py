from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from src.service.ticketing.domain.entity.order_entity import Order


class IOrderQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, order_id: UUID) -> Order | None:
        pass

    @abstractmethod
    async def list_by_buyer(self, *, buyer_id: int) -> List[Order]:
        """Orders placed by a buyer, oldest first"""
        pass

    @abstractmethod
    async def list_by_event(self, *, event_id: UUID) -> List[Order]:
        """Orders placed for an event, oldest first"""
        pass
