"""
Event Cache Interface

Cache-aside store for event reads. Every method is best effort: a broken cache
behaves like an empty one and never fails the caller.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from src.service.ticketing.domain.entity.event_entity import Event


class IEventCache(ABC):
    @abstractmethod
    async def get(self, *, event_id: UUID) -> Event | None:
        pass

    @abstractmethod
    async def set(self, *, event: Event) -> None:
        pass

    @abstractmethod
    async def invalidate(self, *, event_id: UUID) -> None:
        pass
