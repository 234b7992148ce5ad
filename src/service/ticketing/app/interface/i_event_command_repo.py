from abc import ABC, abstractmethod
from uuid import UUID

from src.service.ticketing.domain.entity.event_entity import Event
from src.service.ticketing.domain.enum.event_status import EventStatus


class IEventCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, event: Event) -> Event:
        pass

    @abstractmethod
    async def update_status(self, *, event_id: UUID, status: EventStatus) -> Event | None:
        """Change the lifecycle status; available_tickets is left untouched"""
        pass

    @abstractmethod
    async def update_details(self, *, event: Event) -> Event | None:
        """Persist the descriptive fields; capacity and availability are left untouched"""
        pass

    @abstractmethod
    async def delete_unsold(self, *, event_id: UUID) -> bool:
        """Delete the event only while none of its tickets are sold"""
        pass
