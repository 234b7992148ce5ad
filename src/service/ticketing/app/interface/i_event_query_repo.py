"""
Event Query Repository Interface - CQRS Read Side
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.service.ticketing.domain.entity.event_entity import Event
from src.service.ticketing.domain.enum.event_status import EventStatus


class IEventQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, event_id: UUID) -> Optional[Event]:
        pass

    @abstractmethod
    async def list_events(self, *, status: Optional[EventStatus] = None) -> List[Event]:
        """All events, optionally filtered by status, soonest event_date first"""
        pass

    @abstractmethod
    async def list_by_organizer(self, *, organizer_id: int) -> List[Event]:
        pass
