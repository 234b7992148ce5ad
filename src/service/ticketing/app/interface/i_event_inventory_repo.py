"""
Event Inventory Repository Interface

Transactional side of the event row used by order creation. Implementations
work inside the Unit of Work's session; they never commit.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from src.service.ticketing.domain.entity.event_inventory import EventInventory


class IEventInventoryRepo(ABC):
    @abstractmethod
    async def get_for_update(self, *, event_id: UUID) -> EventInventory | None:
        """
        Read the event row and hold a row lock until the transaction ends

        Concurrent callers for the same event block here; other events are unaffected.
        """
        pass

    @abstractmethod
    async def get_snapshot(self, *, event_id: UUID) -> EventInventory | None:
        """Read the event row without locking (optimistic path)"""
        pass

    @abstractmethod
    async def decrement_available(
        self, *, event_id: UUID, expected_available: int, new_available: int
    ) -> bool:
        """
        Set available_tickets to new_available only if it still equals expected_available

        Returns:
            False when another transaction changed the row first (nothing was written)
        """
        pass
