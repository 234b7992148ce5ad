"""Ticketing Domain Enums"""

from src.service.ticketing.domain.enum.event_status import EventStatus
from src.service.ticketing.domain.enum.order_status import OrderStatus

__all__ = ['EventStatus', 'OrderStatus']
