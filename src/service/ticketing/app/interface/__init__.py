"""Application layer interfaces (Ports)"""

from src.service.ticketing.app.interface.i_event_cache import IEventCache
from src.service.ticketing.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.ticketing.app.interface.i_event_inventory_repo import IEventInventoryRepo
from src.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.ticketing.app.interface.i_order_command_repo import IOrderCommandRepo
from src.service.ticketing.app.interface.i_order_query_repo import IOrderQueryRepo

__all__ = [
    'IEventCache',
    'IEventCommandRepo',
    'IEventInventoryRepo',
    'IEventQueryRepo',
    'IOrderCommandRepo',
    'IOrderQueryRepo',
]
