"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.ticketing.app.command import (
    create_event_use_case,
    create_order_use_case,
    delete_event_use_case,
    update_event_status_use_case,
    update_event_use_case,
)
from src.service.ticketing.app.query import (
    get_event_use_case,
    get_order_use_case,
    list_events_use_case,
    list_orders_use_case,
)
from src.service.ticketing.driving_adapter.http_controller.auth import role_auth


WIRE_MODULES: list[ModuleType] = [
    create_order_use_case,
    create_event_use_case,
    update_event_status_use_case,
    update_event_use_case,
    delete_event_use_case,
    get_order_use_case,
    list_orders_use_case,
    get_event_use_case,
    list_events_use_case,
    role_auth,
]
