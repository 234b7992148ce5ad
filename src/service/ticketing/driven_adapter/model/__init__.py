"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.ticketing.driven_adapter.model.event_model import EventModel
from src.service.ticketing.driven_adapter.model.order_model import OrderModel

__all__ = [
    'EventModel',
    'OrderModel',
]
