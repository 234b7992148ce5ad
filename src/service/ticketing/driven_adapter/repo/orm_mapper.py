"""
Row <-> entity conversion shared by the SQLAlchemy repositories
"""

from src.service.ticketing.domain.entity.event_entity import Event
from src.service.ticketing.domain.entity.order_entity import Order
from src.service.ticketing.domain.enum.event_status import EventStatus
from src.service.ticketing.domain.enum.order_status import OrderStatus
from src.service.ticketing.driven_adapter.model.event_model import EventModel
from src.service.ticketing.driven_adapter.model.order_model import OrderModel


def event_model_to_entity(event_model: EventModel) -> Event:
    return Event(
        id=event_model.id,
        organizer_id=event_model.organizer_id,
        title=event_model.title,
        description=event_model.description,
        venue_name=event_model.venue_name,
        event_date=event_model.event_date,
        status=EventStatus(event_model.status),
        ticket_price=event_model.ticket_price,
        total_tickets=event_model.total_tickets,
        available_tickets=event_model.available_tickets,
        created_at=event_model.created_at,
        updated_at=event_model.updated_at,
    )


def event_entity_to_model(event: Event) -> EventModel:
    return EventModel(
        id=event.id,
        organizer_id=event.organizer_id,
        title=event.title,
        description=event.description,
        venue_name=event.venue_name,
        event_date=event.event_date,
        status=event.status.value,
        ticket_price=event.ticket_price,
        total_tickets=event.total_tickets,
        available_tickets=event.available_tickets,
        created_at=event.created_at,
        updated_at=event.updated_at,
    )


def order_model_to_entity(order_model: OrderModel) -> Order:
    return Order(
        id=order_model.id,
        buyer_id=order_model.buyer_id,
        event_id=order_model.event_id,
        quantity=order_model.quantity,
        total_amount=order_model.total_amount,
        status=OrderStatus(order_model.status),
        created_at=order_model.created_at,
        updated_at=order_model.updated_at,
    )


def order_entity_to_model(order: Order) -> OrderModel:
    return OrderModel(
        id=order.id,
        buyer_id=order.buyer_id,
        event_id=order.event_id,
        quantity=order.quantity,
        total_amount=order.total_amount,
        status=order.status.value,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )
