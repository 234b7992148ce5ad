"""
Event Cache Implementation (Redis, cache-aside)

Key:   event:{event_id}
Value: orjson-encoded event, expires after EVENT_CACHE_TTL_SECONDS

Any Redis failure is logged and reported as a miss. The order transaction
never reads from here, so a stale entry can only delay what a reader sees.

A reader that loads the row before a write commits can still `set` it after the
writer's `invalidate`. That entry lives at most one TTL, so keep the TTL short.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional
from uuid import UUID

import orjson
from redis.exceptions import RedisError

from src.platform.logging.loguru_io import Logger
from src.platform.metrics.order_metrics import metrics
from src.platform.state.redis_client import RedisClient
from src.service.ticketing.app.interface.i_event_cache import IEventCache
from src.service.ticketing.domain.entity.event_entity import Event
from src.service.ticketing.domain.enum.event_status import EventStatus


def _make_key(event_id: UUID) -> str:
    return f'event:{event_id}'


def _default(obj: Any) -> Any:
    if isinstance(obj, Decimal):
        return str(obj)
    raise TypeError


def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


def encode_event(event: Event) -> bytes:
    return orjson.dumps(
        {
            'id': event.id,
            'organizer_id': event.organizer_id,
            'title': event.title,
            'description': event.description,
            'venue_name': event.venue_name,
            'event_date': event.event_date,
            'status': event.status.value,
            'ticket_price': event.ticket_price,
            'total_tickets': event.total_tickets,
            'available_tickets': event.available_tickets,
            'created_at': event.created_at,
            'updated_at': event.updated_at,
        },
        default=_default,
    )


def decode_event(raw: bytes | str) -> Event:
    data = orjson.loads(raw)
    return Event(
        id=UUID(data['id']),
        organizer_id=data['organizer_id'],
        title=data['title'],
        description=data['description'],
        venue_name=data['venue_name'],
        event_date=datetime.fromisoformat(data['event_date']),
        status=EventStatus(data['status']),
        ticket_price=Decimal(data['ticket_price']),
        total_tickets=data['total_tickets'],
        available_tickets=data['available_tickets'],
        created_at=_parse_datetime(data['created_at']),
        updated_at=_parse_datetime(data['updated_at']),
    )


class EventCacheImpl(IEventCache):
    def __init__(self, *, redis_client: RedisClient, enabled: bool, ttl_seconds: int) -> None:
        self.redis_client = redis_client
        self.enabled = enabled
        self.ttl_seconds = ttl_seconds

    def _active(self) -> bool:
        return self.enabled and self.redis_client.is_initialized

    async def get(self, *, event_id: UUID) -> Event | None:
        if not self._active():
            return None
        try:
            raw = await self.redis_client.get_client().get(_make_key(event_id))
        except RedisError as e:
            metrics.record_cache_lookup(result='error')
            Logger.base.warning(f'⚠️ [EVENT-CACHE] get {event_id} failed, reading from DB: {e}')
            return None

        if raw is None:
            metrics.record_cache_lookup(result='miss')
            return None

        try:
            event = decode_event(raw)
        except (orjson.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            metrics.record_cache_lookup(result='error')
            Logger.base.warning(f'⚠️ [EVENT-CACHE] Dropping undecodable entry for {event_id}: {e}')
            await self.invalidate(event_id=event_id)
            return None

        metrics.record_cache_lookup(result='hit')
        return event

    async def set(self, *, event: Event) -> None:
        if not self._active():
            return
        try:
            await self.redis_client.get_client().set(
                _make_key(event.id), encode_event(event), ex=self.ttl_seconds
            )
        except RedisError as e:
            Logger.base.warning(f'⚠️ [EVENT-CACHE] set {event.id} failed: {e}')

    async def invalidate(self, *, event_id: UUID) -> None:
        if not self._active():
            return
        try:
            await self.redis_client.get_client().delete(_make_key(event_id))
        except RedisError as e:
            Logger.base.warning(f'⚠️ [EVENT-CACHE] invalidate {event_id} failed: {e}')
