from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.create_event_use_case import CreateEventUseCase
from src.service.ticketing.app.command.delete_event_use_case import DeleteEventUseCase
from src.service.ticketing.app.command.update_event_status_use_case import (
    UpdateEventStatusUseCase,
)
from src.service.ticketing.app.command.update_event_use_case import UpdateEventUseCase
from src.service.ticketing.app.query.get_event_use_case import GetEventUseCase
from src.service.ticketing.app.query.list_events_use_case import ListEventsUseCase
from src.service.ticketing.domain.entity.user_entity import UserEntity
from src.service.ticketing.driving_adapter.http_controller.auth.role_auth import (
    require_seller_or_admin,
)
from src.service.ticketing.driving_adapter.http_controller.schema.event_schema import (
    EventCreateRequest,
    EventResponse,
    EventStatusUpdateRequest,
    EventUpdateRequest,
)


router = APIRouter()


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_event(
    request: EventCreateRequest,
    current_user: UserEntity = Depends(require_seller_or_admin),
    use_case: CreateEventUseCase = Depends(CreateEventUseCase.depends),
) -> EventResponse:
    event = await use_case.create_event(
        organizer_id=current_user.id,
        title=request.title,
        description=request.description,
        venue_name=request.venue_name,
        event_date=request.event_date,
        ticket_price=request.ticket_price,
        total_tickets=request.total_tickets,
    )
    return EventResponse.from_entity(event)


@router.get('')
@Logger.io
async def list_events(
    status_filter: Optional[str] = Query(None, alias='status'),
    use_case: ListEventsUseCase = Depends(ListEventsUseCase.depends),
) -> List[EventResponse]:
    events = await use_case.list_events(status=status_filter)
    return [EventResponse.from_entity(event) for event in events]


@router.get('/my_events')
@Logger.io
async def list_my_events(
    current_user: UserEntity = Depends(require_seller_or_admin),
    use_case: ListEventsUseCase = Depends(ListEventsUseCase.depends),
) -> List[EventResponse]:
    events = await use_case.list_by_organizer(organizer_id=current_user.id)
    return [EventResponse.from_entity(event) for event in events]


@router.get('/{event_id}')
@Logger.io
async def get_event(
    event_id: UUID,
    use_case: GetEventUseCase = Depends(GetEventUseCase.depends),
) -> EventResponse:
    event = await use_case.get_event(event_id=event_id)
    return EventResponse.from_entity(event)


@router.patch('/{event_id}/status')
@Logger.io
async def update_event_status(
    event_id: UUID,
    request: EventStatusUpdateRequest,
    current_user: UserEntity = Depends(require_seller_or_admin),
    use_case: UpdateEventStatusUseCase = Depends(UpdateEventStatusUseCase.depends),
) -> EventResponse:
    event = await use_case.update_status(
        event_id=event_id,
        status=request.status,
        actor_id=current_user.id,
        is_admin=current_user.is_admin,
    )
    return EventResponse.from_entity(event)


@router.put('/{event_id}')
@Logger.io
async def update_event(
    event_id: UUID,
    request: EventUpdateRequest,
    current_user: UserEntity = Depends(require_seller_or_admin),
    use_case: UpdateEventUseCase = Depends(UpdateEventUseCase.depends),
) -> EventResponse:
    event = await use_case.update_event(
        event_id=event_id,
        actor_id=current_user.id,
        title=request.title,
        description=request.description,
        venue_name=request.venue_name,
        event_date=request.event_date,
        ticket_price=request.ticket_price,
        is_admin=current_user.is_admin,
    )
    return EventResponse.from_entity(event)


@router.delete('/{event_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_event(
    event_id: UUID,
    current_user: UserEntity = Depends(require_seller_or_admin),
    use_case: DeleteEventUseCase = Depends(DeleteEventUseCase.depends),
) -> Response:
    await use_case.delete(
        event_id=event_id, actor_id=current_user.id, is_admin=current_user.is_admin
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
