from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from opentelemetry import trace

from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import mark_span_error
from src.service.ticketing.app.command.create_order_use_case import CreateOrderUseCase
from src.service.ticketing.app.command.delete_order_use_case import DeleteOrderUseCase
from src.service.ticketing.app.command.update_order_status_use_case import (
    UpdateOrderStatusUseCase,
)
from src.service.ticketing.app.query.get_order_use_case import GetOrderUseCase
from src.service.ticketing.app.query.list_orders_use_case import ListOrdersUseCase
from src.service.ticketing.domain.entity.user_entity import UserEntity
from src.service.ticketing.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
    require_admin,
    require_buyer,
)
from src.service.ticketing.driving_adapter.http_controller.schema.order_schema import (
    OrderCreateRequest,
    OrderResponse,
    OrderStatusUpdateRequest,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_order(
    request: OrderCreateRequest,
    current_user: UserEntity = Depends(require_buyer),
    use_case: CreateOrderUseCase = Depends(CreateOrderUseCase.depends),
) -> OrderResponse:
    with tracer.start_as_current_span('controller.create_order') as span:
        span.set_attribute('event_id', str(request.event_id))
        span.set_attribute('buyer_id', current_user.id)
        span.set_attribute('quantity', request.quantity)

        try:
            order = await use_case.create_order(
                buyer_id=current_user.id,
                event_id=request.event_id,
                quantity=request.quantity,
            )
        except CustomBaseError as e:
            mark_span_error(error_code=e.error_code, message=e.message)
            raise

        span.set_attribute('order.id', str(order.id))
        return OrderResponse.from_entity(order)


@router.get('/my_orders')
@Logger.io
async def list_my_orders(
    current_user: UserEntity = Depends(get_current_user),
    use_case: ListOrdersUseCase = Depends(ListOrdersUseCase.depends),
) -> List[OrderResponse]:
    orders = await use_case.list_buyer_orders(buyer_id=current_user.id)
    return [OrderResponse.from_entity(order) for order in orders]


@router.get('/event/{event_id}')
@Logger.io
async def list_event_orders(
    event_id: UUID,
    current_user: UserEntity = Depends(get_current_user),
    use_case: ListOrdersUseCase = Depends(ListOrdersUseCase.depends),
) -> List[OrderResponse]:
    orders = await use_case.list_event_orders(
        event_id=event_id, requester_id=current_user.id, is_admin=current_user.is_admin
    )
    return [OrderResponse.from_entity(order) for order in orders]


@router.get('/{order_id}')
@Logger.io
async def get_order(
    order_id: UUID,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetOrderUseCase = Depends(GetOrderUseCase.depends),
) -> OrderResponse:
    order = await use_case.get_order(
        order_id=order_id, requester_id=current_user.id, is_admin=current_user.is_admin
    )
    return OrderResponse.from_entity(order)


@router.patch('/{order_id}/status')
@Logger.io
async def update_order_status(
    order_id: UUID,
    request: OrderStatusUpdateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: UpdateOrderStatusUseCase = Depends(UpdateOrderStatusUseCase.depends),
) -> OrderResponse:
    order = await use_case.update_status(order_id=order_id, status=request.status)
    return OrderResponse.from_entity(order)


@router.delete('/{order_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_order(
    order_id: UUID,
    current_user: UserEntity = Depends(require_admin),
    use_case: DeleteOrderUseCase = Depends(DeleteOrderUseCase.depends),
) -> Response:
    await use_case.delete(order_id=order_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
