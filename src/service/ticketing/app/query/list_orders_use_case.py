from typing import List, Optional, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.ticketing.app.interface.i_order_query_repo import IOrderQueryRepo
from src.service.ticketing.domain.entity.order_entity import Order
from src.service.ticketing.domain.errors import EventNotFoundError


class ListOrdersUseCase:
    def __init__(
        self, *, order_query_repo: IOrderQueryRepo, event_query_repo: IEventQueryRepo
    ) -> None:
        self.order_query_repo = order_query_repo
        self.event_query_repo = event_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        order_query_repo: IOrderQueryRepo = Depends(Provide[Container.order_query_repo]),
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
    ) -> Self:
        return cls(order_query_repo=order_query_repo, event_query_repo=event_query_repo)

    @Logger.io
    async def list_buyer_orders(self, *, buyer_id: int) -> List[Order]:
        orders = await self.order_query_repo.list_by_buyer(buyer_id=buyer_id)
        Logger.base.info(f'📋 [LIST_ORDERS] Found {len(orders)} orders for buyer {buyer_id}')
        return orders

    @Logger.io
    async def list_event_orders(
        self, *, event_id: UUID, requester_id: Optional[int] = None, is_admin: bool = False
    ) -> List[Order]:
        """
        List all orders of an event

        When requester_id is given, only the event's organizer (or an admin) may list them.
        """
        if requester_id is not None and not is_admin:
            event = await self.event_query_repo.get_by_id(event_id=event_id)
            if event is None:
                raise EventNotFoundError(event_id)
            if event.organizer_id != requester_id:
                raise ForbiddenError('Only the event organizer can view its orders')

        orders = await self.order_query_repo.list_by_event(event_id=event_id)
        Logger.base.info(f'📋 [LIST_ORDERS] Found {len(orders)} orders for event {event_id}')
        return orders
