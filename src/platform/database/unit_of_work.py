"""
Unit of Work - one database session, one transaction, many repositories

Usage:
    async with uow:
        await uow.order_command_repo.create(order=order)
        await uow.event_inventory_repo.decrement_available(...)
        await uow.commit()

Leaving the block without commit() rolls back. The rollback is shielded from
cancellation so a timed-out or cancelled caller never leaves the row lock held.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

import anyio
from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.database.orm_db_setting import get_async_session
from src.platform.database.storage_error import translate_storage_error
from src.platform.logging.loguru_io import Logger


if TYPE_CHECKING:
    from src.service.ticketing.app.interface.i_event_inventory_repo import IEventInventoryRepo
    from src.service.ticketing.app.interface.i_order_command_repo import IOrderCommandRepo


class AbstractUnitOfWork(abc.ABC):
    event_inventory_repo: IEventInventoryRepo
    order_command_repo: IOrderCommandRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args) -> None:
        with anyio.CancelScope(shield=True):
            await self.rollback()

    async def commit(self) -> None:
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        from src.service.ticketing.driven_adapter.repo.event_inventory_repo_impl import (
            EventInventoryRepoImpl,
        )
        from src.service.ticketing.driven_adapter.repo.order_command_repo_impl import (
            OrderCommandRepoImpl,
        )

        # Repositories share the unit's session and therefore its transaction
        self.event_inventory_repo = EventInventoryRepoImpl(self.session)
        self.order_command_repo = OrderCommandRepoImpl(self.session)
        await super().__aenter__()
        return self

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            raise translate_storage_error(e) from e

    async def rollback(self) -> None:
        try:
            await self.session.rollback()
        except SQLAlchemyError as e:
            # The connection is already gone; the server discards the transaction
            Logger.base.warning(f'⚠️ [UOW] Rollback failed: {e}')


def get_unit_of_work(session: AsyncSession = Depends(get_async_session)) -> AbstractUnitOfWork:
    return SqlAlchemyUnitOfWork(session)
