"""
SQLAlchemy async engine and session management

- AsyncEngineManager: one engine per running event loop
- Database: session factory handed to query repositories through DI
- get_async_session: FastAPI dependency backing the request-scoped Unit of Work
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


def _engine_kwargs(url: str) -> dict[str, Any]:
    """Pool options only apply to server databases; sqlite manages its own pool."""
    kwargs: dict[str, Any] = {'echo': False}
    if make_url(url).get_backend_name().startswith('postgresql'):
        kwargs |= {
            'pool_size': settings.DB_POOL_SIZE,
            'max_overflow': settings.DB_POOL_MAX_OVERFLOW,
            'pool_timeout': settings.DB_POOL_TIMEOUT,
            'pool_recycle': settings.DB_POOL_RECYCLE,
            'pool_pre_ping': settings.DB_POOL_PRE_PING,
        }
    elif make_url(url).get_backend_name() == 'sqlite':
        # Concurrent writers wait on the database lock instead of failing at once
        kwargs['connect_args'] = {'timeout': 30}
    return kwargs


class AsyncEngineManager:
    """
    Keeps the engine bound to the running event loop.

    Test clients and CLI scripts spin up fresh loops; reusing a pool created on
    another loop fails with "Future attached to a different loop".
    """

    def __init__(self) -> None:
        self._engine: Optional[AsyncEngine] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    def get_engine(self) -> AsyncEngine:
        try:
            current_loop: Optional[asyncio.AbstractEventLoop] = asyncio.get_running_loop()
        except RuntimeError:
            current_loop = None

        if self._engine is None or (current_loop is not None and self._loop is not current_loop):
            if self._engine is not None:
                Logger.base.warning('🔄 [DB] Event loop changed, recreating engine')
            self._engine = create_async_engine(
                settings.DATABASE_URL_ASYNC, **_engine_kwargs(settings.DATABASE_URL_ASYNC)
            )
            self._session_maker = None
            self._loop = current_loop
        return self._engine

    def get_session_maker(self) -> async_sessionmaker[AsyncSession]:
        engine = self.get_engine()
        if self._session_maker is None:
            self._session_maker = async_sessionmaker(
                engine, class_=AsyncSession, expire_on_commit=False
            )
        return self._session_maker

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._session_maker = None
        self._loop = None


_engine_manager = AsyncEngineManager()


def get_engine() -> AsyncEngine:
    return _engine_manager.get_engine()


def get_session_maker() -> async_sessionmaker[AsyncSession]:
    return _engine_manager.get_session_maker()


async def dispose_engine() -> None:
    await _engine_manager.dispose()


class Base(DeclarativeBase):
    pass


async def create_db_and_tables() -> None:
    """Create tables directly from metadata (local runs and tests; prod uses Alembic)."""
    # Model modules register themselves on Base.metadata
    from src.service.ticketing.driven_adapter.model import event_model, order_model  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)
    Logger.base.info('🗄️  [DB] Tables ensured')


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session; rolled back and closed on exit."""
    async with get_session_maker()() as session:
        yield session


class Database:
    """Session factory for repositories that open their own short-lived sessions."""

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        async with get_session_maker()() as session:
            yield session
