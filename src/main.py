"""
Production FastAPI Application

Order and event HTTP API over PostgreSQL, with an optional Redis read cache.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from redis.exceptions import RedisError

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import dispose_engine, get_engine
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig
from src.platform.state.redis_client import redis_client


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Order Service] Starting up...')

    tracing = TracingConfig(service_name='ticket-order-service')
    tracing.setup()
    Logger.base.info('📊 [Order Service] OpenTelemetry tracing configured')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Order Service] Dependency injection wired')

    tracing.instrument_sqlalchemy(engine=get_engine())
    Logger.base.info('🗄️  [Order Service] Database engine ready + instrumented')

    if settings.EVENT_CACHE_ENABLED:
        tracing.instrument_redis()
        try:
            await redis_client.initialize()
            Logger.base.info('📡 [Order Service] Redis event cache initialized')
        except (RedisError, OSError) as e:
            # The cache is optional; event reads fall back to the database
            Logger.base.warning(f'⚠️ [Order Service] Redis unavailable, event cache off: {e}')

    Logger.base.info('✅ [Order Service] Ready to serve requests')

    yield

    Logger.base.info('🛑 [Order Service] Shutting down...')

    await redis_client.disconnect()
    await dispose_engine()
    Logger.base.info('🗄️  [Order Service] Connections closed')

    tracing.shutdown()
    container.unwire()

    Logger.base.info('👋 [Order Service] Shutdown complete')


app = create_app(
    lifespan=lifespan,
    description='Ticket Order Service - event catalogue and oversell-safe order creation',
)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
