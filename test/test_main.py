"""
Test-specific FastAPI Application

No tracing exporter and no Redis. Uses the shared app factory for routes,
exception handlers, health and metrics.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import create_db_and_tables, dispose_engine
from src.platform.logging.loguru_io import Logger


@asynccontextmanager
async def lifespan_for_tests(app: FastAPI) -> AsyncIterator[None]:
    """Minimal lifespan: tables, dependency injection, engine cleanup."""
    Logger.base.info('🧪 [Test App] Starting up...')

    await create_db_and_tables()

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Test App] Dependency injection wired')

    yield

    await dispose_engine()
    container.unwire()
    Logger.base.info('👋 [Test App] Shutdown complete')


app = create_app(
    lifespan=lifespan_for_tests,
    title_suffix=' (Test)',
    description='Ticket Order Service - test app',
    service_name='ticket-order-service-test',
)
