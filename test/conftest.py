"""
Test Configuration and Fixtures

This module provides:
- A throwaway SQLite database (aiosqlite) per test session, migrated with Alembic
- Table cleanup for every non-unit test
- An HTTP client over the test app and JWT helpers for buyer/seller/admin callers

Architecture:
- Unit tests (test/**/unit/ or @pytest.mark.unit): no database, mocks only
- Integration tests: real SQLite database with cleanup between tests
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# settings, the engine manager and use-case defaults read these at import time
# =============================================================================
import os
from pathlib import Path
import tempfile


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    test_db_dir = Path(tempfile.mkdtemp(prefix='ticket_order_test_'))
    os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{test_db_dir / f"test_{worker_id}.db"}'

    # No Redis in tests; event reads go straight to the database
    os.environ['EVENT_CACHE_ENABLED'] = 'false'
    os.environ['ORDER_RETRY_BACKOFF_SECONDS'] = '0'
    os.environ.pop('OTEL_EXPORTER_OTLP_ENDPOINT', None)

    # Create test log directory
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)


# Call immediately to set env vars before any imports
_early_setup_test_environment()

import asyncio  # noqa: E402
from collections.abc import AsyncGenerator, Callable, Generator  # noqa: E402

from alembic import command  # noqa: E402
from alembic.config import Config  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402

from src.platform.config.core_setting import settings  # noqa: E402
from src.platform.constant.path import ALEMBIC_INI  # noqa: E402
from src.platform.database.orm_db_setting import Base  # noqa: E402
from src.service.ticketing.domain.entity.user_entity import UserEntity, UserRole  # noqa: E402
from src.service.ticketing.driven_adapter.model import EventModel, OrderModel  # noqa: E402, F401
from src.service.ticketing.driving_adapter.http_controller.auth.jwt_auth import (  # noqa: E402
    JwtAuth,
)
from test.util_constant import (  # noqa: E402
    ADMIN_ID,
    ANOTHER_BUYER_ID,
    ANOTHER_SELLER_ID,
    BUYER_ID,
    SELLER_ID,
)


# =============================================================================
# Pytest Hooks: Detect test type and setup accordingly
# =============================================================================
def _is_unit_test_only_run(config: pytest.Config) -> bool:
    markexpr = config.getoption('markexpr', default='')
    if markexpr and 'unit' in str(markexpr) and 'not unit' not in str(markexpr):
        return True

    args = config.args or []
    test_paths = [arg for arg in args if arg and not arg.startswith('-')]
    return bool(test_paths and all('/unit/' in path or '\\unit\\' in path for path in test_paths))


def pytest_sessionstart(session: pytest.Session) -> None:
    if _is_unit_test_only_run(session.config):
        return
    _setup_test_database()


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        markers = [m.name for m in item.iter_markers()]
        if 'unit' not in markers:
            # Clean before any other fixture seeds data
            item.fixturenames.insert(0, 'clean_database')


# =============================================================================
# Database Setup and Cleanup
# =============================================================================
def _setup_test_database() -> None:
    alembic_cfg = Config(str(ALEMBIC_INI))
    alembic_cfg.set_main_option('sqlalchemy.url', settings.DATABASE_URL_SYNC)
    command.upgrade(alembic_cfg, 'head')


async def _clean_all_tables() -> None:
    engine = create_async_engine(settings.DATABASE_URL_ASYNC)
    try:
        async with engine.begin() as conn:
            # Children first (order references event)
            for table in reversed(Base.metadata.sorted_tables):
                await conn.execute(table.delete())
    finally:
        await engine.dispose()


# =============================================================================
# Integration Test Fixtures
# =============================================================================
@pytest.fixture(scope='function')
async def clean_database() -> AsyncGenerator[None, None]:
    await _clean_all_tables()
    yield

    from src.platform.database.orm_db_setting import _engine_manager

    # Engines created by async tests live on this fixture's loop; close them here
    if _engine_manager._loop is asyncio.get_running_loop():
        await _engine_manager.dispose()


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    from test.test_main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


# =============================================================================
# Caller identities (JWT)
# =============================================================================
_jwt_auth = JwtAuth()


def _token_for(*, user_id: int, role: UserRole, is_active: bool = True) -> str:
    return _jwt_auth.create_jwt_token(
        UserEntity(
            id=user_id,
            email=f'{role.value}{user_id}@test.com',
            name=f'Test {role.value.title()} {user_id}',
            role=role,
            is_active=is_active,
        )
    )


@pytest.fixture
def auth_headers() -> Callable[..., dict[str, str]]:
    def _headers(*, user_id: int, role: UserRole, is_active: bool = True) -> dict[str, str]:
        token = _token_for(user_id=user_id, role=role, is_active=is_active)
        return {'Authorization': f'Bearer {token}'}

    return _headers


@pytest.fixture
def buyer_headers(auth_headers: Callable[..., dict[str, str]]) -> dict[str, str]:
    return auth_headers(user_id=BUYER_ID, role=UserRole.BUYER)


@pytest.fixture
def another_buyer_headers(auth_headers: Callable[..., dict[str, str]]) -> dict[str, str]:
    return auth_headers(user_id=ANOTHER_BUYER_ID, role=UserRole.BUYER)


@pytest.fixture
def seller_headers(auth_headers: Callable[..., dict[str, str]]) -> dict[str, str]:
    return auth_headers(user_id=SELLER_ID, role=UserRole.SELLER)


@pytest.fixture
def another_seller_headers(auth_headers: Callable[..., dict[str, str]]) -> dict[str, str]:
    return auth_headers(user_id=ANOTHER_SELLER_ID, role=UserRole.SELLER)


@pytest.fixture
def admin_headers(auth_headers: Callable[..., dict[str, str]]) -> dict[str, str]:
    return auth_headers(user_id=ADMIN_ID, role=UserRole.ADMIN)
