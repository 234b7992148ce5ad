"""
Unit test configuration for the ticketing service.

Overrides the database cleanup fixture so unit tests never touch SQLite, and
provides the mocked collaborators shared by the use-case tests.
"""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, Mock

import pytest

from src.service.ticketing.app.interface.i_event_cache import IEventCache
from src.service.ticketing.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.ticketing.app.interface.i_order_query_repo import IOrderQueryRepo
from test.service.ticketing.unit.helpers import FakeUnitOfWork


@pytest.fixture(autouse=True, scope='function')
async def clean_database() -> AsyncGenerator[None, None]:
    """No-op override for unit tests - no real database needed"""
    yield


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    return FakeUnitOfWork()


@pytest.fixture
def mock_event_cache() -> Mock:
    cache = AsyncMock(spec=IEventCache)
    cache.get.return_value = None
    return cache


@pytest.fixture
def mock_event_query_repo() -> Mock:
    return AsyncMock(spec=IEventQueryRepo)


@pytest.fixture
def mock_event_command_repo() -> Mock:
    return AsyncMock(spec=IEventCommandRepo)


@pytest.fixture
def mock_order_query_repo() -> Mock:
    return AsyncMock(spec=IOrderQueryRepo)
