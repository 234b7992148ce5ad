from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError, SQLAlchemyError

from src.platform.database.storage_error import (
    ConcurrencyConflictError,
    StorageError,
    storage_errors,
    translate_storage_error,
)
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork


class _DriverError(Exception):
    def __init__(self, sqlstate: str) -> None:
        super().__init__(f'driver error {sqlstate}')
        self.sqlstate = sqlstate


class _Psycopg2Error(Exception):
    def __init__(self, pgcode: str) -> None:
        super().__init__(f'driver error {pgcode}')
        self.pgcode = pgcode


def _dbapi_error(orig: Exception) -> DBAPIError:
    return DBAPIError('UPDATE event ...', {}, orig)


@pytest.mark.unit
class TestTranslateStorageError:
    @pytest.mark.parametrize('sqlstate', ['40001', '40P01'])
    def test_serialization_failure_and_deadlock_are_retryable(self, sqlstate: str) -> None:
        error = translate_storage_error(_dbapi_error(_DriverError(sqlstate)))

        assert isinstance(error, ConcurrencyConflictError)
        assert error.cause is not None

    def test_pgcode_is_recognised(self) -> None:
        error = translate_storage_error(_dbapi_error(_Psycopg2Error('40001')))

        assert isinstance(error, ConcurrencyConflictError)

    def test_other_errors_are_plain_storage_errors(self) -> None:
        integrity = IntegrityError('INSERT ...', {}, _DriverError('23505'))
        operational = OperationalError('SELECT 1', {}, Exception('connection reset'))

        for exc in (integrity, operational, SQLAlchemyError('boom')):
            error = translate_storage_error(exc)
            assert type(error) is StorageError
            assert error.cause is exc


@pytest.mark.unit
class TestStorageErrorsDecorator:
    @pytest.mark.asyncio
    async def test_translates_sqlalchemy_errors(self) -> None:
        @storage_errors
        async def failing() -> None:
            raise _dbapi_error(_DriverError('40P01'))

        with pytest.raises(ConcurrencyConflictError):
            await failing()

    @pytest.mark.asyncio
    async def test_passes_other_results_and_errors_through(self) -> None:
        @storage_errors
        async def ok(value: int) -> int:
            return value * 2

        @storage_errors
        async def bug() -> None:
            raise KeyError('x')

        assert await ok(21) == 42
        with pytest.raises(KeyError):
            await bug()


@pytest.mark.unit
class TestSqlAlchemyUnitOfWork:
    @pytest.mark.asyncio
    async def test_exit_without_commit_rolls_back(self) -> None:
        session = MagicMock()
        session.commit = AsyncMock()
        session.rollback = AsyncMock()

        async with SqlAlchemyUnitOfWork(session) as uow:
            assert uow.event_inventory_repo.session is session
            assert uow.order_command_repo.session is session

        session.commit.assert_not_awaited()
        session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_commit_failure_is_translated(self) -> None:
        session = MagicMock()
        session.commit = AsyncMock(side_effect=_dbapi_error(_DriverError('40001')))
        session.rollback = AsyncMock()

        with pytest.raises(ConcurrencyConflictError):
            async with SqlAlchemyUnitOfWork(session) as uow:
                await uow.commit()

        session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_rollback_failure_does_not_mask_original_error(self) -> None:
        session = MagicMock()
        session.rollback = AsyncMock(side_effect=OperationalError('ROLLBACK', {}, Exception()))

        with pytest.raises(RuntimeError, match='original'):
            async with SqlAlchemyUnitOfWork(session):
                raise RuntimeError('original')
