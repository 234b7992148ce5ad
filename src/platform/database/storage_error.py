"""
Storage-level failures, independent of the driver in use.

Repositories and the Unit of Work translate SQLAlchemy/driver exceptions into
these two types so the application layer can tell "retry the transaction"
apart from "the store is broken" without importing SQLAlchemy.
"""

from functools import wraps
from typing import Any, Awaitable, Callable, Optional, TypeVar, cast

from sqlalchemy.exc import DBAPIError, SQLAlchemyError


# serialization_failure, deadlock_detected
RETRYABLE_SQLSTATES = frozenset({'40001', '40P01'})

_F = TypeVar('_F', bound=Callable[..., Awaitable[Any]])


class StorageError(Exception):
    def __init__(self, message: str, *, cause: Optional[BaseException] = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


class ConcurrencyConflictError(StorageError):
    """A concurrent writer won; the whole transaction may be retried."""


def _sqlstate(exc: DBAPIError) -> Optional[str]:
    orig = exc.orig
    # asyncpg exposes .sqlstate, psycopg exposes .pgcode
    return getattr(orig, 'sqlstate', None) or getattr(orig, 'pgcode', None)


def translate_storage_error(exc: SQLAlchemyError) -> StorageError:
    if isinstance(exc, DBAPIError) and _sqlstate(exc) in RETRYABLE_SQLSTATES:
        return ConcurrencyConflictError(f'Transaction conflict: {exc.orig}', cause=exc)
    return StorageError(f'{type(exc).__name__}: {exc}', cause=exc)


def storage_errors(func: _F) -> _F:
    """Decorate an async repository method to raise StorageError instead of SQLAlchemy errors."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except SQLAlchemyError as e:
            raise translate_storage_error(e) from e

    return cast(_F, wrapper)
