"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings, settings
from src.platform.database.orm_db_setting import Database
from src.platform.state.redis_client import redis_client
from src.service.ticketing.driven_adapter.cache.event_cache_impl import EventCacheImpl
from src.service.ticketing.driven_adapter.repo.event_command_repo_impl import (
    EventCommandRepoImpl,
)
from src.service.ticketing.driven_adapter.repo.event_query_repo_impl import EventQueryRepoImpl
from src.service.ticketing.driven_adapter.repo.order_query_repo_impl import OrderQueryRepoImpl
from src.service.ticketing.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (session factory for repositories outside the Unit of Work)
    database = providers.Singleton(Database)

    # Repositories (stateless - use session_factory per call)
    event_command_repo = providers.Singleton(
        EventCommandRepoImpl, session_factory=database.provided.session
    )
    event_query_repo = providers.Singleton(
        EventQueryRepoImpl, session_factory=database.provided.session
    )
    order_query_repo = providers.Singleton(
        OrderQueryRepoImpl, session_factory=database.provided.session
    )

    # Event read cache (no-op when disabled or Redis is not connected)
    event_cache = providers.Singleton(
        EventCacheImpl,
        redis_client=redis_client,
        enabled=settings.EVENT_CACHE_ENABLED,
        ttl_seconds=settings.EVENT_CACHE_TTL_SECONDS,
    )

    # Auth service
    jwt_auth = providers.Singleton(JwtAuth)


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
