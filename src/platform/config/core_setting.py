from decimal import Decimal
from enum import StrEnum
from pathlib import Path
from typing import List, Optional

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class IsolationStrategy(StrEnum):
    PESSIMISTIC = 'pessimistic'  # SELECT ... FOR UPDATE on the event row
    OPTIMISTIC = 'optimistic'  # compare-and-set on the last read availability


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Ticket Order Service'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # Security
    SECRET_KEY: SecretStr = SecretStr('test_secret_key_change_in_production')
    ALGORITHM: str = 'HS256'
    AUTH_COOKIE_NAME: str = 'fastapiusersauth'

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = []  # add your frontend URL here

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',')]
        elif isinstance(v, list):
            return v
        return []

    # PostgreSQL
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'ticket_order_db'
    POSTGRES_PORT: int = 5432

    # Full async URL override (e.g. sqlite+aiosqlite:///./local.db for local runs)
    DATABASE_URL: Optional[str] = None

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        password = self.POSTGRES_PASSWORD.get_secret_value()
        return f'postgresql+asyncpg://{self.POSTGRES_USER}:{password}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'

    @property
    def DATABASE_URL_SYNC(self) -> str:
        return self.DATABASE_URL_ASYNC.replace('+asyncpg', '').replace('+aiosqlite', '')

    # Connection pool (ignored by dialects without a queue pool)
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT: int = 10  # seconds to wait for a connection
    DB_POOL_RECYCLE: int = 1800  # recycle connections after 30 minutes
    DB_POOL_PRE_PING: bool = True

    # Redis (event read cache)
    REDIS_HOST: str = 'localhost'
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    REDIS_PASSWORD: str = ''
    REDIS_DECODE_RESPONSES: bool = True
    REDIS_POOL_MAX_CONNECTIONS: int = 50
    REDIS_SOCKET_TIMEOUT: int = 5
    REDIS_SOCKET_CONNECT_TIMEOUT: int = 5

    EVENT_CACHE_ENABLED: bool = True
    EVENT_CACHE_TTL_SECONDS: int = 10

    # Order transaction
    ORDER_ISOLATION_STRATEGY: IsolationStrategy = IsolationStrategy.PESSIMISTIC
    ORDER_MAX_ATTEMPTS: int = 3
    ORDER_RETRY_BACKOFF_SECONDS: float = 0.05
    ORDER_TRANSACTION_TIMEOUT_SECONDS: float = 5.0

    @field_validator('ORDER_MAX_ATTEMPTS')
    @classmethod
    def validate_max_attempts(cls, v: int) -> int:
        if v < 1:
            raise ValueError('ORDER_MAX_ATTEMPTS must be at least 1')
        return v

    # Money
    CURRENCY_QUANTUM: Decimal = Decimal('0.01')


settings = Settings()  # type: ignore
