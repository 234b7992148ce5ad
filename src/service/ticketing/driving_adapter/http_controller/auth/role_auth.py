from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Cookie, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError
from src.service.ticketing.domain.entity.user_entity import UserEntity, UserRole
from src.service.ticketing.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


_bearer_scheme = HTTPBearer(auto_error=False)


class RoleAuthStrategy:
    @staticmethod
    def can_create_event(user: UserEntity) -> bool:
        return user.role in (UserRole.SELLER, UserRole.ADMIN)

    @staticmethod
    def can_create_order(user: UserEntity) -> bool:
        return user.role == UserRole.BUYER

    @staticmethod
    def is_admin(user: UserEntity) -> bool:
        return user.role == UserRole.ADMIN


@inject
async def get_current_user(
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
    token: Optional[str] = Cookie(None, alias=settings.AUTH_COOKIE_NAME),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> UserEntity:
    """Cookie first, then `Authorization: Bearer`"""
    if not token and credentials is not None:
        token = credentials.credentials
    return jwt_auth.get_current_user_info_from_jwt(token)


async def require_buyer(current_user: UserEntity = Depends(get_current_user)) -> UserEntity:
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(
        'auth.require_buyer',
        attributes={
            'user.id': current_user.id,
            'user.role': current_user.role.value,
        },
    ):
        if not RoleAuthStrategy.can_create_order(current_user):
            raise ForbiddenError('Only buyers can perform this action')
        return current_user


async def require_seller_or_admin(
    current_user: UserEntity = Depends(get_current_user),
) -> UserEntity:
    if not RoleAuthStrategy.can_create_event(current_user):
        raise ForbiddenError('Only sellers can perform this action')
    return current_user


async def require_admin(current_user: UserEntity = Depends(get_current_user)) -> UserEntity:
    if not RoleAuthStrategy.is_admin(current_user):
        raise ForbiddenError('Only admins can perform this action')
    return current_user
