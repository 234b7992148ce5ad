from enum import Enum

import attrs


class UserRole(str, Enum):
    SELLER = 'seller'
    BUYER = 'buyer'
    ADMIN = 'admin'


@attrs.define
class UserEntity:
    """Caller identity rebuilt from JWT claims; users are managed by the user service."""

    id: int
    email: str = ''
    name: str = ''
    role: UserRole = UserRole.BUYER
    is_active: bool = True

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
