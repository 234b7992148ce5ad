from typing import Any


class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    error_code: str = 'ERROR'

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    @property
    def context(self) -> dict[str, Any]:
        """Structured details a caller can act on (rendered next to the message)."""
        return {}


class ForbiddenError(CustomBaseError):
    error_code = 'FORBIDDEN'

    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class AuthenticationError(CustomBaseError):
    error_code = 'UNAUTHORIZED'

    def __init__(self, message: str) -> None:
        super().__init__(message, 401)
