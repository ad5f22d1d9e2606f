"""Authentication errors."""

from logging import getLogger

from starlette.status import HTTP_401_UNAUTHORIZED

from bloglist.errors.base import BaseAppError, create_exception_handler
from bloglist.utils.helpers import file_logger

logger = file_logger(getLogger(__name__))


class AuthorizationError(BaseAppError):
    """Base class for authentication and authorization errors."""

    def __init__(self, detail: str = "Authentication failed") -> None:
        super().__init__(detail, HTTP_401_UNAUTHORIZED)


class TokenMissingError(AuthorizationError):
    """Raised when a protected route is called without a usable identity."""

    def __init__(self) -> None:
        super().__init__("token missing or invalid")


class InvalidTokenError(AuthorizationError):
    """Raised when a token is malformed or its signature or claims do not verify."""

    def __init__(self, detail: str = "invalid token") -> None:
        super().__init__(detail)


class TokenExpiredError(InvalidTokenError):
    """Raised when a token is past its expiry."""

    def __init__(self) -> None:
        super().__init__("token expired")


class UserNotFoundError(AuthorizationError):
    """Raised when a valid token refers to a user that no longer exists."""

    def __init__(self) -> None:
        super().__init__("user not found")


class InvalidCredentialsError(AuthorizationError):
    """Raised when credentials are invalid."""

    def __init__(self) -> None:
        super().__init__("invalid username or password")


class NotOwnerError(AuthorizationError):
    """Raised when a user acts on a blog they do not own."""

    def __init__(self, action: str = "delete") -> None:
        super().__init__(f"token don't have right to {action} the blog")


auth_exception_handler = create_exception_handler(logger)
