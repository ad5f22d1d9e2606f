from bloglist.errors.auth import (
    AuthorizationError,
    InvalidCredentialsError,
    InvalidTokenError,
    NotOwnerError,
    TokenExpiredError,
    TokenMissingError,
    UserNotFoundError,
    auth_exception_handler,
)
from bloglist.errors.base import BaseAppError, create_exception_handler, error_response
from bloglist.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DuplicateEntryError,
    RecordNotFoundError,
    database_exception_handler,
)
from bloglist.errors.password_hasher import (
    PasswordHashingError,
    password_hashing_exception_handler,
)
from bloglist.errors.validation import (
    UNKNOWN_ENDPOINT,
    MalformedIdError,
    SchemaValidationError,
    http_exception_handler,
    validation_error_handler,
    validation_exception_handler,
)

__all__ = [
    "UNKNOWN_ENDPOINT",
    "AuthorizationError",
    "BaseAppError",
    "DatabaseConnectionError",
    "DatabaseError",
    "DuplicateEntryError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "MalformedIdError",
    "NotOwnerError",
    "PasswordHashingError",
    "RecordNotFoundError",
    "SchemaValidationError",
    "TokenExpiredError",
    "TokenMissingError",
    "UserNotFoundError",
    "auth_exception_handler",
    "create_exception_handler",
    "database_exception_handler",
    "error_response",
    "http_exception_handler",
    "password_hashing_exception_handler",
    "validation_error_handler",
    "validation_exception_handler",
]
