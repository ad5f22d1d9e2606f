from bloglist.schemas.auth import LoginRequest, LoginResponse, TokenData
from bloglist.schemas.blog import BlogInput, BlogListResponse, BlogOwner, BlogResponse
from bloglist.schemas.health import HealthCheckResponse
from bloglist.schemas.user import UserBlog, UserCreate, UserListResponse, UserResponse
from bloglist.schemas.validation import (
    FieldError,
    ValidationResult,
    unique_violation,
    validate_blog,
    validate_user,
)

__all__ = [
    "BlogInput",
    "BlogListResponse",
    "BlogOwner",
    "BlogResponse",
    "FieldError",
    "HealthCheckResponse",
    "LoginRequest",
    "LoginResponse",
    "TokenData",
    "UserBlog",
    "UserCreate",
    "UserListResponse",
    "UserResponse",
    "ValidationResult",
    "unique_violation",
    "validate_blog",
    "validate_user",
]
