# bloglist/routes/user.py

"""
User Routes.

Summary
-------
Endpoints include:
  - Register user
  - List users (with their blogs joined in)
"""

from logging import getLogger

from fastapi import APIRouter
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from bloglist.configs import API_PREFIX
from bloglist.dependencies import UserRepoDep
from bloglist.errors.validation import SchemaValidationError
from bloglist.models import UserDB
from bloglist.schemas import (
    UserBlog,
    UserCreate,
    UserListResponse,
    UserResponse,
    validate_user,
)
from bloglist.utils.helpers import file_logger

router = APIRouter(prefix=f"{API_PREFIX}/users", tags=["👤 Users"])

logger = file_logger(getLogger(__name__))


def db_user_to_response(db_user: UserDB) -> UserResponse:
    """Convert a `UserDB` instance to `UserResponse`."""
    return UserResponse.model_validate(db_user, from_attributes=True)


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=UserResponse,
    status_code=HTTP_201_CREATED,
    summary="Register a new user",
    description="Create a user account. The password is stored only as a hash.",
    responses={
        400: {
            "description": "Validation failed",
            "content": {
                "application/json": {
                    "example": {
                        "error": "User validation failed: username: Error, "
                        "expected `username` to be unique. Value: `root`",
                    },
                },
            },
        },
    },
    operation_id="users_create",
)
async def create_user(user: UserCreate, repo: UserRepoDep) -> UserResponse:
    """
    Validate and register a new user.

    Parameters
    ----------
    user : UserCreate
        Registration payload.
    repo : UserRepository
        Repository dependency.

    Returns
    -------
    UserResponse
        Created user (without password).

    Raises
    ------
    SchemaValidationError
        If a field rule fails or the username is taken.
    DuplicateEntryError
        If the username was taken concurrently.
    """
    username_taken = bool(user.username) and await repo.username_exists(user.username or "")
    result = validate_user(user, username_taken=username_taken)
    if not result.ok:
        raise SchemaValidationError(result.message)

    db_user = await repo.create(user)
    logger.info(f"User {db_user.username} registered")
    return db_user_to_response(db_user)


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=list[UserListResponse],
    summary="Get all users",
    description="Retrieve every user with the blogs they own.",
    operation_id="users_get_all",
)
async def get_users(repo: UserRepoDep) -> list[UserListResponse]:
    """Get all users with their blogs."""
    rows = await repo.get_all_with_blogs()
    return [
        UserListResponse(
            id=db_user.id,
            username=db_user.username,
            name=db_user.name,
            blogs=[UserBlog.model_validate(blog, from_attributes=True) for blog in blogs],
        )
        for db_user, blogs in rows
    ]
