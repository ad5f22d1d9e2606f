# bloglist/dependencies/dependencies.py

"""
Request dependencies: database session, repositories and authentication.

Authentication runs in two steps. `get_request_user` extracts a bearer
token if one is present, decodes it and attaches the resolved user to
`request.state.user`; a request without a token passes through with no
identity. `get_current_user` is used by protected routes and rejects
requests that reached it without an identity.
"""

from collections.abc import AsyncGenerator
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel.ext.asyncio.session import AsyncSession

from bloglist.configs import Settings
from bloglist.db import Database
from bloglist.errors.auth import TokenMissingError, UserNotFoundError
from bloglist.errors.validation import MalformedIdError
from bloglist.managers.token_manager import TokenCodec
from bloglist.models import UserDB
from bloglist.monitoring import bind_user_id
from bloglist.repositories import BlogRepository, UserRepository

bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


def get_database(request: Request) -> Database:
    """Database handle created by the application factory."""
    return request.app.state.database


def get_token_codec(request: Request) -> TokenCodec:
    """Token codec configured on the application."""
    return request.app.state.token_codec


async def get_session(
    database: Annotated[Database, Depends(get_database)],
) -> AsyncGenerator[AsyncSession]:
    """
    Provide one transactional session per request.

    Yields:
        AsyncSession: Session that commits when the handler succeeds
    """
    async with database.transaction() as session:
        yield session


SessionDep = Annotated[AsyncSession, Depends(get_session)]
SettingsDep = Annotated[Settings, Depends(get_settings)]
TokenCodecDep = Annotated[TokenCodec, Depends(get_token_codec)]


def get_user_repository(session: SessionDep) -> UserRepository:
    """
    Resolve the `UserRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    UserRepository
        Repository instance bound to the session.
    """
    return UserRepository(session)


def get_blog_repository(session: SessionDep) -> BlogRepository:
    """
    Resolve the `BlogRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    BlogRepository
        Repository instance bound to the session.
    """
    return BlogRepository(session)


UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]
BlogRepoDep = Annotated[BlogRepository, Depends(get_blog_repository)]


def extract_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> str | None:
    """Return the bearer token from the Authorization header, if any."""
    if credentials is None or not credentials.credentials:
        return None
    return credentials.credentials


async def get_request_user(
    request: Request,
    token: Annotated[str | None, Depends(extract_token)],
    codec: TokenCodecDep,
    repo: UserRepoDep,
) -> UserDB | None:
    """
    Resolve the user behind the request's bearer token.

    Parameters
    ----------
    request : Request
        Current request; the resolved user is stored on `request.state.user`.
    token : str | None
        Bearer token, or None when the header is absent.
    codec : TokenCodec
        Codec used to verify the token.
    repo : UserRepository
        Repository used to load the user.

    Returns
    -------
    UserDB | None
        The user, or None when no token was sent.

    Raises
    ------
    InvalidTokenError
        If the token is malformed or fails verification.
    TokenExpiredError
        If the token is expired.
    UserNotFoundError
        If the token names a user that does not exist.
    """
    request.state.user = None
    if token is None:
        return None

    token_data = codec.decode(token)
    user = await repo.get_by_id(token_data.user_id)
    if user is None:
        raise UserNotFoundError

    request.state.user = user
    bind_user_id(str(user.id))
    return user


async def get_current_user(
    user: Annotated[UserDB | None, Depends(get_request_user)],
) -> UserDB:
    """
    Require an authenticated user.

    Raises
    ------
    TokenMissingError
        If the request carried no token.
    """
    if user is None:
        raise TokenMissingError
    return user


OptionalUserDep = Annotated[UserDB | None, Depends(get_request_user)]
UserDBDep = Annotated[UserDB, Depends(get_current_user)]


def get_blog_id(blog_id: str) -> UUID:
    """
    Parse the `{blog_id}` path segment.

    Raises
    ------
    MalformedIdError
        If the segment is not a valid UUID.
    """
    try:
        return UUID(blog_id)
    except ValueError as e:
        raise MalformedIdError from e


BlogIdDep = Annotated[UUID, Depends(get_blog_id)]
