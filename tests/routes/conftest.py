# tests/routes/conftest.py
"""Pytest fixtures for route tests."""

from collections.abc import Awaitable, Callable
from datetime import timedelta

import pytest

from bloglist.db import Database
from bloglist.managers.token_manager import JWTTokenCodec
from bloglist.models import BlogDB, UserDB
from bloglist.repositories import BlogRepository, UserRepository
from bloglist.schemas import BlogInput, UserCreate

ROOT_PASSWORD = "sekret"  # noqa: S105

INITIAL_BLOGS = [
    BlogInput(
        title="React patterns",
        author="Michael Chan",
        url="https://reactpatterns.com/",
        likes=7,
    ),
    BlogInput(
        title="Go To Statement Considered Harmful",
        author="Edsger W. Dijkstra",
        url="http://www.u.arizona.edu/~rubinson/copyright_violations/Go_To_Considered_Harmful.html",
        likes=5,
    ),
]


async def create_user(database: Database, username: str, name: str) -> UserDB:
    async with database.transaction() as session:
        return await UserRepository(session).create(
            UserCreate(username=username, name=name, password=ROOT_PASSWORD),
        )


@pytest.fixture
def root_password() -> str:
    """Password every fixture user registers with."""
    return ROOT_PASSWORD


@pytest.fixture
async def root_user(database: Database) -> UserDB:
    """Registered user owning the initial blogs."""
    return await create_user(database, "root", "Superuser")


@pytest.fixture
async def other_user(database: Database) -> UserDB:
    """Registered user owning nothing."""
    return await create_user(database, "mluukkai", "Matti Luukkainen")


@pytest.fixture
async def initial_blogs(database: Database, root_user: UserDB) -> list[BlogDB]:
    """Blogs owned by `root_user`, recorded on the user as well."""
    blogs: list[BlogDB] = []
    async with database.transaction() as session:
        blog_repo = BlogRepository(session)
        user_repo = UserRepository(session)
        owner = await user_repo.get_or_raise(root_user.id)
        for blog in INITIAL_BLOGS:
            db_blog = await blog_repo.create(blog, owner=owner)
            await user_repo.append_blog(owner, db_blog.id)
            blogs.append(db_blog)
    return blogs


@pytest.fixture
def root_token(token_codec: JWTTokenCodec, root_user: UserDB) -> str:
    """Access token for `root_user`."""
    return token_codec.encode(root_user.id, root_user.username)


@pytest.fixture
def auth_headers(root_token: str) -> dict[str, str]:
    """Create auth headers with a valid access token."""
    return {"Authorization": f"Bearer {root_token}"}


@pytest.fixture
def other_auth_headers(token_codec: JWTTokenCodec, other_user: UserDB) -> dict[str, str]:
    """Auth headers for a user who owns none of the blogs."""
    token = token_codec.encode(other_user.id, other_user.username)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def expired_auth_headers(token_codec: JWTTokenCodec, root_user: UserDB) -> dict[str, str]:
    """Auth headers carrying a token that expired a minute ago."""
    token = token_codec.encode(
        root_user.id,
        root_user.username,
        expires_delta=timedelta(minutes=-1),
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def blogs_in_db(database: Database) -> Callable[[], Awaitable[list[BlogDB]]]:
    """Return a coroutine function listing the blogs currently stored."""

    async def _blogs() -> list[BlogDB]:
        async with database.transaction() as session:
            return await BlogRepository(session).get_all()

    return _blogs
