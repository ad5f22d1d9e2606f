"""Database engine and session management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from logging import getLogger
from typing import Any

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from bloglist.configs import Settings
from bloglist.utils.helpers import file_logger

logger = file_logger(getLogger(__name__))

STATEMENT_TIMEOUT_MS = 30000


def _configure_engine_events(engine: AsyncEngine) -> None:
    """Configure connection pool events for monitoring."""

    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("New database connection established")

    @event.listens_for(engine.sync_engine, "checkout")
    def on_checkout(
        dbapi_connection: object,
        connection_record: object,
        connection_proxy: object,
    ) -> None:
        logger.debug("Connection checked out from pool")

    @event.listens_for(engine.sync_engine, "checkin")
    def on_checkin(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("Connection returned to pool")


def _enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection: Any, connection_record: object) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(url: str, settings: Settings) -> AsyncEngine:
    """
    Create an async engine suited to the database backend in `url`.

    SQLite (used in tests) gets a single shared connection so that an
    in-memory database survives across sessions; PostgreSQL gets a sized
    pool and statement timeouts.

    Args:
        url: SQLAlchemy database URL
        settings: Application settings

    Returns:
        AsyncEngine: Configured engine
    """
    backend = make_url(url).get_backend_name()

    if backend == "sqlite":
        engine = create_async_engine(
            url,
            echo=settings.DATABASE_ECHO,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
        _enable_sqlite_foreign_keys(engine)
    else:
        engine = create_async_engine(
            url,
            echo=settings.DATABASE_ECHO,
            pool_size=settings.POOL_SIZE,
            max_overflow=settings.MAX_OVERFLOW,
            pool_timeout=settings.POOL_TIMEOUT,
            pool_recycle=settings.POOL_RECYCLE,
            pool_pre_ping=True,
            connect_args={
                "command_timeout": STATEMENT_TIMEOUT_MS / 1000,
                "server_settings": {
                    "statement_timeout": str(STATEMENT_TIMEOUT_MS),
                    "lock_timeout": str(STATEMENT_TIMEOUT_MS),
                },
            },
        )

    if settings.DEBUG:
        _configure_engine_events(engine)

    return engine


class Database:
    """
    Persistence handle owning one engine and its session factory.

    An instance is created by the application factory and stored on
    `app.state.database`; request handlers reach it through the
    `get_session` dependency.

    Example:
        ```python
        database = Database.from_settings(settings)
        await database.init()
        async with database.transaction() as session:
            session.add(UserDB(username="root", password_hash="..."))
        await database.close()
        ```
    """

    def __init__(self, url: str, settings: Settings) -> None:
        self.url = url
        self.engine = build_engine(url, settings)
        self.session_maker: async_sessionmaker[AsyncSession] = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Build a handle for the database URL of the active environment."""
        return cls(settings.database_url, settings)

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[AsyncSession]:
        """
        Context manager for explicit transaction management.

        Commits on successful exit, rolls back on exception.

        Yields:
            AsyncSession: Database session within a transaction
        """
        async with self.session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                logger.debug("Transaction rolled back")
                raise

    async def init(self) -> None:
        """
        Create all tables defined in SQLModel models.

        Note:
            This is a simple initialization; existing tables are left untouched.
        """
        async with self.engine.begin() as conn:
            # Import all models to ensure they are registered
            from bloglist.models import BlogDB, UserDB  # noqa: F401, PLC0415

            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Database initialized successfully!")

    async def drop_all(self) -> None:
        """Drop every table; used to reset state between test runs."""
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.drop_all)

    async def ping(self) -> bool:
        """Return True when a trivial query succeeds."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception:
            logger.exception("Database ping failed")
            return False
        return True

    async def close(self) -> None:
        """Dispose of all pooled connections."""
        await self.engine.dispose()
        logger.info("Database connections closed")
