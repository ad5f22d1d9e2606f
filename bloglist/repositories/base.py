"""Base repository for database operations."""

from logging import getLogger
from typing import Generic, TypeAlias, TypeVar
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from bloglist.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DuplicateEntryError,
    RecordNotFoundError,
)
from bloglist.utils.helpers import file_logger

logger = file_logger(getLogger(__name__))

FilterValue: TypeAlias = str | int | bool | UUID | None

ModelT = TypeVar("ModelT", bound=SQLModel)


class BaseRepository(Generic[ModelT]):
    """
    Base repository implementing common CRUD operations.

    This class provides a generic implementation of database operations
    that can be extended by specific entity repositories.

    Attributes:
        model: The SQLModel database model type.
        label: Name used in not-found messages.
    """

    model: type[ModelT]
    label: str = "record"

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def get_by_id(self, record_id: UUID) -> ModelT | None:
        """
        Get a record by its ID.

        Args:
            record_id: Record UUID

        Returns:
            ModelT | None: Record if found, None otherwise
        """
        return await self.session.get(self.model, record_id)

    async def get_by_field(self, field_name: str, value: FilterValue) -> ModelT | None:
        """
        Get a record by a specific field value.

        Args:
            field_name: Name of the field to search
            value: Value to search for

        Returns:
            ModelT | None: Record if found, None otherwise
        """
        field = getattr(self.model, field_name)
        statement = select(self.model).where(field == value)
        result = await self.session.exec(statement)
        return result.first()

    async def get_or_raise(self, record_id: UUID) -> ModelT:
        """
        Get a record by ID or raise an exception if not found.

        Args:
            record_id: Record UUID

        Returns:
            ModelT: Record if found

        Raises:
            RecordNotFoundError: If record is not found
        """
        record = await self.get_by_id(record_id)
        if record is None:
            raise RecordNotFoundError(detail=f"{self.label} not found")
        return record

    async def get_all(self) -> list[ModelT]:
        """Get every record, oldest first."""
        statement = select(self.model).order_by(self.model.created_at)  # type: ignore[attr-defined]
        result = await self.session.exec(statement)
        return list(result.all())

    async def delete(self, record: ModelT) -> None:
        """
        Delete a loaded record.

        Args:
            record: Record to remove
        """
        await self.session.delete(record)
        await self.session.flush()

    async def _add_and_refresh(self, record: ModelT) -> ModelT:
        """
        Add a record and refresh it from the database with error handling.

        Args:
            record: Record to add

        Returns:
            ModelT: Refreshed record

        Raises:
            DuplicateEntryError: If a unique constraint is violated
            DatabaseError: For other database errors
        """
        try:
            self.session.add(record)
            await self.session.flush()
            await self.session.refresh(record)
        except IntegrityError as e:
            error_msg = str(e.orig) if e.orig else str(e)
            duplicate = "unique" in error_msg.lower() or "duplicate" in error_msg.lower()
            detail = self.duplicate_message(record) if duplicate else "Database integrity error"
            await self.session.rollback()
            logger.warning(f"Integrity error saving {self.label}: {error_msg}")
            if duplicate:
                raise DuplicateEntryError(detail=detail) from e
            raise DatabaseError(detail=detail) from e
        except Exception as e:
            await self.session.rollback()
            logger.exception(f"Failed to save {self.label}")
            raise DatabaseConnectionError(detail="Failed to save record") from e
        return record

    def duplicate_message(self, record: ModelT) -> str:
        """Message used when `record` collides with a unique constraint."""
        return f"A {self.label} with this value already exists"

    async def _check_exists_by_field(self, field_name: str, value: FilterValue) -> bool:
        """
        Check if a record exists with a specific field value.

        Args:
            field_name: Name of the field to check
            value: Value to check for

        Returns:
            bool: True if record exists, False otherwise
        """
        field = getattr(self.model, field_name)
        statement = select(field).where(field == value).limit(1)
        result = await self.session.exec(statement)
        return result.first() is not None
