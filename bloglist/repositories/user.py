"""User repository for database operations."""

from uuid import UUID

from sqlmodel import select

from bloglist.managers.password_manager import hash_password
from bloglist.models import BlogDB, UserDB
from bloglist.repositories.base import BaseRepository
from bloglist.schemas.user import UserCreate
from bloglist.schemas.validation import unique_violation


class UserRepository(BaseRepository[UserDB]):
    """
    Repository for User database operations.

    Passwords are hashed here, so plaintext never reaches the model.
    """

    model = UserDB
    label = "user"

    async def create(self, user: UserCreate) -> UserDB:
        """
        Create a new user in the database.

        Args:
            user: Validated registration payload

        Returns:
            UserDB: Created user database model

        Raises:
            DuplicateEntryError: If the username already exists
        """
        password_hash = await hash_password(user.password or "")
        db_user = UserDB(
            username=user.username,
            name=user.name,
            password_hash=password_hash,
        )
        return await self._add_and_refresh(db_user)

    async def get_by_username(self, username: str) -> UserDB | None:
        """Get a user by username."""
        return await self.get_by_field("username", username)

    async def username_exists(self, username: str) -> bool:
        """Check whether a username is already taken."""
        return await self._check_exists_by_field("username", username)

    async def append_blog(self, user: UserDB, blog_id: UUID) -> UserDB:
        """
        Append a blog id to the user's ordered blog list.

        The list is reassigned rather than mutated so the JSON column is
        flagged dirty.
        """
        user.blog_ids = [*user.blog_ids, str(blog_id)]
        return await self._add_and_refresh(user)

    async def remove_blog(self, user_id: UUID, blog_id: UUID) -> None:
        """Drop a blog id from its owner's list, if the owner still exists."""
        user = await self.get_by_id(user_id)
        if user is None:
            return
        user.blog_ids = [bid for bid in user.blog_ids if bid != str(blog_id)]
        await self._add_and_refresh(user)

    async def get_all_with_blogs(self) -> list[tuple[UserDB, list[BlogDB]]]:
        """
        Get every user together with the blogs they own.

        Blogs are returned in the order recorded on the user.

        Returns:
            list[tuple[UserDB, list[BlogDB]]]: Users paired with their blogs
        """
        users = await self.get_all()
        result = await self.session.exec(select(BlogDB))
        blogs_by_id = {str(blog.id): blog for blog in result.all()}

        return [
            (user, [blogs_by_id[bid] for bid in user.blog_ids if bid in blogs_by_id])
            for user in users
        ]

    def duplicate_message(self, record: UserDB) -> str:
        return unique_violation("User", "username", record.username)
