"""Blog repository for database operations."""

from sqlmodel import col, select

from bloglist.models import BlogDB, UserDB
from bloglist.repositories.base import BaseRepository
from bloglist.schemas.blog import BlogInput


class BlogRepository(BaseRepository[BlogDB]):
    """
    Repository for Blog database operations.

    This class implements the repository pattern for Blog entities,
    providing CRUD operations and the owner join used by listings.
    """

    model = BlogDB
    label = "blog"

    async def create(self, blog: BlogInput, owner: UserDB) -> BlogDB:
        """
        Create a new blog owned by `owner`.

        Args:
            blog: Validated blog payload
            owner: User that owns the blog

        Returns:
            BlogDB: Created blog database model
        """
        db_blog = BlogDB(
            title=blog.title,
            author=blog.author,
            url=blog.url,
            likes=blog.likes_or_default,
            user_id=owner.id,
        )
        return await self._add_and_refresh(db_blog)

    async def get_all_with_owners(self) -> list[tuple[BlogDB, UserDB | None]]:
        """
        Get every blog joined with its owner.

        An outer join is used so a blog whose owner reference does not
        resolve is still listed, with `None` in place of the owner.

        Returns:
            list[tuple[BlogDB, UserDB | None]]: Blogs paired with their owners
        """
        statement = (
            select(BlogDB, UserDB)
            .join(UserDB, col(BlogDB.user_id) == col(UserDB.id), isouter=True)
            .order_by(col(BlogDB.created_at))
        )
        result = await self.session.exec(statement)
        return [(blog, owner) for blog, owner in result.all()]

    async def update(self, blog: BlogDB, data: BlogInput) -> BlogDB:
        """
        Overwrite the editable fields of `blog`.

        Args:
            blog: Loaded blog to update
            data: Validated replacement values

        Returns:
            BlogDB: Updated blog
        """
        blog.title = data.title or ""
        blog.author = data.author
        blog.url = data.url or ""
        blog.likes = data.likes_or_default
        return await self._add_and_refresh(blog)
