"""
Blog schemas for the Bloglist application.

Request bodies are parsed leniently (every field optional) and checked
by `bloglist.schemas.validation.validate_blog`; responses expose the
owner either as an id or, on listings, as a joined summary.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class BlogInput(BaseModel):
    """Blog request body for create and update."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "title": "React patterns",
                "author": "Michael Chan",
                "url": "https://reactpatterns.com/",
                "likes": 7,
            },
        },
    )

    title: str | None = Field(default=None, description="Blog title")
    author: str | None = Field(default=None, description="Blog author")
    url: str | None = Field(default=None, description="Blog URL")
    likes: int | None = Field(default=None, description="Like count (defaults to 0)")

    @property
    def likes_or_default(self) -> int:
        return self.likes or 0


class BlogOwner(BaseModel):
    """Owner fields joined into blog listings."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    name: str | None = None


class BlogResponse(BaseModel):
    """Blog as returned by create and update."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    title: str
    author: str | None = None
    url: str
    likes: int
    user: UUID = Field(validation_alias="user_id")


class BlogListResponse(BaseModel):
    """Blog as returned by the listing, with the owner joined in."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    author: str | None = None
    url: str
    likes: int
    user: BlogOwner | None = None
