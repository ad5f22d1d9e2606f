"""User schemas for registration and listings."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """Registration body; checked by `validate_user` before any write."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "username": "mluukkai",
                "name": "Matti Luukkainen",
                "password": "salainen",
            },
        },
    )

    username: str | None = Field(default=None, description="Username")
    name: str | None = Field(default=None, description="Display name")
    password: str | None = Field(default=None, description="Password", repr=False)


class UserResponse(BaseModel):
    """User response model (without sensitive information)."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    username: str
    name: str | None = None
    blogs: list[UUID] = Field(default_factory=list, validation_alias="blog_ids")


class UserBlog(BaseModel):
    """Blog fields joined into user listings."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    author: str | None = None
    url: str
    likes: int


class UserListResponse(BaseModel):
    """User with the blogs they own."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    name: str | None = None
    blogs: list[UserBlog] = Field(default_factory=list)
