# bloglist/routes/blog.py

"""
Blog Routes.

Summary
-------
Endpoints include:
  - List blogs (with owner joined in)
  - Create blog (authenticated)
  - Delete blog (authenticated, owner only)
  - Update blog (owner only unless `BLOG_UPDATE_REQUIRES_OWNER` is off)

Authentication
--------------
Protected endpoints depend on `UserDBDep`, which resolves the bearer
token to a user or fails with 401.
"""

from logging import getLogger

from fastapi import APIRouter
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from bloglist.configs import API_PREFIX
from bloglist.dependencies import (
    BlogIdDep,
    BlogRepoDep,
    OptionalUserDep,
    SettingsDep,
    UserDBDep,
    UserRepoDep,
)
from bloglist.errors.auth import NotOwnerError, TokenMissingError
from bloglist.errors.validation import SchemaValidationError
from bloglist.models import BlogDB, UserDB
from bloglist.schemas import (
    BlogInput,
    BlogListResponse,
    BlogOwner,
    BlogResponse,
    validate_blog,
)
from bloglist.utils.helpers import file_logger

router = APIRouter(prefix=f"{API_PREFIX}/blogs", tags=["📝 Blogs"])

logger = file_logger(getLogger(__name__))

_UNAUTHORIZED = {
    "description": "Missing, invalid or expired token, or not the owner",
    "content": {"application/json": {"example": {"error": "token expired"}}},
}
_BAD_REQUEST = {
    "description": "Validation failed or malformed id",
    "content": {
        "application/json": {
            "example": {"error": "Blog validation failed: title: Path `title` is required."},
        },
    },
}
_NOT_FOUND = {
    "description": "Blog not found",
    "content": {"application/json": {"example": {"error": "blog not found"}}},
}


def db_blog_to_response(db_blog: BlogDB) -> BlogResponse:
    """Convert a `BlogDB` instance to `BlogResponse`."""
    return BlogResponse.model_validate(db_blog, from_attributes=True)


def db_blog_to_list_response(db_blog: BlogDB, owner: UserDB | None) -> BlogListResponse:
    """Convert a blog and its (possibly missing) owner to `BlogListResponse`."""
    return BlogListResponse(
        id=db_blog.id,
        title=db_blog.title,
        author=db_blog.author,
        url=db_blog.url,
        likes=db_blog.likes,
        user=BlogOwner.model_validate(owner, from_attributes=True) if owner else None,
    )


def ensure_valid(blog: BlogInput) -> None:
    """Raise `SchemaValidationError` when `blog` breaks a field rule."""
    result = validate_blog(blog)
    if not result.ok:
        raise SchemaValidationError(result.message)


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=list[BlogListResponse],
    summary="Get all blogs",
    description="Retrieve every blog with its owner's username and name.",
    operation_id="blogs_get_all",
)
async def get_blogs(repo: BlogRepoDep) -> list[BlogListResponse]:
    """
    Get all blogs.

    Parameters
    ----------
    repo : BlogRepository
        Repository dependency.

    Returns
    -------
    list[BlogListResponse]
        Blogs with owner fields joined in.
    """
    rows = await repo.get_all_with_owners()
    for blog, owner in rows:
        if owner is None:
            logger.warning(f"Blog {blog.id} references missing user {blog.user_id}")
    return [db_blog_to_list_response(blog, owner) for blog, owner in rows]


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a new blog",
    description="Create a blog owned by the authenticated user. `likes` defaults to 0.",
    responses={400: _BAD_REQUEST, 401: _UNAUTHORIZED},
    operation_id="blogs_create",
)
async def create_blog(
    blog: BlogInput,
    repo: BlogRepoDep,
    user_repo: UserRepoDep,
    current_user: UserDBDep,
) -> BlogResponse:
    """
    Create a new blog and record it on the owner.

    Parameters
    ----------
    blog : BlogInput
        Blog input payload.
    repo : BlogRepository
        Repository dependency.
    user_repo : UserRepository
        Repository used to append the blog to the owner's list.
    current_user : UserDB
        Authenticated user.

    Returns
    -------
    BlogResponse
        Created blog data.

    Raises
    ------
    SchemaValidationError
        If title or url is missing or likes is negative.
    """
    ensure_valid(blog)

    db_blog = await repo.create(blog, owner=current_user)
    await user_repo.append_blog(current_user, db_blog.id)

    logger.info(f"Blog {db_blog.id} created by {current_user.username}")
    return db_blog_to_response(db_blog)


@router.delete(
    "/{blog_id}",
    status_code=HTTP_204_NO_CONTENT,
    summary="Delete a blog",
    description="Delete a blog. Only its owner may delete it.",
    responses={400: _BAD_REQUEST, 401: _UNAUTHORIZED, 404: _NOT_FOUND},
    operation_id="blogs_delete",
)
async def delete_blog(
    blog_id: BlogIdDep,
    repo: BlogRepoDep,
    user_repo: UserRepoDep,
    current_user: UserDBDep,
) -> Response:
    """
    Delete a blog owned by the current user.

    Raises
    ------
    RecordNotFoundError
        If the blog does not exist.
    NotOwnerError
        If the current user does not own the blog.
    """
    db_blog = await repo.get_or_raise(blog_id)
    if db_blog.user_id != current_user.id:
        logger.warning(f"User {current_user.username} tried to delete blog {blog_id}")
        raise NotOwnerError("delete")

    await repo.delete(db_blog)
    await user_repo.remove_blog(current_user.id, blog_id)

    logger.info(f"Blog {blog_id} deleted by {current_user.username}")
    return Response(status_code=HTTP_204_NO_CONTENT)


@router.put(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    summary="Update a blog",
    description=(
        "Overwrite title, author, url and likes. Requires the owner's token "
        "unless BLOG_UPDATE_REQUIRES_OWNER is disabled."
    ),
    responses={400: _BAD_REQUEST, 401: _UNAUTHORIZED, 404: _NOT_FOUND},
    operation_id="blogs_update",
)
async def update_blog(
    blog_id: BlogIdDep,
    blog: BlogInput,
    repo: BlogRepoDep,
    settings: SettingsDep,
    request_user: OptionalUserDep,
) -> BlogResponse:
    """
    Update a blog in place.

    Parameters
    ----------
    blog_id : UUID
        Blog identifier.
    blog : BlogInput
        Replacement values; absent likes become 0.
    repo : BlogRepository
        Repository dependency.
    settings : Settings
        Application settings.
    request_user : UserDB | None
        User behind the bearer token, if one was sent.

    Returns
    -------
    BlogResponse
        Updated blog data.
    """
    requires_owner = settings.BLOG_UPDATE_REQUIRES_OWNER
    if requires_owner and request_user is None:
        raise TokenMissingError

    db_blog = await repo.get_or_raise(blog_id)
    if requires_owner and request_user and db_blog.user_id != request_user.id:
        raise NotOwnerError("update")

    ensure_valid(blog)
    updated = await repo.update(db_blog, blog)
    return db_blog_to_response(updated)
