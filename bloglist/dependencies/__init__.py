# bloglist/dependencies/__init__.py

from bloglist.dependencies.dependencies import (
    BlogIdDep,
    BlogRepoDep,
    OptionalUserDep,
    SessionDep,
    SettingsDep,
    TokenCodecDep,
    UserDBDep,
    UserRepoDep,
    extract_token,
    get_blog_id,
    get_blog_repository,
    get_current_user,
    get_database,
    get_request_user,
    get_session,
    get_settings,
    get_token_codec,
    get_user_repository,
)

__all__ = [
    "BlogIdDep",
    "BlogRepoDep",
    "OptionalUserDep",
    "SessionDep",
    "SettingsDep",
    "TokenCodecDep",
    "UserDBDep",
    "UserRepoDep",
    "extract_token",
    "get_blog_id",
    "get_blog_repository",
    "get_current_user",
    "get_database",
    "get_request_user",
    "get_session",
    "get_settings",
    "get_token_codec",
    "get_user_repository",
]
