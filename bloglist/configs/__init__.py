from bloglist.configs.settings import (
    API_PREFIX,
    CONFIG_MAP,
    MAX_AUTHOR_LENGTH,
    MAX_LIKES,
    MAX_NAME_LENGTH,
    MAX_TITLE_LENGTH,
    MAX_URL_LENGTH,
    MAX_USERNAME_LENGTH,
    MIN_LIKES,
    MIN_PASSWORD_LENGTH,
    MIN_USERNAME_LENGTH,
    Argon2Config,
    Settings,
    settings,
)

__all__ = [
    "API_PREFIX",
    "Argon2Config",
    "CONFIG_MAP",
    "MAX_AUTHOR_LENGTH",
    "MAX_LIKES",
    "MAX_NAME_LENGTH",
    "MAX_TITLE_LENGTH",
    "MAX_URL_LENGTH",
    "MAX_USERNAME_LENGTH",
    "MIN_LIKES",
    "MIN_PASSWORD_LENGTH",
    "MIN_USERNAME_LENGTH",
    "Settings",
    "settings",
]
