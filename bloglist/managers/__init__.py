from bloglist.managers.password_manager import (
    PasswordHasher,
    hash_password,
    password_hasher,
    verify_password,
)
from bloglist.managers.token_manager import JWTTokenCodec, TokenCodec

__all__ = [
    "JWTTokenCodec",
    "PasswordHasher",
    "TokenCodec",
    "hash_password",
    "password_hasher",
    "verify_password",
]
