"""
Password hashing module using Argon2 with passlib's CryptContext.

Hashing is CPU bound, so the async helpers run it in the threadpool.
"""

from fastapi.concurrency import run_in_threadpool
from passlib.context import CryptContext
from passlib.exc import UnknownHashError

from bloglist.configs import CONFIG_MAP, settings
from bloglist.errors.password_hasher import PasswordHashingError
from bloglist.monitoring import get_logger

logger = get_logger(__name__)


class PasswordHasher:
    """
    A password hashing and verification manager using the Argon2id algorithm.

    Args:
        level: Cost preset name from `CONFIG_MAP`
    """

    def __init__(self, level: str = "medium") -> None:
        self.level = level
        cost = CONFIG_MAP[level]
        self.pwd_context = CryptContext(
            schemes=["argon2"],
            argon2__memory_cost=cost.memory_cost,
            argon2__time_cost=cost.time_cost,
            argon2__parallelism=cost.parallelism,
        )
        logger.debug("PasswordHasher initialized", security_level=level)

    def hash(self, password: str) -> str:
        """
        Hash a plaintext password using Argon2id.

        Args:
            password: The plaintext password to hash

        Returns:
            str: The hashed password in Argon2id format

        Raises:
            ValueError: If password is empty
            PasswordHashingError: If hashing fails
        """
        if not password:
            msg = "Password cannot be empty"
            raise ValueError(msg)

        try:
            return self.pwd_context.hash(password)
        except (ValueError, UnicodeError) as e:
            logger.exception("Error hashing password")
            raise PasswordHashingError from e

    def verify(self, password: str, hashed_password: str) -> bool:
        """
        Verify a plaintext password against a hashed password.

        Args:
            password: The plaintext password to verify
            hashed_password: The hashed password to verify against

        Returns:
            bool: True if password matches, False otherwise
        """
        if not password or not hashed_password:
            return False

        try:
            return self.pwd_context.verify(password, hashed_password)
        except (ValueError, UnknownHashError):
            logger.warning("Invalid hash format provided")
            return False


password_hasher = PasswordHasher(settings.PASSWORD_SECURITY_LEVEL)


async def hash_password(password: str) -> str:
    """Hash `password` off the event loop."""
    return await run_in_threadpool(password_hasher.hash, password)


async def verify_password(password: str, hashed_password: str) -> bool:
    """Verify `password` against `hashed_password` off the event loop."""
    return await run_in_threadpool(password_hasher.verify, password, hashed_password)
