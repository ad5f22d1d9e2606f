"""Authentication service: credential checks and token issuance."""

from logging import getLogger

from bloglist.errors.auth import InvalidCredentialsError
from bloglist.managers.password_manager import verify_password
from bloglist.managers.token_manager import TokenCodec
from bloglist.models import UserDB
from bloglist.repositories import UserRepository
from bloglist.schemas.auth import LoginResponse
from bloglist.utils.helpers import file_logger

logger = file_logger(getLogger(__name__))


class AuthService:
    """Service for handling username/password login."""

    def __init__(self, user_repo: UserRepository, token_codec: TokenCodec) -> None:
        """
        Initialize the auth service.

        Args:
            user_repo: User repository for database operations
            token_codec: Codec used to issue access tokens
        """
        self.user_repo = user_repo
        self.token_codec = token_codec

    async def authenticate_user(self, username: str, password: str) -> UserDB:
        """
        Authenticate a user by username and password.

        Args:
            username: User username
            password: User password

        Returns:
            UserDB: Authenticated user

        Raises:
            InvalidCredentialsError: If authentication fails
        """
        user = await self.user_repo.get_by_username(username) if username else None
        if user is None or not await verify_password(password, user.password_hash):
            logger.warning(f"Failed login attempt for username {username!r}")
            raise InvalidCredentialsError

        return user

    def create_login_response(self, user: UserDB) -> LoginResponse:
        """
        Issue an access token for `user`.

        Args:
            user: Authenticated user

        Returns:
            LoginResponse: Token together with the user's username and name
        """
        token = self.token_codec.encode(user.id, user.username)
        return LoginResponse(token=token, username=user.username, name=user.name)
