"""
Token manager for issuing and verifying access tokens.

Handlers and dependencies only see the `TokenCodec` protocol, so the
signing primitive can be replaced without touching them. `JWTTokenCodec`
is the default implementation built on python-jose.
"""

from datetime import UTC, datetime, timedelta
from typing import Protocol, runtime_checkable
from uuid import UUID, uuid4

from jose import ExpiredSignatureError, JWTError, jwt

from bloglist.configs import Settings
from bloglist.errors.auth import InvalidTokenError, TokenExpiredError
from bloglist.schemas.auth import TokenData

ACCESS_TOKEN_TYPE = "access"  # noqa: S105


@runtime_checkable
class TokenCodec(Protocol):
    """Encode an identity into a credential and back."""

    def encode(
        self,
        user_id: UUID,
        username: str,
        expires_delta: timedelta | None = None,
    ) -> str: ...

    def decode(self, token: str) -> TokenData: ...


class JWTTokenCodec:
    """
    HMAC-signed JWT access tokens.

    Args:
        secret_key: Signing key
        algorithm: JWS algorithm name
        issuer: Value for the `iss` claim
        audience: Value for the `aud` claim
        expire_minutes: Default lifetime of issued tokens
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        issuer: str = "bloglist",
        audience: str = "bloglist-api",
        expire_minutes: int = 60,
    ) -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.issuer = issuer
        self.audience = audience
        self.expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, config: Settings) -> "JWTTokenCodec":
        return cls(
            secret_key=config.SECRET_KEY,
            algorithm=config.ALGORITHM,
            issuer=config.JWT_ISSUER,
            audience=config.JWT_AUDIENCE,
            expire_minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES,
        )

    def encode(
        self,
        user_id: UUID,
        username: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        """
        Create a new access token.

        Args:
            user_id: User's UUID
            username: User's username
            expires_delta: Optional expiration time delta; may be negative

        Returns:
            str: Encoded JWT access token
        """
        now = datetime.now(UTC)
        expire = now + (expires_delta or timedelta(minutes=self.expire_minutes))

        to_encode = {
            "sub": username,
            "user_id": str(user_id),
            "jti": str(uuid4()),
            "iat": now,
            "exp": expire,
            "iss": self.issuer,
            "aud": self.audience,
            "type": ACCESS_TOKEN_TYPE,
        }

        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> TokenData:
        """
        Decode and validate an access token.

        Args:
            token: JWT token string

        Returns:
            TokenData: Decoded token data

        Raises:
            TokenExpiredError: If the token is past its expiry
            InvalidTokenError: If the token is malformed or its claims do not verify
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
            )
        except ExpiredSignatureError as e:
            raise TokenExpiredError from e
        except JWTError as e:
            raise InvalidTokenError(str(e) or "invalid token") from e

        username = payload.get("sub")
        user_id = payload.get("user_id")
        jti = payload.get("jti")
        token_type = payload.get("type")

        if not username or not user_id or not jti or token_type != ACCESS_TOKEN_TYPE:
            raise InvalidTokenError("token invalid")

        try:
            parsed_id = UUID(user_id)
        except ValueError as e:
            raise InvalidTokenError("token invalid") from e

        return TokenData(username=username, user_id=parsed_id, jti=jti, token_type=token_type)
