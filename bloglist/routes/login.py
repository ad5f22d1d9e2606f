# bloglist/routes/login.py

"""Login route issuing access tokens."""

from fastapi import APIRouter
from fastapi.responses import ORJSONResponse

from bloglist.configs import API_PREFIX
from bloglist.dependencies import TokenCodecDep, UserRepoDep
from bloglist.schemas import LoginRequest, LoginResponse
from bloglist.services import AuthService

router = APIRouter(prefix=f"{API_PREFIX}/login", tags=["🔐 Auth"])


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=LoginResponse,
    summary="Login for access token",
    description="Authenticate with username and password to obtain a bearer token.",
    responses={
        401: {
            "description": "Unauthorized",
            "content": {
                "application/json": {"example": {"error": "invalid username or password"}},
            },
        },
    },
    operation_id="auth_login",
)
async def login(
    credentials: LoginRequest,
    repo: UserRepoDep,
    codec: TokenCodecDep,
) -> LoginResponse:
    """
    Login with username and password.

    Raises
    ------
    InvalidCredentialsError
        If the user is unknown or the password does not match.
    """
    auth_service = AuthService(repo, codec)
    user = await auth_service.authenticate_user(credentials.username, credentials.password)
    return auth_service.create_login_response(user)
