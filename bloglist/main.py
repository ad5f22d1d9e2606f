# bloglist/main.py

"""Bloglist Backend - blog posts, user registration and token authentication."""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bloglist.configs import Settings, settings
from bloglist.db import Database
from bloglist.errors import (
    AuthorizationError,
    DatabaseError,
    MalformedIdError,
    PasswordHashingError,
    SchemaValidationError,
    auth_exception_handler,
    database_exception_handler,
    http_exception_handler,
    password_hashing_exception_handler,
    validation_error_handler,
    validation_exception_handler,
)
from bloglist.managers.token_manager import JWTTokenCodec, TokenCodec
from bloglist.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from bloglist.monitoring import configure_logging
from bloglist.routes import blog_router, health_router, login_router, user_router

routes = [
    blog_router,
    user_router,
    login_router,
    health_router,
]

errors = [
    (MalformedIdError, validation_error_handler),
    (SchemaValidationError, validation_error_handler),
    (AuthorizationError, auth_exception_handler),
    (DatabaseError, database_exception_handler),
    (PasswordHashingError, password_hashing_exception_handler),
    (RequestValidationError, validation_exception_handler),
    (StarletteHTTPException, http_exception_handler),
]


def create_app(
    config: Settings | None = None,
    database: Database | None = None,
    token_codec: TokenCodec | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Settings to run with; defaults to the environment settings
        database: Persistence handle; built from `config` when omitted
        token_codec: Token codec; a JWT codec built from `config` when omitted

    Returns:
        FastAPI: Configured application
    """
    config = config or settings

    app = FastAPI(
        title=config.APP_NAME,
        description="Bloglist Backend API",
        version="1.0.0",
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        debug=config.DEBUG,
    )

    app.state.settings = config
    app.state.database = database or Database.from_settings(config)
    app.state.token_codec = token_codec or JWTTokenCodec.from_settings(config)

    configure_cors(app, config)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(LoggingMiddleware)

    _ = [app.include_router(router) for router in routes]
    _ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]

    return app


configure_logging()
app = create_app()
