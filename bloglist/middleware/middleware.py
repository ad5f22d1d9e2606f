# bloglist/middleware/middleware.py
"""
Middleware components for the Bloglist application.

This module contains the request logging and security header
middleware, CORS configuration and the lifespan handler that opens and
closes the database handle.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from logging import getLogger
from time import perf_counter
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from orjson import JSONDecodeError, loads
from rich.traceback import install
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from bloglist.configs import Settings
from bloglist.db import Database
from bloglist.monitoring import bind_request_id, clear_context, sanitize_body
from bloglist.utils.helpers import file_logger, get_summary, host, time_taken

logger = file_logger(getLogger(__name__))

REQUEST_ID_HEADER = "X-Request-ID"

install()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Create tables on startup and release connections on shutdown."""
    logger.info(f"Starting {app.title}...")

    database: Database = app.state.database
    try:
        await database.init()
    except Exception:
        logger.exception("Failed to initialize services")
        raise

    logger.info("Services initialized successfully")

    yield

    logger.info(f"Shutting down {app.title}...")
    try:
        await database.close()
    except Exception:
        logger.exception("Error during service cleanup")


def configure_cors(app: FastAPI, settings: Settings) -> None:
    """Configure CORS middleware for the application."""
    allowed_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ]

    if frontend_url := settings.PRODUCTION_FRONTEND_URL:
        allowed_origins.append(frontend_url)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )


async def _post_body(request: Request) -> object:
    """Return the parsed JSON body of a POST request for logging, if any."""
    if request.method != "POST":
        return None
    raw = await request.body()
    if not raw:
        return None
    try:
        return sanitize_body(loads(raw))
    except JSONDecodeError:
        return "<non-json body>"


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Log one line per request: method, url, status, size, timing and POST body."""

        start_time = perf_counter()
        clear_context()
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        bind_request_id(request_id)

        body = await _post_body(request)
        route_info = get_summary(request) or f"{request.method} {request.url.path}"
        logger.debug(f"Request: {route_info}, from ip: {host(request)}")

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id

        line = (
            f"{request.method} {request.url.path} {response.status_code} "
            f"{response.headers.get('content-length', '-')} - {time_taken(start_time)}"
        )
        if body is not None:
            line = f"{line} {body}"
        logger.info(line)

        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Add security headers to all responses."""

        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response
