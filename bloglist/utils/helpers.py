from collections.abc import MutableMapping
from datetime import datetime
from logging import INFO, Logger
from logging.handlers import RotatingFileHandler
from pathlib import Path
from time import perf_counter
from typing import Any

from fastapi import FastAPI, Request
from fastapi.routing import APIRoute
from starlette.routing import BaseRoute, Match, Route

from bloglist.configs.settings import settings

_file_handler: RotatingFileHandler | None = None


def host(request: Request) -> str:
    """Return the host IP address."""
    return request.client.host if request.client else "unknown"


def today_str() -> str:
    """Return today's date as a string."""
    return datetime.now(datetime.now().astimezone().tzinfo).strftime(
        "%Y-%m-%d %H:%M:%S",
    )


def time_taken(start_time: float) -> str:
    return f"{(perf_counter() - start_time) * 1000:.3f} ms"


def file_handler() -> RotatingFileHandler | None:
    """Return the shared rotating file handler, or None when file logging is off."""
    global _file_handler  # noqa: PLW0603

    if not settings.LOG_TO_FILE:
        return None

    if _file_handler is None:
        log_file = Path(settings.LOG_FILE)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        _file_handler = RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=5)
        _file_handler.setLevel(INFO)
    return _file_handler


def file_logger(logger: Logger) -> Logger:
    """
    Attach the shared rotating file handler to `logger` when file logging is enabled.

    Args:
        logger: Logger to extend

    Returns:
        Logger: The same logger, for chaining at module level
    """
    handler = file_handler()
    if handler is not None and handler not in logger.handlers:
        logger.addHandler(handler)
    return logger


def get_summary(request: Request) -> str | None:
    """Extract route summary from request."""

    scope: MutableMapping[str, Any] = request.scope
    app: FastAPI = scope["app"]
    routes: list[BaseRoute] = app.routes

    summary = None
    for route in routes:
        is_api_route = type(route) is APIRoute
        is_route = type(route) is Route
        if is_api_route and route.matches(scope)[0] == Match.FULL:
            summary = route.summary
            break
        if is_route and route.matches(scope)[0] == Match.FULL:
            summary = route.name
            break

    return summary
