"""
Structured logging with token and header redaction.

This module configures structlog on top of the standard library so that
both `structlog.get_logger()` loggers and plain `logging.getLogger()`
loggers share one pipeline:
- Pretty console output for development
- JSON output otherwise
- Redaction of bearer tokens, sensitive headers and passwords
- Request ID correlation through context variables

Examples
--------
>>> from bloglist.monitoring import get_logger
>>> logger = get_logger("bloglist.routes.blog")
>>> logger.info("Blog created", blog_id="123")
"""

from logging import StreamHandler, root
from re import Pattern
from re import compile as re_compile
from typing import Any

from structlog import configure
from structlog import get_logger as struct_logger
from structlog.contextvars import (
    bind_contextvars,
    clear_contextvars,
    merge_contextvars,
)
from structlog.dev import ConsoleRenderer
from structlog.processors import (
    JSONRenderer,
    StackInfoRenderer,
    UnicodeDecoder,
    add_log_level,
    format_exc_info,
)
from structlog.stdlib import (
    BoundLogger,
    LoggerFactory,
    PositionalArgumentsFormatter,
    ProcessorFormatter,
    add_logger_name,
    filter_by_level,
)
from structlog.types import EventDict, Processor, WrappedLogger

from bloglist.configs.settings import settings
from bloglist.utils.helpers import file_handler, today_str

# Sensitive headers to redact
SENSITIVE_HEADERS: frozenset[str] = frozenset(
    {
        "authorization",
        "cookie",
        "proxy-authorization",
    },
)

# Body keys whose values never reach the logs
SENSITIVE_KEYS: frozenset[str] = frozenset({"password", "password_hash", "token"})

# JWT tokens (base64url format)
PII_PATTERNS: list[tuple[Pattern, str]] = [
    (re_compile(r"eyJ[a-zA-Z0-9_-]*\.eyJ[a-zA-Z0-9_-]*\.[a-zA-Z0-9_-]*"), "[REDACTED_JWT]"),
]

# Characters to sanitize to prevent log injection
CONTROL_CHARS = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": ""})


def sanitize_log_message(message: str) -> str:
    r"""
    Remove control characters and sanitize log messages.

    Examples:
    --------
    >>> sanitize_log_message("Hello\nWorld")
    'Hello\\nWorld'
    """
    return message.translate(CONTROL_CHARS)


def sanitize_headers(headers: dict[str, Any]) -> dict[str, Any]:
    """
    Return headers with sensitive values redacted.

    Examples:
    --------
    >>> sanitize_headers({"Authorization": "Bearer token123", "Content-Type": "json"})
    {'Authorization': '[REDACTED]', 'Content-Type': 'json'}
    """
    return {k: "[REDACTED]" if k.lower() in SENSITIVE_HEADERS else v for k, v in headers.items()}


def sanitize_body(body: Any) -> Any:
    """
    Return a JSON body with sensitive keys redacted, recursing into containers.

    Examples:
    --------
    >>> sanitize_body({"username": "root", "password": "sekret"})
    {'username': 'root', 'password': '[REDACTED]'}
    """
    if isinstance(body, dict):
        return {
            k: "[REDACTED]" if k.lower() in SENSITIVE_KEYS else sanitize_body(v)
            for k, v in body.items()
        }
    if isinstance(body, list):
        return [sanitize_body(item) for item in body]
    return body


def redact_pii(message: str) -> str:
    """Redact token patterns from log messages."""
    for pattern, replacement in PII_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


def add_timestamp(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Add a local timestamp to the log entry."""
    event_dict["timestamp"] = today_str()
    return event_dict


def sanitize_event_dict(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """
    Sanitize the event dictionary for tokens and injection.

    Args:
        logger: The wrapped logger instance.
        method_name: The name of the logging method being called.
        event_dict: The event dictionary being built.

    Returns:
        Sanitized event dictionary.
    """
    for key, value in event_dict.items():
        if isinstance(value, str):
            event_dict[key] = redact_pii(sanitize_log_message(value))
        elif key.lower() == "headers" and isinstance(value, dict):
            event_dict[key] = sanitize_headers(value)
        elif key.lower() == "body":
            event_dict[key] = sanitize_body(value)

    return event_dict


def get_renderer(*, colors: bool = True) -> Processor:
    """
    Pick the final renderer for the current environment.

    Args:
        colors: Whether to enable colors in ConsoleRenderer.
    """
    if settings.ENVIRONMENT == "development":
        return ConsoleRenderer(colors=colors, pad_level=False)
    return JSONRenderer()


def configure_logging() -> None:
    """Configure structured logging for the application."""
    # Clear any existing root handlers to prevent duplicates on reload
    root.handlers.clear()
    root.setLevel(settings.LOG_LEVEL.upper())

    configure(
        processors=[
            filter_by_level,
            merge_contextvars,
            add_logger_name,
            add_log_level,
            PositionalArgumentsFormatter(),
            StackInfoRenderer(),
            format_exc_info,
            UnicodeDecoder(),
            ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=BoundLogger,
        cache_logger_on_first_use=True,
    )

    foreign_pre_chain: list[Processor] = [
        merge_contextvars,
        add_log_level,
        add_timestamp,
    ]

    console_handler = StreamHandler()
    console_handler.setFormatter(
        ProcessorFormatter(
            processors=[
                add_timestamp,
                sanitize_event_dict,
                ProcessorFormatter.remove_processors_meta,
                get_renderer(colors=True),
            ],
            foreign_pre_chain=foreign_pre_chain,
        ),
    )
    root.addHandler(console_handler)

    # Module loggers share one rotating file handler (no colors) when LOG_TO_FILE is set
    if (handler := file_handler()) is not None:
        handler.setFormatter(
            ProcessorFormatter(
                processors=[
                    add_timestamp,
                    sanitize_event_dict,
                    ProcessorFormatter.remove_processors_meta,
                    JSONRenderer(),
                ],
                foreign_pre_chain=foreign_pre_chain,
            ),
        )


def get_logger(name: str) -> BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: The name of the logger (typically __name__).

    Returns:
        Configured structlog BoundLogger instance.
    """
    return struct_logger(name)


def bind_request_id(request_id: str) -> None:
    """Bind request ID to the current logging context."""
    bind_contextvars(request_id=request_id)


def bind_user_id(user_id: str) -> None:
    """Bind the authenticated user's ID to the current logging context."""
    bind_contextvars(user_id=user_id)


def clear_context() -> None:
    """Clear all bound context variables."""
    clear_contextvars()
