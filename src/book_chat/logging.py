"""Structured logging for book_chat.

Chat events are logged through structlog with the session id bound by the
conversation controller. Output is a console renderer by default or JSON
when ``BOOK_CHAT_LOG_JSON_OUTPUT`` is set. API keys pass through the
providers on every call, so any event field that carries one is masked
before it is rendered.
"""

import logging
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog

from book_chat.config import LoggingSettings

__all__ = [
    "SECRET_FIELDS",
    "configure_logging",
    "get_logger",
    "mask_secret",
    "redact_secrets",
]

SECRET_FIELDS = frozenset({"api_key", "authorization", "credential", "x-api-key"})

# Loggers of the provider SDKs and their transport; they log every request at INFO
SDK_LOGGERS = ("httpx", "httpcore", "openai", "anthropic")


def mask_secret(value: object) -> str:
    """Hide a secret but keep enough of it to tell two keys apart."""
    text = str(value)
    if len(text) <= 8:
        return "***"
    return f"{text[:3]}...{text[-4:]}"


def redact_secrets(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """structlog processor masking credential fields."""
    for key in event_dict:
        if key.lower() in SECRET_FIELDS and event_dict[key]:
            event_dict[key] = mask_secret(event_dict[key])
    return event_dict


def configure_logging(
    level: int | str | None = None,
    json_output: bool | None = None,
    add_timestamp: bool | None = None,
) -> None:
    """Configure structlog for the application.

    Arguments left as None are read from LoggingSettings.

    Args:
        level: Logging level name or number
        json_output: If True, output JSON; if False, pretty console output
        add_timestamp: If True, add ISO timestamp to log entries
    """
    settings = LoggingSettings()
    if level is None:
        level = settings.level
    if isinstance(level, str):
        level = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)
    if json_output is None:
        json_output = settings.json_output
    if add_timestamp is None:
        add_timestamp = settings.add_timestamp

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        redact_secrets,
        structlog.processors.StackInfoRenderer(),
    ]

    if add_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_output:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    for name in SDK_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.WARNING, level))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a book_chat logger (usually ``get_logger(__name__)``)."""
    return structlog.get_logger(name)


_configured = False


def _ensure_configured() -> None:
    global _configured
    if not _configured:
        configure_logging()
        _configured = True


_ensure_configured()
