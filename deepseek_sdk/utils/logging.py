"""Structured logging helpers built on structlog."""
import logging
import sys
from typing import Any, MutableMapping

import structlog

REDACTED = "***"
SENSITIVE_HEADERS = frozenset({"authorization", "proxy-authorization"})


def redact_headers(headers: Any) -> dict:
    """Return a plain dict copy of headers with credentials masked."""
    redacted = {}
    for name, value in dict(headers or {}).items():
        if name.lower() in SENSITIVE_HEADERS:
            scheme = str(value).split(" ", 1)[0] if " " in str(value) else ""
            value = f"{scheme} {REDACTED}".strip()
        redacted[name] = value
    return redacted


def redact_sensitive(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """structlog processor masking credentials in any ``headers`` field."""
    for key in ("headers", "request_headers"):
        if key in event_dict:
            event_dict[key] = redact_headers(event_dict[key])
    return event_dict


def setup_logging(log_level: str = "info") -> None:
    """Configure stdlib logging and structlog for an application using the SDK."""
    level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            redact_sensitive,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """Get a structured logger that emits through the stdlib logger ``name``.

    Level filtering and output are left to the host application's logging
    setup; an application that configures no logging sees no output.
    """
    return structlog.wrap_logger(logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger)


logging.getLogger("deepseek_sdk").addHandler(logging.NullHandler())
