"""Structured logging configuration with JSON format.

Features:
- JSON-formatted log output for production
- Human-readable format for development
- Request and correlation IDs for every tool invocation
- Service context on every entry
- Tool lifecycle events (tool.start / tool.success / tool.failure)
"""

from __future__ import annotations

import json
import logging
import sys
import time
import uuid
from dataclasses import dataclass, field
from typing import Any

import structlog
from structlog.types import Processor

from council_session.core.config import get_settings


_configured = False

_REDACTED = "[REDACTED]"
_SECRET_MARKERS = ("token", "secret", "password", "apikey", "auth")


def add_service_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Add service context to all log entries.

    Args:
        logger: The wrapped logger object.
        method_name: The name of the method called on the logger.
        event_dict: The event dictionary to process.

    Returns:
        Updated event dictionary with service context.
    """
    settings = get_settings()
    event_dict["service"] = settings.service_name
    event_dict["environment"] = settings.environment
    return event_dict


def configure_logging() -> None:
    """Configure structured logging for the application.

    In development: Human-readable colored output
    In production/staging: JSON-formatted structured logs
    """
    global _configured
    settings = get_settings()

    use_json = settings.environment in ("production", "staging")

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_service_context,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if use_json:
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(settings.log_level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if not _configured:
        logging.basicConfig(
            format="%(message)s",
            stream=sys.stdout,
            level=logging.getLevelName(settings.log_level.upper()),
        )
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    _configured = True


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Optional logger name (module name recommended).

    Returns:
        Configured structlog BoundLogger instance.

    Example:
        ```python
        from council_session.core.logging import get_logger

        logger = get_logger(__name__)
        logger.info("Session created", session_id="abc123")
        ```
    """
    return structlog.get_logger(name)


# =============================================================================
# Tool lifecycle logging
# =============================================================================


def _is_secret_key(key: str) -> bool:
    lowered = key.lower()
    return any(marker in lowered for marker in _SECRET_MARKERS)


def sanitize_meta(meta: Any) -> Any:
    """Return a copy of ``meta`` with secret-looking keys redacted.

    Nested dicts and lists are walked; non-container values pass through.
    """
    if isinstance(meta, dict):
        sanitized: dict[str, Any] = {}
        for key, value in meta.items():
            key_str = str(key)
            if isinstance(value, (dict, list)):
                sanitized[key_str] = sanitize_meta(value)
            elif _is_secret_key(key_str):
                sanitized[key_str] = _REDACTED
            else:
                sanitized[key_str] = value
        return sanitized
    if isinstance(meta, list):
        return [sanitize_meta(item) for item in meta]
    return meta


def _payload_chars(payload: Any) -> int:
    try:
        return len(json.dumps(payload, default=str))
    except (TypeError, ValueError):
        return len(str(payload))


@dataclass
class ToolContext:
    """Per-invocation logging context.

    Attributes:
        tool: Name of the tool being executed.
        logger: Logger bound with request/correlation ids.
        request_id: Unique identifier for this invocation.
        correlation_id: Identifier for correlating related operations.
        started_at: ``time.monotonic()`` at start.
    """

    tool: str
    logger: Any
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    correlation_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    started_at: float = field(default_factory=time.monotonic)

    @property
    def duration_ms(self) -> int:
        return int((time.monotonic() - self.started_at) * 1000)


def log_tool_start(
    tool: str,
    payload: Any,
    correlation_id: str | None = None,
) -> ToolContext:
    """Log the start of a tool invocation and return its context."""
    request_id = str(uuid.uuid4())
    correlation_id = correlation_id or request_id
    bound = get_logger("council_session.tools").bind(
        tool=tool,
        request_id=request_id,
        correlation_id=correlation_id,
    )
    ctx = ToolContext(
        tool=tool,
        logger=bound,
        request_id=request_id,
        correlation_id=correlation_id,
    )
    bound.info(
        "tool.start",
        input_chars=_payload_chars(sanitize_meta(payload)),
    )
    return ctx


def log_tool_success(ctx: ToolContext, output: Any) -> None:
    """Log successful completion of a tool invocation."""
    ctx.logger.info(
        "tool.success",
        duration_ms=ctx.duration_ms,
        output_chars=_payload_chars(output),
    )


def log_tool_error(ctx: ToolContext, error_category: str, err: BaseException) -> None:
    """Log a failed tool invocation with its error category."""
    ctx.logger.error(
        "tool.failure",
        duration_ms=ctx.duration_ms,
        error_category=error_category,
        error_type=type(err).__name__,
        error=str(err),
        exc_info=error_category == "internal",
    )


# Convenience type alias
Logger = structlog.BoundLogger
