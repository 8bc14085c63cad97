"""Core module - Configuration, logging, and error types.

Exports:
    - Settings, get_settings: Pydantic Settings configuration
    - configure_logging, get_logger: Structured logging (structlog)
    - Exception classes and ErrorCode
"""

from council_session.core.config import Settings, get_settings
from council_session.core.exceptions import (
    CouncilError,
    CouncilValidationError,
    DraftGenerationError,
    ErrorCode,
    InvalidTransitionError,
    SessionNotFoundError,
    UnknownPersonaError,
    to_error,
)
from council_session.core.logging import configure_logging, get_logger


__all__ = [
    # Exceptions
    "CouncilError",
    "CouncilValidationError",
    "DraftGenerationError",
    "ErrorCode",
    "InvalidTransitionError",
    "SessionNotFoundError",
    # Configuration
    "Settings",
    "UnknownPersonaError",
    # Logging
    "configure_logging",
    "get_logger",
    "get_settings",
    "to_error",
]
