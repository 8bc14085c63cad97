"""Custom exceptions and error codes for the council session service.

All exceptions are namespaced under CouncilError so callers can catch any
council failure with a single except clause without shadowing builtins.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error classification codes returned to callers."""

    VALIDATION = "validation"
    PERMISSION = "permission"
    INTERNAL = "internal"
    SERVER_ERROR = "server_error"
    SESSION_NOT_FOUND = "session_not_found"
    DEBATE_LIMIT_REACHED = "debate_limit_reached"
    CLARIFICATION_REQUIRED = "clarification_required"


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.VALIDATION: "The provided input is invalid. Please check your request parameters.",
    ErrorCode.PERMISSION: "You don't have permission to perform this action.",
    ErrorCode.INTERNAL: "An unexpected error occurred. Please try again.",
    ErrorCode.SERVER_ERROR: "The server encountered an error. Please try again later.",
    ErrorCode.SESSION_NOT_FOUND: "Session not found or has expired. Please start a new session.",
    ErrorCode.DEBATE_LIMIT_REACHED: "Maximum debate cycles reached. Proceeding to final answer.",
    ErrorCode.CLARIFICATION_REQUIRED: "Please answer the clarification questions before proceeding.",
}


def to_error(
    code: ErrorCode,
    message: str | None = None,
    details: Any | None = None,
) -> dict[str, Any]:
    """Build the standard error payload.

    Args:
        code: Error classification code
        message: Human-readable message, defaults to the code's standard text
        details: Optional additional context (validation details, cause)

    Returns:
        ``{"error": {"code": ..., "message": ..., "details": ...}}``
    """
    return {
        "error": {
            "code": code.value,
            "message": message or ERROR_MESSAGES[code],
            "details": details,
        }
    }


class CouncilError(Exception):
    """Base exception for all council session errors."""

    code: ErrorCode = ErrorCode.INTERNAL

    def __init__(self, message: str, session_id: str | None = None) -> None:
        """Initialize council error.

        Args:
            message: Error description
            session_id: Session the error relates to, if any
        """
        self.session_id = session_id
        super().__init__(message)


class CouncilValidationError(CouncilError):
    """Raised when caller input is invalid.

    Distinct from Python's built-in ValueError to carry structured
    details back to the caller.
    """

    code = ErrorCode.VALIDATION

    def __init__(
        self,
        message: str,
        field: str | None = None,
        errors: list[dict[str, Any]] | None = None,
        session_id: str | None = None,
    ) -> None:
        """Initialize validation error.

        Args:
            message: Error description
            field: The field that failed validation
            errors: Per-field validation errors
            session_id: Session the error relates to, if any
        """
        self.field = field
        self.errors = errors
        super().__init__(message, session_id)


class UnknownPersonaError(CouncilValidationError):
    """Raised when a persona name is not part of the catalogue."""

    def __init__(self, persona_name: str) -> None:
        self.persona_name = persona_name
        super().__init__(f"Unknown persona: {persona_name}", field="personasRequested")


class SessionNotFoundError(CouncilError):
    """Raised when a session id does not resolve to a stored session."""

    code = ErrorCode.SESSION_NOT_FOUND

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Session '{session_id}' not found", session_id)


class InvalidTransitionError(CouncilError):
    """Raised when a status change is not allowed by the transition table."""

    def __init__(self, current: str, target: str, session_id: str | None = None) -> None:
        self.current = current
        self.target = target
        super().__init__(
            f"Invalid session status transition: {current} -> {target}",
            session_id,
        )


class DraftGenerationError(CouncilError):
    """Raised when a persona draft cannot be produced."""

    def __init__(
        self,
        message: str,
        persona_name: str,
        cause: Exception | None = None,
    ) -> None:
        """Initialize draft generation error.

        Args:
            message: Error description
            persona_name: Persona whose draft failed
            cause: Original exception that caused this error
        """
        self.persona_name = persona_name
        self.cause = cause
        if cause:
            self.__cause__ = cause
        super().__init__(message)
