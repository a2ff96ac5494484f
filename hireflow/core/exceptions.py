"""
Error types raised by HireFlow business operations.

Every error carries a stable ``error_code`` so a calling layer can map it
to its own response envelope and status code.
"""

from typing import Any, Optional


class HireFlowError(Exception):
    """Base class for all HireFlow business errors."""

    error_code = "HIREFLOW_ERROR"

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert the error to a dictionary for API responses."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(HireFlowError):
    """A job, application or user does not exist."""

    error_code = "NOT_FOUND"


class ConflictError(HireFlowError):
    """The candidate already applied to this job."""

    error_code = "CONFLICT"


class ForbiddenError(HireFlowError):
    """The actor lacks the role or ownership the operation requires."""

    error_code = "FORBIDDEN"


class InvalidTransitionError(HireFlowError):
    """The requested status is not reachable from the current status."""

    error_code = "INVALID_TRANSITION"


class InvalidStateError(HireFlowError):
    """The application is in a state that does not allow the operation."""

    error_code = "INVALID_STATE"


class ValidationFailedError(HireFlowError):
    """Input is missing or malformed."""

    error_code = "VALIDATION_FAILED"
