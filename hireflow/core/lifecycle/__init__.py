"""Application lifecycle: status state machine and pipeline operations."""

from .application_service import ApplicationService, get_application_service
from .state_machine import (
    allowed_transitions,
    can_transition,
    is_terminal,
    parse_status,
    validate_transition,
)

__all__ = [
    "ApplicationService",
    "get_application_service",
    "allowed_transitions",
    "can_transition",
    "is_terminal",
    "parse_status",
    "validate_transition",
]
