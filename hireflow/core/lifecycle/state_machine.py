"""
Application status state machine.

The pipeline rules live in ``STATUS_TRANSITIONS``; the functions here only
read that table, so the rule set can be inspected and tested on its own.
"""

from typing import Any

from hireflow.core.exceptions import InvalidTransitionError
from hireflow.utils.constants import STATUS_TRANSITIONS, TERMINAL_STATUSES, ApplicationStatus


def parse_status(value: Any) -> ApplicationStatus:
    """
    Convert a status name to ``ApplicationStatus``.

    Raises:
        InvalidTransitionError: If the value is not a known status
    """
    if isinstance(value, ApplicationStatus):
        return value
    try:
        return ApplicationStatus(value)
    except ValueError:
        raise InvalidTransitionError(
            f"Unknown application status: {value}",
            details={"status": value},
        ) from None


def allowed_transitions(current: Any) -> frozenset[ApplicationStatus]:
    """Statuses reachable from ``current`` in one step."""
    return STATUS_TRANSITIONS.get(ApplicationStatus(current), frozenset())


def can_transition(current: Any, target: Any) -> bool:
    """Check whether ``target`` is an allowed next status for ``current``."""
    try:
        target_status = ApplicationStatus(target)
    except ValueError:
        return False
    return target_status in allowed_transitions(current)


def validate_transition(current: Any, target: Any) -> ApplicationStatus:
    """
    Validate a status change against the transition table.

    Returns:
        The target as an ``ApplicationStatus``

    Raises:
        InvalidTransitionError: If the change is not in the table
    """
    current_status = ApplicationStatus(current)
    target_status = parse_status(target)

    if target_status not in allowed_transitions(current_status):
        raise InvalidTransitionError(
            f"Invalid status transition from {current_status.value} to {target_status.value}",
            details={"from": current_status.value, "to": target_status.value},
        )
    return target_status


def is_terminal(status: Any) -> bool:
    return ApplicationStatus(status) in TERMINAL_STATUSES
