"""
Application-wide constants for HireFlow.

This module contains the hiring pipeline definition, the match scoring
weights and the skill keyword list. These values are read at import time
and never mutated.
"""

from enum import Enum
from types import MappingProxyType
from typing import Final, Mapping


# =============================================================================
# Application Constants
# =============================================================================

APP_NAME: Final[str] = "HireFlow"
APP_DISPLAY_NAME: Final[str] = "HireFlow Job Board"
VERSION: Final[str] = "0.1.0"


# =============================================================================
# Enums
# =============================================================================


class UserRole(str, Enum):
    """Role of an authenticated user."""

    CANDIDATE = "candidate"
    RECRUITER = "recruiter"
    ADMIN = "admin"


class ApplicationStatus(str, Enum):
    """Stage of an application in the hiring pipeline."""

    APPLIED = "Applied"
    SCREENING = "Screening"
    INTERVIEW = "Interview"
    TECHNICAL = "Technical"
    HR = "HR"
    OFFER = "Offer"
    HIRED = "Hired"
    REJECTED = "Rejected"
    WITHDRAWN = "Withdrawn"

    @property
    def is_terminal(self) -> bool:
        """True if no further transitions are possible."""
        return self in TERMINAL_STATUSES


class AuditAction(str, Enum):
    """Types of actions that are written to the audit log."""

    APPLICATION_SUBMITTED = "application_submitted"
    APPLICATION_STATUS_CHANGED = "application_status_changed"
    APPLICATION_WITHDRAWN = "application_withdrawn"
    CANDIDATES_RANKED = "candidates_ranked"
    JOB_CREATED = "job_created"


# =============================================================================
# Hiring Pipeline
# =============================================================================

INITIAL_STATUS: Final[ApplicationStatus] = ApplicationStatus.APPLIED

TERMINAL_STATUSES: Final[frozenset[ApplicationStatus]] = frozenset(
    {
        ApplicationStatus.HIRED,
        ApplicationStatus.REJECTED,
        ApplicationStatus.WITHDRAWN,
    }
)

# Current status -> statuses a recruiter may move the application to
STATUS_TRANSITIONS: Final[Mapping[ApplicationStatus, frozenset[ApplicationStatus]]] = MappingProxyType(
    {
        ApplicationStatus.APPLIED: frozenset({ApplicationStatus.SCREENING, ApplicationStatus.REJECTED}),
        ApplicationStatus.SCREENING: frozenset({ApplicationStatus.INTERVIEW, ApplicationStatus.REJECTED}),
        ApplicationStatus.INTERVIEW: frozenset({ApplicationStatus.TECHNICAL, ApplicationStatus.REJECTED}),
        ApplicationStatus.TECHNICAL: frozenset({ApplicationStatus.HR, ApplicationStatus.REJECTED}),
        ApplicationStatus.HR: frozenset({ApplicationStatus.OFFER, ApplicationStatus.REJECTED}),
        ApplicationStatus.OFFER: frozenset({ApplicationStatus.HIRED, ApplicationStatus.REJECTED}),
        ApplicationStatus.HIRED: frozenset(),
        ApplicationStatus.REJECTED: frozenset(),
        ApplicationStatus.WITHDRAWN: frozenset(),
    }
)


# =============================================================================
# Scoring Constants
# =============================================================================

MATCH_SCORING_WEIGHTS: Final[Mapping[str, float]] = MappingProxyType(
    {
        "skill": 0.6,
        "experience": 0.3,
        "location": 0.1,
    }
)

MAX_COMPONENT_SCORE: Final[int] = 100

# Location value meaning "not a discriminating factor"
REMOTE_LOCATION: Final[str] = "remote"
DEFAULT_LOCATION: Final[str] = "Remote"

# Number of candidates returned by the ranking view
RANKING_LIMIT: Final[int] = 10


# =============================================================================
# Job Constants
# =============================================================================

# Keywords recognised in job descriptions when no skills are given
COMMON_SKILLS: Final[tuple[str, ...]] = (
    "React", "Node.js", "Node", "JavaScript", "TypeScript", "Python", "Java", "C++",
    "SQL", "MongoDB", "AWS", "Azure", "Docker", "Kubernetes", "HTML", "CSS",
    "Tailwind", "Next.js", "Express", "Angular", "Vue", "PHP", "Ruby", "Go",
    "Swift", "Kotlin", "Flutter", "Redux", "GraphQL", "REST", "DevOps", "CI/CD",
)

DEFAULT_PAGE_SIZE: Final[int] = 10
