"""
Application data models for HireFlow.

An application links one candidate to one job and carries the pipeline
status, the match scores computed at submission time and an append-only
history of every status the application has held.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from hireflow.utils.constants import INITIAL_STATUS, ApplicationStatus

from .base import BaseDocument, EmbeddedModel, PyObjectId, utc_now
from .job import JobSummary
from .match import MatchScores
from .user import CandidateSummary


class HistoryEntry(EmbeddedModel):
    """A single status change. Entries are never edited once appended."""

    model_config = ConfigDict(frozen=True)

    status: ApplicationStatus
    changed_by: Optional[PyObjectId] = None
    changed_at: datetime = Field(default_factory=utc_now)
    note: Optional[str] = None


class Application(BaseDocument):
    """
    Main application document.

    Scores are optional because records written before scoring existed
    carry none; readers go through ``score_or_recompute`` for those.
    """

    # References
    job_id: PyObjectId
    candidate_id: PyObjectId

    # Pipeline
    status: ApplicationStatus = INITIAL_STATUS
    notes: Optional[str] = None
    history: list[HistoryEntry] = Field(default_factory=list)

    # Scores (0-100)
    skill_score: Optional[int] = None
    experience_score: Optional[int] = None
    location_score: Optional[int] = None
    match_score: Optional[int] = None

    @property
    def current_status(self) -> ApplicationStatus:
        return ApplicationStatus(self.status)

    @property
    def is_terminal(self) -> bool:
        return self.current_status.is_terminal

    @property
    def has_scores(self) -> bool:
        """False for missing or zero aggregate scores."""
        return bool(self.match_score)

    @property
    def scores(self) -> MatchScores:
        """Stored scores, with missing components read as zero."""
        return MatchScores(
            skill_score=self.skill_score or 0,
            experience_score=self.experience_score or 0,
            location_score=self.location_score or 0,
            total_score=self.match_score or 0,
        )

    def apply_scores(self, scores: MatchScores) -> None:
        """Copy a score breakdown onto the application."""
        self.skill_score = scores.skill_score
        self.experience_score = scores.experience_score
        self.location_score = scores.location_score
        self.match_score = scores.total_score

    def belongs_to(self, user_id: Any) -> bool:
        return str(self.candidate_id) == str(user_id)

    class Settings:
        """MongoDB collection settings."""

        name = "applications"
        indexes = [
            [("job_id", 1), ("candidate_id", 1)],  # Compound unique index
            "candidate_id",
            "status",
            "created_at",
        ]


class JobApplicationView(BaseModel):
    """An application as listed for the recruiter who owns the job."""

    application_id: PyObjectId
    job_id: PyObjectId
    candidate: Optional[CandidateSummary] = None
    status: ApplicationStatus
    notes: Optional[str] = None
    scores: MatchScores
    history: list[HistoryEntry] = Field(default_factory=list)
    created_at: datetime

    model_config = ConfigDict(arbitrary_types_allowed=True, use_enum_values=True)


class CandidateApplicationView(BaseModel):
    """An application as listed for the candidate who submitted it."""

    application_id: PyObjectId
    job: Optional[JobSummary] = None
    status: ApplicationStatus
    notes: Optional[str] = None
    scores: MatchScores
    history: list[HistoryEntry] = Field(default_factory=list)
    created_at: datetime

    model_config = ConfigDict(arbitrary_types_allowed=True, use_enum_values=True)
