"""
Match scoring data models for HireFlow.

Defines the score breakdown stored on applications and the ranked
candidate rows returned to recruiters.
"""

from pydantic import ConfigDict, Field

from hireflow.utils.constants import MATCH_SCORING_WEIGHTS

from .base import EmbeddedModel, PyObjectId


class MatchScores(EmbeddedModel):
    """Component and aggregate compatibility scores, each 0-100."""

    model_config = ConfigDict(frozen=True)

    skill_score: int = Field(0, ge=0, le=100)
    experience_score: int = Field(0, ge=0, le=100)
    location_score: int = Field(0, ge=0, le=100)
    total_score: int = Field(0, ge=0, le=100)

    @property
    def weighted_sum(self) -> float:
        """Unrounded weighted combination of the component scores."""
        return (
            self.skill_score * MATCH_SCORING_WEIGHTS["skill"]
            + self.experience_score * MATCH_SCORING_WEIGHTS["experience"]
            + self.location_score * MATCH_SCORING_WEIGHTS["location"]
        )


class RankedCandidate(EmbeddedModel):
    """A candidate scored against a job in the ranking view."""

    candidate_id: PyObjectId
    name: str
    email: str
    scores: MatchScores

    @property
    def total_score(self) -> int:
        return self.scores.total_score
