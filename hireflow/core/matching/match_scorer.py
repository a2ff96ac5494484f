"""
Candidate-job match scorer.

Computes a weighted compatibility score between a candidate profile and
a job posting from three rule-based components: required-skill overlap,
years of experience and location. The same pure function backs
application submission, the ranking view and read-time reconciliation
of legacy records.
"""

import math
from collections.abc import Mapping
from typing import Any, Iterable, Optional

from hireflow.data.models import Application, Job, MatchScores, RankedCandidate, User
from hireflow.utils.constants import (
    MATCH_SCORING_WEIGHTS,
    MAX_COMPONENT_SCORE,
    RANKING_LIMIT,
    REMOTE_LOCATION,
    UserRole,
)
from hireflow.utils.logger import get_logger
from hireflow.utils.normalize import coerce_years, normalize_location, normalize_tokens

logger = get_logger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def _clamp(value: float) -> float:
    return max(0.0, min(float(MAX_COMPONENT_SCORE), value))


class MatchScorer:
    """
    Rule-based scorer for candidate-job compatibility.

    Components, each 0-100:
    - Skills: share of the job's required skills the candidate lists
    - Experience: candidate years relative to the required years
    - Location: full credit only for an on-site match

    The weights are fixed process-wide constants.
    """

    def __init__(self, weights: Mapping[str, float] = MATCH_SCORING_WEIGHTS):
        self.weights = weights

    # -------------------------------------------------------------------------
    # Components
    # -------------------------------------------------------------------------

    def skill_score(self, required_skills: Any, candidate_skills: Any) -> float:
        """
        Percentage of required skills present in the candidate's skills.

        Either side may be a list or a comma-separated string. A skill
        listed twice in the requirements counts twice.
        """
        required = normalize_tokens(required_skills, unique=False)
        candidate = set(normalize_tokens(candidate_skills))

        if not required or not candidate:
            return 0.0

        overlap = sum(1 for skill in required if skill in candidate)
        return overlap / len(required) * 100

    def experience_score(self, required_years: float, candidate_years: float) -> float:
        """Candidate years as a percentage of the requirement, capped at 100."""
        required = coerce_years(required_years)
        candidate = coerce_years(candidate_years)

        if required == 0:
            return float(MAX_COMPONENT_SCORE)
        if candidate >= required:
            return float(MAX_COMPONENT_SCORE)
        return _clamp(candidate / required * 100)

    def location_score(self, job_location: Optional[str], candidate_location: Optional[str]) -> float:
        """100 for an exact on-site match; remote jobs never earn location credit."""
        job_loc = normalize_location(job_location)
        candidate_loc = normalize_location(candidate_location)

        if job_loc != REMOTE_LOCATION and job_loc == candidate_loc:
            return float(MAX_COMPONENT_SCORE)
        return 0.0

    def total_score(self, skill: int, experience: int, location: int) -> int:
        """Weighted aggregate of already-rounded component scores."""
        weighted = (
            skill * self.weights["skill"]
            + experience * self.weights["experience"]
            + location * self.weights["location"]
        )
        return round_half_up(_clamp(weighted))

    # -------------------------------------------------------------------------
    # Single-pair mode
    # -------------------------------------------------------------------------

    def score(self, job: Job, candidate: User) -> MatchScores:
        """
        Score one candidate against one job.

        Args:
            job: The job posting
            candidate: The candidate profile

        Returns:
            MatchScores with every value rounded to an integer in [0, 100]
        """
        skill = round_half_up(self.skill_score(job.required_skills, candidate.skills))
        experience = round_half_up(
            self.experience_score(job.experience_required, candidate.experience_years)
        )
        location = round_half_up(self.location_score(job.location, candidate.location))

        return MatchScores(
            skill_score=skill,
            experience_score=experience,
            location_score=location,
            total_score=self.total_score(skill, experience, location),
        )

    def score_or_recompute(
        self,
        application: Application,
        job: Job,
        candidate: Optional[User],
    ) -> MatchScores:
        """
        Return stored scores, recomputing them when the aggregate is missing or zero.

        Records submitted before scoring existed carry no scores; they are
        reconciled at read time with the same scoring function.
        """
        if application.has_scores or candidate is None:
            return application.scores

        logger.debug(f"Recomputing scores for application {application.id}")
        return self.score(job, candidate)

    # -------------------------------------------------------------------------
    # Batch ranking mode
    # -------------------------------------------------------------------------

    def rank_candidates(
        self,
        job: Job,
        candidates: Iterable[User],
        limit: int = RANKING_LIMIT,
    ) -> list[RankedCandidate]:
        """
        Rank candidate-role users by total score for a job.

        The sort is stable, so ties keep their input order.

        Args:
            job: The job posting
            candidates: Users to consider; non-candidates are skipped
            limit: Maximum number of results

        Returns:
            Highest-scoring candidates first
        """
        ranked = [
            RankedCandidate(
                candidate_id=candidate.id,
                name=candidate.name,
                email=candidate.email,
                scores=self.score(job, candidate),
            )
            for candidate in candidates
            if candidate.role == UserRole.CANDIDATE
        ]
        ranked.sort(key=lambda r: r.total_score, reverse=True)
        return ranked[:limit]


# Singleton instance
_match_scorer: Optional[MatchScorer] = None


def get_match_scorer() -> MatchScorer:
    """Get the match scorer singleton instance."""
    global _match_scorer
    if _match_scorer is None:
        _match_scorer = MatchScorer()
    return _match_scorer
