"""
Candidate ranking for the recruiter "match candidates" view.
"""

from typing import Optional

from bson import ObjectId

from hireflow.core.exceptions import NotFoundError
from hireflow.core.permissions import require_role
from hireflow.data.models import RankedCandidate, User
from hireflow.data.repositories import (
    JobRepository,
    UserRepository,
    get_job_repository,
    get_user_repository,
)
from hireflow.utils.constants import RANKING_LIMIT, AuditAction, UserRole
from hireflow.utils.logger import LoggerMixin, audit_log

from .match_scorer import MatchScorer, get_match_scorer


class CandidateRankingService(LoggerMixin):
    """Scores every candidate profile against a job and returns the best."""

    def __init__(
        self,
        jobs: Optional[JobRepository] = None,
        users: Optional[UserRepository] = None,
        scorer: Optional[MatchScorer] = None,
    ):
        self.jobs = jobs or get_job_repository()
        self.users = users or get_user_repository()
        self.scorer = scorer or get_match_scorer()

    def rank_candidates_for_job(
        self,
        job_id: str | ObjectId,
        actor: User,
        limit: int = RANKING_LIMIT,
    ) -> list[RankedCandidate]:
        """
        Rank all candidates for a job.

        Returns an empty list when there are no candidates.

        Raises:
            NotFoundError: If the job does not exist
        """
        require_role(actor, UserRole.RECRUITER, UserRole.ADMIN)
        job = self.jobs.get_by_id(job_id)
        if job is None:
            raise NotFoundError("Job not found", details={"job_id": str(job_id)})

        candidates = self.users.get_candidates()
        ranked = self.scorer.rank_candidates(job, candidates, limit=limit)

        self.logger.info(f"Ranked {len(candidates)} candidates for job {job.id}")
        audit_log(
            AuditAction.CANDIDATES_RANKED.value,
            {
                "job_id": str(job.id),
                "actor_id": str(actor.id),
                "candidates_scored": len(candidates),
                "returned": len(ranked),
            },
            audit_type="ACCESS",
        )
        return ranked


# Singleton instance
_ranking_service: Optional[CandidateRankingService] = None


def get_ranking_service() -> CandidateRankingService:
    """Get the ranking service singleton instance."""
    global _ranking_service
    if _ranking_service is None:
        _ranking_service = CandidateRankingService()
    return _ranking_service
