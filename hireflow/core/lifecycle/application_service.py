"""
Application lifecycle service.

Owns submission, recruiter status changes, candidate withdrawal and the
two application listings. Every status change is validated against the
transition table and persisted together with its history entry in a
single atomic update.
"""

from typing import Any, Optional

from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from hireflow.core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidStateError,
    InvalidTransitionError,
    NotFoundError,
)
from hireflow.core.lifecycle.state_machine import validate_transition
from hireflow.core.matching import MatchScorer, get_match_scorer
from hireflow.core.permissions import can_manage_job, require_role
from hireflow.data.models import (
    Application,
    CandidateApplicationView,
    CandidateSummary,
    HistoryEntry,
    Job,
    JobApplicationView,
    JobSummary,
    User,
)
from hireflow.data.repositories import (
    ApplicationRepository,
    JobRepository,
    UserRepository,
    get_application_repository,
    get_job_repository,
    get_user_repository,
)
from hireflow.utils.constants import INITIAL_STATUS, ApplicationStatus, AuditAction, UserRole
from hireflow.utils.logger import LoggerMixin, audit_log


class ApplicationService(LoggerMixin):
    """Business operations on job applications."""

    def __init__(
        self,
        applications: Optional[ApplicationRepository] = None,
        jobs: Optional[JobRepository] = None,
        users: Optional[UserRepository] = None,
        scorer: Optional[MatchScorer] = None,
    ):
        self.applications = applications or get_application_repository()
        self.jobs = jobs or get_job_repository()
        self.users = users or get_user_repository()
        self.scorer = scorer or get_match_scorer()

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def _get_job(self, job_id: str | ObjectId) -> Job:
        job = self.jobs.get_by_id(job_id)
        if job is None:
            raise NotFoundError("Job not found", details={"job_id": str(job_id)})
        return job

    def _get_application(self, application_id: str | ObjectId) -> Application:
        application = self.applications.get_by_id(application_id)
        if application is None:
            raise NotFoundError(
                "Application not found",
                details={"application_id": str(application_id)},
            )
        return application

    # -------------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------------

    def apply(
        self,
        actor: User,
        job_id: str | ObjectId,
        notes: Optional[str] = None,
    ) -> Application:
        """
        Submit an application for the acting candidate.

        Args:
            actor: The authenticated candidate
            job_id: Job being applied to
            notes: Optional free-text notes

        Returns:
            The persisted application in the Applied state

        Raises:
            NotFoundError: If the job does not exist
            ConflictError: If the candidate already applied to the job
        """
        require_role(actor, UserRole.CANDIDATE)
        job = self._get_job(job_id)

        if self.applications.application_exists(job.id, actor.id):
            raise ConflictError(
                "You have already applied for this job",
                details={"job_id": str(job.id), "candidate_id": str(actor.id)},
            )

        scores = self.scorer.score(job, actor)
        application = Application(
            job_id=job.id,
            candidate_id=actor.id,
            status=INITIAL_STATUS,
            notes=notes,
            history=[HistoryEntry(status=INITIAL_STATUS, changed_by=actor.id)],
        )
        application.apply_scores(scores)

        try:
            application = self.applications.create(application)
        except DuplicateKeyError:
            # A concurrent submission won the unique (job, candidate) index
            raise ConflictError(
                "You have already applied for this job",
                details={"job_id": str(job.id), "candidate_id": str(actor.id)},
            ) from None

        self.logger.info(
            f"Candidate {actor.id} applied to job {job.id} with match score {scores.total_score}"
        )
        audit_log(
            AuditAction.APPLICATION_SUBMITTED.value,
            {
                "application_id": str(application.id),
                "job_id": str(job.id),
                "candidate_id": str(actor.id),
                "scores": scores.model_dump(),
            },
        )
        return application

    # -------------------------------------------------------------------------
    # Status changes
    # -------------------------------------------------------------------------

    def transition(
        self,
        application_id: str | ObjectId,
        actor: User,
        new_status: Any,
        note: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Application:
        """
        Move an application to the next pipeline status.

        Args:
            application_id: Application to update
            actor: The recruiter who owns the job, or an admin
            new_status: Target status (enum member or status name)
            note: Optional note stored on the history entry
            notes: Optional replacement for the application's free-text notes

        Raises:
            NotFoundError: If the application or its job does not exist
            ForbiddenError: If the actor does not own the job and is not an admin
            InvalidTransitionError: If the table does not allow the change
        """
        require_role(actor, UserRole.RECRUITER, UserRole.ADMIN)
        application = self._get_application(application_id)
        job = self._get_job(application.job_id)

        if not can_manage_job(actor, job):
            raise ForbiddenError(
                "Not authorized to update this application",
                details={"application_id": str(application.id), "actor_id": str(actor.id)},
            )

        current = application.current_status
        target = validate_transition(current, new_status)
        entry = HistoryEntry(status=target, changed_by=actor.id, note=note or None)

        updated = self.applications.record_status_change(application.id, current, entry, notes)
        if updated is None:
            raise InvalidTransitionError(
                f"Application is no longer in {current.value}; reload and retry",
                details={"application_id": str(application.id), "expected": current.value},
            )

        self.logger.info(f"Application {application.id}: {current.value} -> {target.value}")
        audit_log(
            AuditAction.APPLICATION_STATUS_CHANGED.value,
            {
                "application_id": str(application.id),
                "from": current.value,
                "to": target.value,
                "actor_id": str(actor.id),
                "note": note,
            },
        )
        return updated

    def withdraw(self, application_id: str | ObjectId, actor: User) -> Application:
        """
        Withdraw the acting candidate's application.

        Withdrawal bypasses the transition table: any non-terminal status
        may move straight to Withdrawn.

        Raises:
            NotFoundError: If the application does not exist
            ForbiddenError: If the actor did not submit the application
            InvalidStateError: If the application is Hired, Rejected or Withdrawn
        """
        require_role(actor, UserRole.CANDIDATE)
        application = self._get_application(application_id)

        if not application.belongs_to(actor.id):
            raise ForbiddenError(
                "Not authorized to withdraw this application",
                details={"application_id": str(application.id), "actor_id": str(actor.id)},
            )

        current = application.current_status
        if application.is_terminal:
            raise InvalidStateError(
                f"Cannot withdraw application in {current.value} state",
                details={"application_id": str(application.id), "status": current.value},
            )

        entry = HistoryEntry(status=ApplicationStatus.WITHDRAWN, changed_by=actor.id)
        updated = self.applications.record_status_change(application.id, current, entry)
        if updated is None:
            raise InvalidStateError(
                f"Application is no longer in {current.value}; reload and retry",
                details={"application_id": str(application.id), "expected": current.value},
            )

        self.logger.info(f"Application {application.id} withdrawn from {current.value}")
        audit_log(
            AuditAction.APPLICATION_WITHDRAWN.value,
            {
                "application_id": str(application.id),
                "from": current.value,
                "candidate_id": str(actor.id),
            },
            audit_type="OVERRIDE",
        )
        return updated

    # -------------------------------------------------------------------------
    # Listings
    # -------------------------------------------------------------------------

    def list_for_job(self, job_id: str | ObjectId, actor: User) -> list[JobApplicationView]:
        """
        List every application for a job the actor manages.

        Scores missing from legacy records are recomputed on the fly.

        Raises:
            NotFoundError: If the job does not exist
            ForbiddenError: If the actor does not own the job and is not an admin
        """
        require_role(actor, UserRole.RECRUITER, UserRole.ADMIN)
        job = self._get_job(job_id)

        if not can_manage_job(actor, job):
            raise ForbiddenError(
                "Not authorized to view applications",
                details={"job_id": str(job.id), "actor_id": str(actor.id)},
            )

        applications = self.applications.get_by_job(job.id)
        candidates = self.users.get_by_ids([a.candidate_id for a in applications])

        views = []
        for application in applications:
            candidate = candidates.get(str(application.candidate_id))
            views.append(
                JobApplicationView(
                    application_id=application.id,
                    job_id=application.job_id,
                    candidate=CandidateSummary.from_user(candidate) if candidate else None,
                    status=application.status,
                    notes=application.notes,
                    scores=self.scorer.score_or_recompute(application, job, candidate),
                    history=application.history,
                    created_at=application.created_at,
                )
            )
        return views

    def list_for_candidate(self, actor: User) -> list[CandidateApplicationView]:
        """List the acting candidate's applications, newest first, with job summaries."""
        require_role(actor, UserRole.CANDIDATE)
        applications = self.applications.get_by_candidate(actor.id)
        jobs = self.jobs.get_by_ids([a.job_id for a in applications])

        views = []
        for application in applications:
            job = jobs.get(str(application.job_id))
            views.append(
                CandidateApplicationView(
                    application_id=application.id,
                    job=JobSummary.from_job(job) if job else None,
                    status=application.status,
                    notes=application.notes,
                    scores=application.scores,
                    history=application.history,
                    created_at=application.created_at,
                )
            )
        return views


# Singleton instance
_application_service: Optional[ApplicationService] = None


def get_application_service() -> ApplicationService:
    """Get the application service singleton instance."""
    global _application_service
    if _application_service is None:
        _application_service = ApplicationService()
    return _application_service
