"""
Recruiter dashboard statistics.

Admins see figures across every job; recruiters see only the jobs they
posted.
"""

from typing import Optional

from hireflow.core.permissions import require_role
from hireflow.data.models import DashboardStats, JobApplicationCount, StatusCount, User
from hireflow.data.repositories import (
    ApplicationRepository,
    JobRepository,
    get_application_repository,
    get_job_repository,
)
from hireflow.utils.constants import ApplicationStatus, UserRole
from hireflow.utils.logger import LoggerMixin


class DashboardService(LoggerMixin):
    """Aggregates application counts for the jobs an actor can see."""

    def __init__(
        self,
        applications: Optional[ApplicationRepository] = None,
        jobs: Optional[JobRepository] = None,
    ):
        self.applications = applications or get_application_repository()
        self.jobs = jobs or get_job_repository()

    def get_stats(self, actor: User) -> DashboardStats:
        """Totals, per-status counts and per-job counts for the actor's jobs."""
        require_role(actor, UserRole.RECRUITER, UserRole.ADMIN)

        job_ids = self.jobs.get_ids(posted_by=None if actor.is_admin else actor.id)
        if not job_ids:
            return DashboardStats()

        status_counts = self.applications.get_status_counts_for_jobs(job_ids)
        # Pipeline order reads better than aggregation order
        by_status = [
            StatusCount(status=status.value, count=status_counts[status.value])
            for status in ApplicationStatus
            if status.value in status_counts
        ]

        return DashboardStats(
            total_jobs=len(job_ids),
            total_applications=self.applications.count_for_jobs(job_ids),
            applications_by_status=by_status,
            applications_per_job=[
                JobApplicationCount(**row)
                for row in self.applications.get_counts_per_job(job_ids)
            ],
        )


# Singleton instance
_dashboard_service: Optional[DashboardService] = None


def get_dashboard_service() -> DashboardService:
    """Get the dashboard service singleton instance."""
    global _dashboard_service
    if _dashboard_service is None:
        _dashboard_service = DashboardService()
    return _dashboard_service
