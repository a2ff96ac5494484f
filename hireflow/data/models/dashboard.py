"""
Dashboard statistics models for HireFlow.
"""

from pydantic import BaseModel, Field


class StatusCount(BaseModel):
    """Number of applications in one pipeline status."""

    status: str
    count: int


class JobApplicationCount(BaseModel):
    """Number of applications received by one job."""

    job_title: str
    count: int


class DashboardStats(BaseModel):
    """Recruiter overview across the jobs they can see."""

    total_jobs: int = 0
    total_applications: int = 0
    applications_by_status: list[StatusCount] = Field(default_factory=list)
    applications_per_job: list[JobApplicationCount] = Field(default_factory=list)
