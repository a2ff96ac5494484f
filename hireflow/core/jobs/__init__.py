"""Job posting management."""

from .job_service import JobService, extract_skills, get_job_service

__all__ = [
    "JobService",
    "extract_skills",
    "get_job_service",
]
