"""
Job posting service.

Creates postings (extracting required skills from the description when
none are given) and serves the paginated public listing.
"""

import math
import re
from typing import Optional

from bson import ObjectId
from pydantic import ValidationError

from hireflow.core.exceptions import NotFoundError, ValidationFailedError
from hireflow.core.permissions import require_role
from hireflow.data.models import Job, JobCreate, JobPage, User
from hireflow.data.repositories import JobRepository, get_job_repository
from hireflow.utils.constants import COMMON_SKILLS, DEFAULT_PAGE_SIZE, AuditAction, UserRole
from hireflow.utils.logger import LoggerMixin, audit_log


def extract_skills(description: str, keywords: tuple[str, ...] = COMMON_SKILLS) -> list[str]:
    """
    Find known skill keywords mentioned in a job description.

    Matching is case-insensitive and whole-word; a keyword must not be
    directly preceded or followed by a letter, digit or underscore.
    """
    found = []
    for keyword in keywords:
        pattern = rf"(?<!\w){re.escape(keyword)}(?!\w)"
        if re.search(pattern, description, flags=re.IGNORECASE):
            found.append(keyword)
    return found


class JobService(LoggerMixin):
    """Business operations on job postings."""

    def __init__(self, jobs: Optional[JobRepository] = None):
        self.jobs = jobs or get_job_repository()

    def create_job(self, actor: User, data: JobCreate) -> Job:
        """
        Create a job posting owned by the acting recruiter.

        Raises:
            ForbiddenError: If the actor is not a recruiter or admin
            ValidationFailedError: If title, description or company is blank,
                or a field fails model validation (e.g. title over 200 characters)
        """
        require_role(actor, UserRole.RECRUITER, UserRole.ADMIN)

        missing = [
            field
            for field in ("title", "description", "company")
            if not getattr(data, field).strip()
        ]
        if missing:
            raise ValidationFailedError(
                "Please add title, description and company",
                details={"missing": missing},
            )

        skills = data.required_skills
        if not skills:
            skills = extract_skills(data.description)

        try:
            job = Job(
                title=data.title.strip(),
                description=data.description,
                company=data.company.strip(),
                location=data.location,
                experience_required=data.experience_required,
                required_skills=skills,
                posted_by=actor.id,
            )
        except ValidationError as e:
            raise ValidationFailedError(
                "Invalid job posting",
                details={
                    "errors": [
                        {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
                        for err in e.errors()
                    ]
                },
            ) from None

        job = self.jobs.create(job)

        self.logger.info(f"Job {job.id} '{job.title}' created by {actor.id}")
        audit_log(
            AuditAction.JOB_CREATED.value,
            {"job_id": str(job.id), "actor_id": str(actor.id), "skills": job.required_skills},
        )
        return job

    def get_job(self, job_id: str | ObjectId) -> Job:
        """Raises ``NotFoundError`` for unknown IDs."""
        job = self.jobs.get_by_id(job_id)
        if job is None:
            raise NotFoundError("Job not found", details={"job_id": str(job_id)})
        return job

    def list_jobs(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        search: Optional[str] = None,
        company: Optional[str] = None,
        posted_by: Optional[str] = None,
    ) -> JobPage:
        """Return one page of jobs, newest first."""
        page = page if page and page > 0 else 1
        limit = limit if limit and limit > 0 else DEFAULT_PAGE_SIZE
        skip = (page - 1) * limit

        total, jobs = self.jobs.search(
            skip=skip,
            limit=limit,
            search=search,
            company=company,
            posted_by=posted_by,
        )
        return JobPage(
            total=total,
            page=page,
            pages=math.ceil(total / limit) or 1,
            jobs=jobs,
        )


# Singleton instance
_job_service: Optional[JobService] = None


def get_job_service() -> JobService:
    """Get the job service singleton instance."""
    global _job_service
    if _job_service is None:
        _job_service = JobService()
    return _job_service
