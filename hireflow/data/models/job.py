"""
Job posting data models for HireFlow.

Defines the schema for job postings and the read views built on them.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from hireflow.utils.constants import DEFAULT_LOCATION
from hireflow.utils.normalize import coerce_years, normalize_tokens

from .base import BaseDocument, EmbeddedModel, PyObjectId


class Job(BaseDocument):
    """
    Main job posting model.

    Owned by the recruiter referenced in ``posted_by``.
    """

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    company: str = Field(..., min_length=1)

    # Matching criteria
    required_skills: list[str] = Field(default_factory=list)
    experience_required: float = Field(default=0.0, ge=0)
    location: str = DEFAULT_LOCATION

    # Ownership
    posted_by: PyObjectId

    @field_validator("required_skills", mode="before")
    @classmethod
    def normalize_skills(cls, v: Any) -> list[str]:
        """Normalize skill names to lowercase tokens; repeats weigh the skill."""
        return normalize_tokens(v, unique=False)

    @field_validator("experience_required", mode="before")
    @classmethod
    def clamp_experience(cls, v: Any) -> float:
        return coerce_years(v)

    @field_validator("location", mode="before")
    @classmethod
    def default_location(cls, v: Optional[str]) -> str:
        if v is None or not str(v).strip():
            return DEFAULT_LOCATION
        return str(v).strip()

    def is_owned_by(self, user_id: Any) -> bool:
        """Check whether the given user posted this job."""
        return str(self.posted_by) == str(user_id)

    class Settings:
        """MongoDB collection settings."""

        name = "jobs"
        indexes = ["title", "company", "required_skills", "posted_by", "created_at"]


class JobCreate(BaseModel):
    """Schema for creating a new job posting."""

    title: str = ""
    description: str = ""
    company: str = ""
    location: Optional[str] = None
    experience_required: float = 0
    required_skills: Optional[list[str]] = None


class JobSummary(EmbeddedModel):
    """Job fields embedded in a candidate's application list."""

    job_id: PyObjectId
    title: str
    company: str
    description: str

    @classmethod
    def from_job(cls, job: Job) -> "JobSummary":
        return cls(
            job_id=job.id,
            title=job.title,
            company=job.company,
            description=job.description,
        )


class JobPage(BaseModel):
    """One page of a job listing."""

    total: int = 0
    page: int = 1
    pages: int = 1
    jobs: list[Job] = Field(default_factory=list)
