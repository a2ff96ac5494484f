"""
User data models for HireFlow.

A user is the authenticated actor behind every operation. Users with the
candidate role double as candidate profiles for matching.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from hireflow.utils.constants import DEFAULT_LOCATION, UserRole
from hireflow.utils.normalize import coerce_years, normalize_tokens

from .base import BaseDocument, EmbeddedModel, PyObjectId


class User(BaseDocument):
    """
    User account document.

    Skills are stored normalized; location is stored as entered and
    normalized only for comparison.
    """

    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    role: UserRole = UserRole.CANDIDATE

    # Candidate profile
    skills: list[str] = Field(default_factory=list)
    experience_years: float = Field(default=0.0, ge=0)
    location: str = DEFAULT_LOCATION

    @field_validator("skills", mode="before")
    @classmethod
    def normalize_skills(cls, v: Any) -> list[str]:
        """Accept a list or a comma-separated string."""
        return normalize_tokens(v)

    @field_validator("experience_years", mode="before")
    @classmethod
    def clamp_experience(cls, v: Any) -> float:
        """Legacy records may carry strings or negatives."""
        return coerce_years(v)

    @field_validator("location", mode="before")
    @classmethod
    def default_location(cls, v: Optional[str]) -> str:
        if v is None or not str(v).strip():
            return DEFAULT_LOCATION
        return str(v).strip()

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_candidate(self) -> bool:
        return self.role == UserRole.CANDIDATE

    @property
    def is_recruiter(self) -> bool:
        return self.role == UserRole.RECRUITER

    class Settings:
        """MongoDB collection settings."""

        name = "users"
        indexes = ["email", "role", "skills"]


class UserCreate(BaseModel):
    """Schema for registering a user."""

    name: str
    email: str
    role: UserRole = UserRole.CANDIDATE
    skills: list[str] | str = Field(default_factory=list)
    experience_years: float = 0
    location: Optional[str] = None


class CandidateSummary(EmbeddedModel):
    """Candidate identity shown to recruiters alongside an application."""

    candidate_id: PyObjectId
    name: str
    email: str
    skills: list[str] = Field(default_factory=list)
    location: str = DEFAULT_LOCATION
    experience_years: float = 0.0

    @classmethod
    def from_user(cls, user: User) -> "CandidateSummary":
        return cls(
            candidate_id=user.id,
            name=user.name,
            email=user.email,
            skills=user.skills,
            location=user.location,
            experience_years=user.experience_years,
        )
