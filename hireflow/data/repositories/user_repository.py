"""
User repository for HireFlow.

Provides data access for user accounts and the candidate profiles
scored by the ranking view.
"""

from typing import Optional

from hireflow.data.models.user import User, UserCreate
from hireflow.utils.constants import UserRole
from hireflow.utils.logger import get_logger

from .base import BaseRepository

logger = get_logger(__name__)


class UserRepository(BaseRepository[User]):
    """Repository for user document operations."""

    @property
    def collection_name(self) -> str:
        return "users"

    @property
    def model_class(self) -> type[User]:
        return User

    def create_from_schema(self, data: UserCreate) -> User:
        """Create a user from a create schema."""
        user = User(
            name=data.name,
            email=data.email,
            role=data.role,
            skills=data.skills,
            experience_years=data.experience_years,
            location=data.location,
        )
        return self.create(user)

    def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by email address."""
        return self.find_one({"email": email.strip().lower()})

    def get_candidates(self) -> list[User]:
        """
        Load every candidate profile.

        Used by the ranking view, which scores the full candidate set in a
        single pass. Paging or a skill index would be needed at scale.
        """
        return self.find(
            {"role": UserRole.CANDIDATE.value},
            limit=0,
            sort_by="created_at",
            sort_order=1,
        )


# Singleton instance
_user_repository: Optional[UserRepository] = None


def get_user_repository() -> UserRepository:
    """Get the user repository singleton instance."""
    global _user_repository
    if _user_repository is None:
        _user_repository = UserRepository()
    return _user_repository
