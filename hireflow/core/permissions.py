"""
Role and ownership checks shared by the business services.

The actor is the already-authenticated ``User``; these checks decide only
whether that user may perform the operation.
"""

from hireflow.core.exceptions import ForbiddenError
from hireflow.data.models import Job, User
from hireflow.utils.constants import UserRole


def require_role(actor: User, *roles: UserRole) -> None:
    """Raise ``ForbiddenError`` unless the actor holds one of ``roles``."""
    if UserRole(actor.role) not in roles:
        allowed = ", ".join(role.value for role in roles)
        raise ForbiddenError(
            f"User role {UserRole(actor.role).value} is not authorized (requires {allowed})",
            details={"actor_id": str(actor.id), "role": UserRole(actor.role).value},
        )


def can_manage_job(actor: User, job: Job) -> bool:
    """Admins manage every job; recruiters manage the jobs they posted."""
    return actor.is_admin or job.is_owned_by(actor.id)
