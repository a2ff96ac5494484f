"""
Application repository for HireFlow.

Provides data access for job applications, including the atomic status
update used by the pipeline and the aggregations behind the dashboard.
"""

from typing import Any, Optional

from bson import ObjectId
from pymongo.results import UpdateResult

from hireflow.data.models.application import Application, HistoryEntry
from hireflow.data.models.base import utc_now
from hireflow.utils.constants import ApplicationStatus
from hireflow.utils.logger import get_logger

from .base import BaseRepository

logger = get_logger(__name__)


class ApplicationRepository(BaseRepository[Application]):
    """Repository for application document operations."""

    @property
    def collection_name(self) -> str:
        return "applications"

    @property
    def model_class(self) -> type[Application]:
        return Application

    # -------------------------------------------------------------------------
    # Query Operations
    # -------------------------------------------------------------------------

    def application_exists(
        self,
        job_id: str | ObjectId,
        candidate_id: str | ObjectId,
    ) -> bool:
        """Check if the candidate already applied to the job."""
        return self.exists(
            {
                "job_id": self._to_object_id(job_id),
                "candidate_id": self._to_object_id(candidate_id),
            }
        )

    def get_by_job(self, job_id: str | ObjectId) -> list[Application]:
        """Get every application for a job, oldest first."""
        return self.find(
            {"job_id": self._to_object_id(job_id)},
            limit=0,
            sort_by="created_at",
            sort_order=1,
        )

    def get_by_candidate(self, candidate_id: str | ObjectId) -> list[Application]:
        """Get every application submitted by a candidate, newest first."""
        return self.find(
            {"candidate_id": self._to_object_id(candidate_id)},
            limit=0,
            sort_by="created_at",
            sort_order=-1,
        )

    # -------------------------------------------------------------------------
    # Update Operations
    # -------------------------------------------------------------------------

    def record_status_change(
        self,
        application_id: str | ObjectId,
        expected_status: ApplicationStatus,
        entry: HistoryEntry,
        notes: Optional[str] = None,
    ) -> Optional[Application]:
        """
        Set the status and append a history entry in one atomic update.

        The update only applies while the stored status still equals
        ``expected_status``; returns None when another writer got there first.
        """
        collection = self._get_collection()
        update_fields: dict[str, Any] = {
            "status": ApplicationStatus(entry.status).value,
            "updated_at": utc_now(),
        }
        if notes:
            update_fields["notes"] = notes

        result: UpdateResult = collection.update_one(
            {
                "_id": self._to_object_id(application_id),
                "status": ApplicationStatus(expected_status).value,
            },
            {
                "$set": update_fields,
                "$push": {"history": entry.model_dump(exclude_none=True)},
            },
        )

        if result.modified_count == 0:
            return None

        logger.debug(
            f"Application {application_id}: {expected_status} -> {entry.status}"
        )
        return self.get_by_id(application_id)

    # -------------------------------------------------------------------------
    # Aggregations
    # -------------------------------------------------------------------------

    def count_for_jobs(self, job_ids: list[ObjectId]) -> int:
        """Count applications across a set of jobs."""
        return self.count({"job_id": {"$in": job_ids}})

    def get_status_counts_for_jobs(self, job_ids: list[ObjectId]) -> dict[str, int]:
        """Get count of applications by status across a set of jobs."""
        collection = self._get_collection()
        pipeline = [
            {"$match": {"job_id": {"$in": job_ids}}},
            {"$group": {"_id": "$status", "count": {"$sum": 1}}},
        ]
        results = list(collection.aggregate(pipeline))
        return {r["_id"]: r["count"] for r in results}

    def get_counts_per_job(self, job_ids: list[ObjectId]) -> list[dict[str, Any]]:
        """Get application counts per job, joined with the job title."""
        collection = self._get_collection()
        pipeline = [
            {"$match": {"job_id": {"$in": job_ids}}},
            {"$group": {"_id": "$job_id", "count": {"$sum": 1}}},
            {
                "$lookup": {
                    "from": "jobs",
                    "localField": "_id",
                    "foreignField": "_id",
                    "as": "job",
                }
            },
            {"$unwind": "$job"},
            {"$project": {"_id": 0, "job_title": "$job.title", "count": 1}},
            {"$sort": {"count": -1}},
        ]
        return list(collection.aggregate(pipeline))


# Singleton instance
_application_repository: Optional[ApplicationRepository] = None


def get_application_repository() -> ApplicationRepository:
    """Get the application repository singleton instance."""
    global _application_repository
    if _application_repository is None:
        _application_repository = ApplicationRepository()
    return _application_repository
