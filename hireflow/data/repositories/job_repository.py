"""
Job repository for HireFlow.

Provides data access operations for job posting documents,
including search and pagination.
"""

import re
from typing import Any, Optional

from bson import ObjectId

from hireflow.data.models.job import Job
from hireflow.utils.logger import get_logger

from .base import BaseRepository

logger = get_logger(__name__)


class JobRepository(BaseRepository[Job]):
    """Repository for job posting document operations."""

    @property
    def collection_name(self) -> str:
        return "jobs"

    @property
    def model_class(self) -> type[Job]:
        return Job

    # -------------------------------------------------------------------------
    # Query Operations
    # -------------------------------------------------------------------------

    @staticmethod
    def build_search_query(
        search: Optional[str] = None,
        company: Optional[str] = None,
        posted_by: Optional[str | ObjectId] = None,
    ) -> dict[str, Any]:
        """Build a listing filter; text filters are escaped substring matches."""
        query: dict[str, Any] = {}

        if search and search.strip():
            query["title"] = {"$regex": re.escape(search.strip()), "$options": "i"}

        if company and company.strip():
            query["company"] = {"$regex": re.escape(company.strip()), "$options": "i"}

        if posted_by:
            if JobRepository._is_valid_id(posted_by):
                query["posted_by"] = JobRepository._to_object_id(posted_by)
            else:
                # Malformed owner ids match no job
                query["_id"] = {"$in": []}

        return query

    def search(
        self,
        skip: int = 0,
        limit: int = 10,
        search: Optional[str] = None,
        company: Optional[str] = None,
        posted_by: Optional[str | ObjectId] = None,
    ) -> tuple[int, list[Job]]:
        """Return the total match count and one page of jobs, newest first."""
        query = self.build_search_query(search, company, posted_by)
        total = self.count(query)
        jobs = self.find(query, skip=skip, limit=limit, sort_by="created_at", sort_order=-1)
        return total, jobs

    def get_ids(self, posted_by: Optional[str | ObjectId] = None) -> list[ObjectId]:
        """IDs of all jobs, or of the jobs posted by one recruiter."""
        query: dict[str, Any] = {}
        if posted_by is not None:
            query["posted_by"] = self._to_object_id(posted_by)
        return list(self._get_collection().distinct("_id", query))


# Singleton instance
_job_repository: Optional[JobRepository] = None


def get_job_repository() -> JobRepository:
    """Get the job repository singleton instance."""
    global _job_repository
    if _job_repository is None:
        _job_repository = JobRepository()
    return _job_repository
