"""
Shared test fixtures for the HireFlow test suite.

Sets environment variables before any hireflow imports so settings resolve
to the testing profile, then provides user/job factories and in-memory
repositories that stand in for MongoDB behind the services.
"""

import os

# === Set environment BEFORE any hireflow imports ===
os.environ.setdefault("APP_ENVIRONMENT", "testing")
os.environ.setdefault("DB_NAME", "hireflow_test")

from datetime import datetime, timedelta
from itertools import count
from typing import Any, Optional

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from hireflow.core.dashboard import DashboardService
from hireflow.core.jobs import JobService
from hireflow.core.lifecycle import ApplicationService
from hireflow.core.matching import CandidateRankingService, MatchScorer
from hireflow.data.models import Application, HistoryEntry, Job, User
from hireflow.utils.constants import ApplicationStatus, UserRole


# ---------------------------------------------------------------------------
# In-memory repositories
# ---------------------------------------------------------------------------


class _InMemoryRepository:
    """Dictionary-backed store mirroring the BaseRepository surface the services use."""

    _clock = count()

    def __init__(self):
        self.docs: dict[str, Any] = {}

    def _stamp(self, model):
        # Strictly increasing timestamps keep created_at ordering deterministic
        moment = datetime(2024, 1, 1) + timedelta(seconds=next(self._clock))
        model.created_at = moment
        model.updated_at = moment

    def create(self, model):
        self._stamp(model)
        model.id = ObjectId()
        self.docs[str(model.id)] = model
        return model

    def add(self, model):
        """Insert a model as-is, keeping any timestamps the test set."""
        if model.id is None:
            model.id = ObjectId()
        self.docs[str(model.id)] = model
        return model

    def get_by_id(self, id_value):
        return self.docs.get(str(id_value))

    def get_by_ids(self, ids):
        return {str(i): self.docs[str(i)] for i in ids if str(i) in self.docs}


class InMemoryUserRepository(_InMemoryRepository):
    def get_candidates(self) -> list[User]:
        users = [u for u in self.docs.values() if u.role == UserRole.CANDIDATE.value]
        return sorted(users, key=lambda u: u.created_at)


class InMemoryJobRepository(_InMemoryRepository):
    def search(self, skip=0, limit=10, search=None, company=None, posted_by=None):
        jobs = list(self.docs.values())
        if search:
            jobs = [j for j in jobs if search.lower() in j.title.lower()]
        if company:
            jobs = [j for j in jobs if company.lower() in j.company.lower()]
        if posted_by:
            jobs = [j for j in jobs if j.is_owned_by(posted_by)]
        jobs.sort(key=lambda j: j.created_at, reverse=True)
        return len(jobs), jobs[skip:skip + limit]

    def get_ids(self, posted_by=None):
        return [
            j.id for j in self.docs.values()
            if posted_by is None or j.is_owned_by(posted_by)
        ]


class InMemoryApplicationRepository(_InMemoryRepository):
    def __init__(self):
        super().__init__()
        self.raise_duplicate_on_create = False
        self.lose_next_race = False

    def create(self, model):
        if self.raise_duplicate_on_create:
            raise DuplicateKeyError("E11000 duplicate key error")
        return super().create(model)

    def application_exists(self, job_id, candidate_id) -> bool:
        return any(
            str(a.job_id) == str(job_id) and str(a.candidate_id) == str(candidate_id)
            for a in self.docs.values()
        )

    def get_by_job(self, job_id):
        apps = [a for a in self.docs.values() if str(a.job_id) == str(job_id)]
        return sorted(apps, key=lambda a: a.created_at)

    def get_by_candidate(self, candidate_id):
        apps = [a for a in self.docs.values() if str(a.candidate_id) == str(candidate_id)]
        return sorted(apps, key=lambda a: a.created_at, reverse=True)

    def record_status_change(self, application_id, expected_status, entry, notes=None):
        stored = self.docs.get(str(application_id))
        if self.lose_next_race:
            self.lose_next_race = False
            return None
        if stored is None or stored.status != ApplicationStatus(expected_status).value:
            return None

        update: dict[str, Any] = {
            "status": ApplicationStatus(entry.status).value,
            "history": [*stored.history, entry],
        }
        if notes:
            update["notes"] = notes
        updated = stored.model_copy(update=update)
        self.docs[str(application_id)] = updated
        return updated

    def _for_jobs(self, job_ids):
        wanted = {str(j) for j in job_ids}
        return [a for a in self.docs.values() if str(a.job_id) in wanted]

    def count_for_jobs(self, job_ids) -> int:
        return len(self._for_jobs(job_ids))

    def get_status_counts_for_jobs(self, job_ids) -> dict[str, int]:
        counts: dict[str, int] = {}
        for application in self._for_jobs(job_ids):
            counts[application.status] = counts.get(application.status, 0) + 1
        return counts

    def get_counts_per_job(self, job_ids) -> list[dict[str, Any]]:
        per_job: dict[str, int] = {}
        for application in self._for_jobs(job_ids):
            per_job[str(application.job_id)] = per_job.get(str(application.job_id), 0) + 1
        rows = [
            {"job_title": self.jobs.docs[job_id].title, "count": n}
            for job_id, n in per_job.items()
            if job_id in self.jobs.docs
        ]
        return sorted(rows, key=lambda r: r["count"], reverse=True)


# ---------------------------------------------------------------------------
# Repository and service fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def user_repo():
    return InMemoryUserRepository()


@pytest.fixture
def job_repo():
    return InMemoryJobRepository()


@pytest.fixture
def application_repo(job_repo):
    repo = InMemoryApplicationRepository()
    repo.jobs = job_repo
    return repo


@pytest.fixture
def scorer():
    return MatchScorer()


@pytest.fixture
def application_service(application_repo, job_repo, user_repo, scorer):
    return ApplicationService(
        applications=application_repo,
        jobs=job_repo,
        users=user_repo,
        scorer=scorer,
    )


@pytest.fixture
def ranking_service(job_repo, user_repo, scorer):
    return CandidateRankingService(jobs=job_repo, users=user_repo, scorer=scorer)


@pytest.fixture
def job_service(job_repo):
    return JobService(jobs=job_repo)


@pytest.fixture
def dashboard_service(application_repo, job_repo):
    return DashboardService(applications=application_repo, jobs=job_repo)


# ---------------------------------------------------------------------------
# Factory fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_user(user_repo):
    """Factory that builds and stores a User."""

    def _factory(
        name: str = "Jane Doe",
        email: Optional[str] = None,
        role: UserRole = UserRole.CANDIDATE,
        skills: Any = None,
        experience_years: Any = 0,
        location: Optional[str] = None,
    ) -> User:
        user = User(
            name=name,
            email=email or f"{ObjectId()}@example.com",
            role=role,
            skills=skills if skills is not None else [],
            experience_years=experience_years,
            location=location,
        )
        return user_repo.create(user)

    return _factory


@pytest.fixture
def make_job(job_repo):
    """Factory that builds and stores a Job posted by ``posted_by``."""

    def _factory(
        posted_by: ObjectId,
        title: str = "Frontend Developer",
        company: str = "Acme",
        description: str = "Build React apps",
        required_skills: Any = None,
        experience_required: Any = 0,
        location: Optional[str] = None,
    ) -> Job:
        job = Job(
            title=title,
            company=company,
            description=description,
            required_skills=required_skills if required_skills is not None else [],
            experience_required=experience_required,
            location=location,
            posted_by=posted_by,
        )
        return job_repo.create(job)

    return _factory


@pytest.fixture
def recruiter(make_user):
    return make_user(name="Rita Recruiter", role=UserRole.RECRUITER)


@pytest.fixture
def other_recruiter(make_user):
    return make_user(name="Oscar Other", role=UserRole.RECRUITER)


@pytest.fixture
def admin(make_user):
    return make_user(name="Ada Admin", role=UserRole.ADMIN)


@pytest.fixture
def candidate(make_user):
    return make_user(
        name="Carl Candidate",
        skills=["react", "css"],
        experience_years=1,
        location="Berlin",
    )


@pytest.fixture
def job(make_job, recruiter):
    return make_job(
        posted_by=recruiter.id,
        required_skills=["react", "node", "css"],
        experience_required=3,
        location="Berlin",
    )


@pytest.fixture
def submitted(application_service, candidate, job):
    """An application freshly submitted by ``candidate`` to ``job``."""
    return application_service.apply(candidate, str(job.id), notes="Keen to join")


@pytest.fixture
def make_application(application_repo):
    """Factory that stores an application directly in a given status."""

    def _factory(
        job: Job,
        candidate: User,
        status: ApplicationStatus = ApplicationStatus.APPLIED,
        scores: Optional[dict[str, int]] = None,
    ) -> Application:
        application = Application(
            job_id=job.id,
            candidate_id=candidate.id,
            status=status,
            history=[HistoryEntry(status=status, changed_by=candidate.id)],
            **(scores or {}),
        )
        return application_repo.create(application)

    return _factory
