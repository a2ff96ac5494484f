"""
Tests for hireflow.core.lifecycle.application_service: submission, status
changes, withdrawal and the two application listings.

Repositories are the in-memory doubles from conftest.
"""

import pytest
from bson import ObjectId

from hireflow.core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidStateError,
    InvalidTransitionError,
    NotFoundError,
)
from hireflow.utils.constants import ApplicationStatus

S = ApplicationStatus


# ── apply ───────────────────────────────────────────────────────────────────


class TestApply:
    def test_creates_applied_application(self, submitted, candidate, job):
        assert submitted.id is not None
        assert submitted.status == "Applied"
        assert submitted.job_id == job.id
        assert submitted.candidate_id == candidate.id
        assert submitted.notes == "Keen to join"

    def test_initial_history_entry(self, submitted, candidate):
        assert len(submitted.history) == 1
        assert submitted.history[0].status == "Applied"
        assert submitted.history[0].changed_by == candidate.id

    def test_scores_stored(self, submitted):
        # 2/3 skills, 1/3 years, same city
        assert submitted.skill_score == 67
        assert submitted.experience_score == 33
        assert submitted.location_score == 100
        assert submitted.match_score == 60

    def test_duplicate_application_conflicts(self, application_service, submitted, candidate, job):
        with pytest.raises(ConflictError):
            application_service.apply(candidate, job.id)

    def test_duplicate_key_race_conflicts(self, application_service, application_repo, candidate, job):
        application_repo.raise_duplicate_on_create = True
        with pytest.raises(ConflictError):
            application_service.apply(candidate, job.id)

    def test_unknown_job(self, application_service, candidate):
        with pytest.raises(NotFoundError):
            application_service.apply(candidate, ObjectId())

    def test_malformed_job_id(self, application_service, candidate):
        with pytest.raises(NotFoundError):
            application_service.apply(candidate, "not-an-id")

    def test_recruiter_cannot_apply(self, application_service, recruiter, job):
        with pytest.raises(ForbiddenError):
            application_service.apply(recruiter, job.id)

    def test_same_candidate_different_jobs(self, application_service, make_job, recruiter, candidate):
        first = make_job(posted_by=recruiter.id, title="One")
        second = make_job(posted_by=recruiter.id, title="Two")
        application_service.apply(candidate, first.id)
        application_service.apply(candidate, second.id)


# ── transition ──────────────────────────────────────────────────────────────


class TestTransition:
    def test_owner_moves_forward(self, application_service, submitted, recruiter):
        updated = application_service.transition(submitted.id, recruiter, "Screening")

        assert updated.status == "Screening"
        assert len(updated.history) == 2
        assert updated.history[-1].status == "Screening"
        assert updated.history[-1].changed_by == recruiter.id

    def test_history_grows_through_pipeline(self, application_service, submitted, recruiter):
        application = submitted
        for target in [S.SCREENING, S.INTERVIEW, S.TECHNICAL, S.HR, S.OFFER, S.HIRED]:
            application = application_service.transition(application.id, recruiter, target)

        assert application.status == "Hired"
        assert [h.status for h in application.history] == [
            "Applied", "Screening", "Interview", "Technical", "HR", "Offer", "Hired",
        ]

    def test_history_note_and_notes(self, application_service, submitted, recruiter):
        updated = application_service.transition(
            submitted.id, recruiter, S.REJECTED, note="Not enough React", notes="Reviewed"
        )
        assert updated.history[-1].note == "Not enough React"
        assert updated.notes == "Reviewed"

    def test_notes_kept_when_not_given(self, application_service, submitted, recruiter):
        updated = application_service.transition(submitted.id, recruiter, S.SCREENING)
        assert updated.notes == "Keen to join"

    def test_non_owner_forbidden(self, application_service, application_repo, submitted, other_recruiter):
        with pytest.raises(ForbiddenError):
            application_service.transition(submitted.id, other_recruiter, S.SCREENING)
        assert application_repo.get_by_id(submitted.id).status == "Applied"

    def test_admin_may_move_any_application(self, application_service, submitted, admin):
        updated = application_service.transition(submitted.id, admin, S.SCREENING)
        assert updated.status == "Screening"

    def test_candidate_forbidden(self, application_service, submitted, candidate):
        with pytest.raises(ForbiddenError):
            application_service.transition(submitted.id, candidate, S.SCREENING)

    def test_invalid_transition_leaves_state(self, application_service, application_repo, submitted, recruiter):
        with pytest.raises(InvalidTransitionError):
            application_service.transition(submitted.id, recruiter, S.OFFER)

        stored = application_repo.get_by_id(submitted.id)
        assert stored.status == "Applied"
        assert len(stored.history) == 1

    def test_unknown_status(self, application_service, submitted, recruiter):
        with pytest.raises(InvalidTransitionError):
            application_service.transition(submitted.id, recruiter, "Promoted")

    def test_terminal_application_cannot_move(self, application_service, submitted, recruiter):
        application_service.transition(submitted.id, recruiter, S.REJECTED)
        with pytest.raises(InvalidTransitionError):
            application_service.transition(submitted.id, recruiter, S.SCREENING)

    def test_unknown_application(self, application_service, recruiter):
        with pytest.raises(NotFoundError):
            application_service.transition(ObjectId(), recruiter, S.SCREENING)

    def test_job_deleted(self, application_service, job_repo, submitted, recruiter, job):
        del job_repo.docs[str(job.id)]
        with pytest.raises(NotFoundError):
            application_service.transition(submitted.id, recruiter, S.SCREENING)

    def test_concurrent_change_rejected(self, application_service, application_repo, submitted, recruiter):
        application_repo.lose_next_race = True
        with pytest.raises(InvalidTransitionError):
            application_service.transition(submitted.id, recruiter, S.SCREENING)
        assert application_repo.get_by_id(submitted.id).status == "Applied"


# ── withdraw ────────────────────────────────────────────────────────────────


class TestWithdraw:
    @pytest.mark.parametrize(
        "status", [S.APPLIED, S.SCREENING, S.INTERVIEW, S.TECHNICAL, S.HR, S.OFFER]
    )
    def test_from_any_active_status(self, application_service, make_application, candidate, job, status):
        application = make_application(job, candidate, status=status)

        updated = application_service.withdraw(application.id, candidate)

        assert updated.status == "Withdrawn"
        assert updated.history[-1].status == "Withdrawn"
        assert updated.history[-1].changed_by == candidate.id
        assert len(updated.history) == 2

    @pytest.mark.parametrize("status", [S.HIRED, S.REJECTED, S.WITHDRAWN])
    def test_terminal_cannot_withdraw(self, application_service, make_application, candidate, job, status):
        application = make_application(job, candidate, status=status)
        with pytest.raises(InvalidStateError):
            application_service.withdraw(application.id, candidate)

    def test_other_candidate_forbidden(self, application_service, submitted, make_user):
        stranger = make_user(name="Stranger")
        with pytest.raises(ForbiddenError):
            application_service.withdraw(submitted.id, stranger)

    def test_recruiter_cannot_withdraw(self, application_service, submitted, recruiter):
        with pytest.raises(ForbiddenError):
            application_service.withdraw(submitted.id, recruiter)

    def test_unknown_application(self, application_service, candidate):
        with pytest.raises(NotFoundError):
            application_service.withdraw(ObjectId(), candidate)

    def test_concurrent_change_rejected(self, application_service, application_repo, submitted, candidate):
        application_repo.lose_next_race = True
        with pytest.raises(InvalidStateError):
            application_service.withdraw(submitted.id, candidate)

    def test_withdrawn_cannot_be_moved_by_recruiter(self, application_service, submitted, candidate, recruiter):
        application_service.withdraw(submitted.id, candidate)
        with pytest.raises(InvalidTransitionError):
            application_service.transition(submitted.id, recruiter, S.SCREENING)


# ── list_for_job ────────────────────────────────────────────────────────────


class TestListForJob:
    def test_lists_with_candidate_summary(self, application_service, submitted, recruiter, job, candidate):
        views = application_service.list_for_job(job.id, recruiter)

        assert len(views) == 1
        view = views[0]
        assert view.application_id == submitted.id
        assert view.candidate.name == "Carl Candidate"
        assert view.candidate.skills == ["react", "css"]
        assert view.scores.total_score == 60
        assert view.status == "Applied"

    def test_oldest_first(self, application_service, make_user, recruiter, job):
        first = make_user(name="First")
        second = make_user(name="Second")
        application_service.apply(first, job.id)
        application_service.apply(second, job.id)

        views = application_service.list_for_job(job.id, recruiter)

        assert [v.candidate.name for v in views] == ["First", "Second"]

    def test_legacy_scores_recomputed(self, application_service, make_application, recruiter, job, candidate):
        make_application(job, candidate)  # no scores stored

        view = application_service.list_for_job(job.id, recruiter)[0]

        assert view.scores.total_score == 60
        assert view.scores.skill_score == 67

    def test_non_owner_forbidden(self, application_service, submitted, other_recruiter, job):
        with pytest.raises(ForbiddenError):
            application_service.list_for_job(job.id, other_recruiter)

    def test_admin_sees_any_job(self, application_service, submitted, admin, job):
        assert len(application_service.list_for_job(job.id, admin)) == 1

    def test_unknown_job(self, application_service, recruiter):
        with pytest.raises(NotFoundError):
            application_service.list_for_job(ObjectId(), recruiter)

    def test_no_applications(self, application_service, recruiter, job):
        assert application_service.list_for_job(job.id, recruiter) == []


# ── list_for_candidate ──────────────────────────────────────────────────────


class TestListForCandidate:
    def test_newest_first_with_job_summary(self, application_service, make_job, recruiter, candidate):
        older = make_job(posted_by=recruiter.id, title="Older", company="Globex")
        newer = make_job(posted_by=recruiter.id, title="Newer", company="Initech")
        application_service.apply(candidate, older.id)
        application_service.apply(candidate, newer.id)

        views = application_service.list_for_candidate(candidate)

        assert [v.job.title for v in views] == ["Newer", "Older"]
        assert views[0].job.company == "Initech"

    def test_only_own_applications(self, application_service, submitted, make_user):
        other = make_user(name="Other")
        assert application_service.list_for_candidate(other) == []

    def test_recruiter_forbidden(self, application_service, recruiter):
        with pytest.raises(ForbiddenError):
            application_service.list_for_candidate(recruiter)

    def test_missing_job_yields_empty_summary(self, application_service, job_repo, submitted, candidate, job):
        del job_repo.docs[str(job.id)]
        views = application_service.list_for_candidate(candidate)
        assert views[0].job is None
