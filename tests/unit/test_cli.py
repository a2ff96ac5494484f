"""
Tests for hireflow.cli: command wiring and error reporting.

Database access is patched out; the services are the in-memory fixtures.
"""

import pytest
from pymongo.errors import DuplicateKeyError
from typer.testing import CliRunner

import hireflow.cli as cli
import hireflow.core.lifecycle as lifecycle
import hireflow.core.matching as matching
import hireflow.data.repositories as repositories
import hireflow.utils.logger as logger_module
from hireflow.data.models import User

runner = CliRunner()


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    """Keep the CLI callback from rebinding log sinks to the runner streams."""
    monkeypatch.setattr(logger_module, "setup_logging", lambda: None)


@pytest.fixture
def offline(monkeypatch, user_repo):
    """Skip the MongoDB ping and resolve actors from the in-memory store."""
    monkeypatch.setattr(cli, "_require_db", lambda: None)
    monkeypatch.setattr(cli, "_resolve_actor", lambda user_id: user_repo.get_by_id(user_id))


class TestVersion:
    def test_prints_version(self):
        result = runner.invoke(cli.app, ["version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.stdout


class TestAddUserCommand:
    def test_creates_user(self, monkeypatch, offline, user_repo):
        user_repo.create_from_schema = lambda data: user_repo.create(User(**data.model_dump()))
        monkeypatch.setattr(repositories, "get_user_repository", lambda: user_repo)

        result = runner.invoke(
            cli.app, ["add-user", "--name", "Ann", "--email", "ann@example.com", "--skills", "go, sql"]
        )

        assert result.exit_code == 0
        assert "User created" in result.stdout
        (user,) = user_repo.docs.values()
        assert user.skills == ["go", "sql"]

    def test_duplicate_email_reported(self, monkeypatch, offline, user_repo):
        def reject(data):
            raise DuplicateKeyError("E11000 duplicate key error collection: users index: email_1")

        user_repo.create_from_schema = reject
        monkeypatch.setattr(repositories, "get_user_repository", lambda: user_repo)

        result = runner.invoke(
            cli.app, ["add-user", "--name", "Ann", "--email", "ann@example.com"]
        )

        assert result.exit_code == 1
        assert "already exists" in result.stdout


class TestApplyCommand:
    def test_success(self, monkeypatch, offline, application_service, candidate, job):
        monkeypatch.setattr(lifecycle, "get_application_service", lambda: application_service)

        result = runner.invoke(cli.app, ["apply", str(job.id), "--as", str(candidate.id)])

        assert result.exit_code == 0
        assert "Application submitted" in result.stdout
        assert "60" in result.stdout

    def test_duplicate_reports_conflict(self, monkeypatch, offline, application_service, submitted, candidate, job):
        monkeypatch.setattr(lifecycle, "get_application_service", lambda: application_service)

        result = runner.invoke(cli.app, ["apply", str(job.id), "--as", str(candidate.id)])

        assert result.exit_code == 1
        assert "CONFLICT" in result.stdout


class TestMoveCommand:
    def test_invalid_transition(self, monkeypatch, offline, application_service, submitted, recruiter):
        monkeypatch.setattr(lifecycle, "get_application_service", lambda: application_service)

        result = runner.invoke(
            cli.app, ["move", str(submitted.id), "Hired", "--as", str(recruiter.id)]
        )

        assert result.exit_code == 1
        assert "INVALID_TRANSITION" in result.stdout

    def test_success(self, monkeypatch, offline, application_service, submitted, recruiter):
        monkeypatch.setattr(lifecycle, "get_application_service", lambda: application_service)

        result = runner.invoke(
            cli.app, ["move", str(submitted.id), "Screening", "--as", str(recruiter.id)]
        )

        assert result.exit_code == 0
        assert "Screening" in result.stdout


class TestRankCommand:
    def test_lists_candidates(self, monkeypatch, offline, ranking_service, recruiter, candidate, job):
        monkeypatch.setattr(matching, "get_ranking_service", lambda: ranking_service)

        result = runner.invoke(cli.app, ["rank", str(job.id), "--as", str(recruiter.id)])

        assert result.exit_code == 0
        assert "Carl" in result.stdout
