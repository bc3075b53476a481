"""
Tests for o1match.cli: offline scoring, profile import and error handling.
"""

import json

import pytest
from typer.testing import CliRunner

from o1match import __version__, cli
from o1match.core.exceptions import JobAccessDeniedError

runner = CliRunner()


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    # Loguru would keep a handle on the runner's captured stderr
    monkeypatch.setattr(cli, "setup_logging", lambda: None)


@pytest.fixture
def profile_files(tmp_path):
    talent = {
        "id": "talent-1",
        "o1_score": 70,
        "criteria_met": ["critical_employment", "original_contribution"],
        "skills": ["python", "machine learning"],
        "education_level": "masters",
        "years_experience": 6,
    }
    job = {
        "id": "job-1",
        "min_score": 65,
        "preferred_criteria": ["critical_employment"],
        "required_skills": ["python"],
        "preferred_skills": ["machine learning", "aws"],
        "required_education": "bachelors",
        "min_experience": 3,
    }
    talent_path = tmp_path / "talent.json"
    job_path = tmp_path / "job.json"
    talent_path.write_text(json.dumps(talent))
    job_path.write_text(json.dumps(job))
    return talent_path, job_path


class TestVersionAndInfo:
    def test_version(self):
        result = runner.invoke(cli.app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_info_lists_weights(self):
        result = runner.invoke(cli.app, ["info"])
        assert result.exit_code == 0
        assert "o1_score" in result.output
        assert "0.40" in result.output


class TestScore:
    def test_json_output(self, profile_files):
        talent_path, job_path = profile_files
        result = runner.invoke(cli.app, ["score", str(talent_path), str(job_path), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["overall_score"] == 89
        assert data["category"] == "excellent"
        assert data["breakdown"]["skills"]["score"] == 80.0

    def test_table_output(self, profile_files):
        talent_path, job_path = profile_files
        result = runner.invoke(cli.app, ["score", str(talent_path), str(job_path)])
        assert result.exit_code == 0
        assert "Overall" in result.output
        assert "EXCELLENT" in result.output

    def test_missing_file(self, tmp_path, profile_files):
        _, job_path = profile_files
        result = runner.invoke(cli.app, ["score", str(tmp_path / "nope.json"), str(job_path)])
        assert result.exit_code == 1
        assert "does not exist" in result.output

    def test_invalid_json(self, tmp_path, profile_files):
        _, job_path = profile_files
        bad = tmp_path / "bad.json"
        bad.write_text("{not json")
        result = runner.invoke(cli.app, ["score", str(bad), str(job_path)])
        assert result.exit_code == 1
        assert "Invalid JSON" in result.output

    def test_non_object_json(self, tmp_path, profile_files):
        _, job_path = profile_files
        listing = tmp_path / "list.json"
        listing.write_text("[1, 2]")
        result = runner.invoke(cli.app, ["score", str(listing), str(job_path)])
        assert result.exit_code == 1


class _DeniedService:
    def talent_matches_for_job(self, job_id, user_id, limit=None):
        raise JobAccessDeniedError(job_id)


class _BrokenService:
    def job_matches_for_talent(self, talent_id, limit=None):
        raise RuntimeError("boom")


class TestServiceErrors:
    def test_service_error_exits_non_zero(self, monkeypatch):
        monkeypatch.setattr(cli, "_get_service", lambda: _DeniedService())
        result = runner.invoke(cli.app, ["best-talent", "job-1", "--user", "user-1"])
        assert result.exit_code == 1
        assert "not found or unauthorized" in result.output

    def test_unexpected_error_is_generic(self, monkeypatch):
        monkeypatch.setattr(cli, "_get_service", lambda: _BrokenService())
        result = runner.invoke(cli.app, ["best-jobs", "talent-1"])
        assert result.exit_code == 1
        assert "Failed to calculate matches" in result.output
        assert "boom" not in result.output


# ── Profile import ───────────────────────────────────────────────────────────


class _RecordingRepository:
    def __init__(self):
        self.created = []

    def bulk_create(self, models):
        self.created.extend(models)
        return models


class _ConnectedDatabase:
    def check_connection(self):
        return True


@pytest.fixture
def import_repositories(monkeypatch):
    from o1match.data import database, repositories

    repos = {
        "employers": _RecordingRepository(),
        "jobs": _RecordingRepository(),
        "talents": _RecordingRepository(),
    }
    monkeypatch.setattr(database, "get_database_manager", lambda: _ConnectedDatabase())
    monkeypatch.setattr(repositories, "get_employer_repository", lambda: repos["employers"])
    monkeypatch.setattr(repositories, "get_job_repository", lambda: repos["jobs"])
    monkeypatch.setattr(repositories, "get_talent_repository", lambda: repos["talents"])
    return repos


@pytest.fixture
def import_data():
    return {
        "employers": [{"user_id": "user-1", "company_name": "Acme"}],
        "jobs": [
            {
                "title": "ML Engineer",
                "status": "active",
                "employer_user_id": "user-1",
                "min_score": 60,
                "required_skills": ["python"],
            }
        ],
        "talents": [{"o1_score": 72, "skills": ["python"], "visibility": "public"}],
    }


def _write_import(tmp_path, data):
    path = tmp_path / "profiles.json"
    path.write_text(json.dumps(data))
    return path


class TestImportProfiles:
    def test_links_jobs_to_employers(self, tmp_path, import_repositories, import_data):
        result = runner.invoke(cli.app, ["import-profiles", str(_write_import(tmp_path, import_data))])

        assert result.exit_code == 0
        [employer] = import_repositories["employers"].created
        [job] = import_repositories["jobs"].created
        assert employer.id is not None
        assert job.employer_id == employer.id
        assert len(import_repositories["talents"].created) == 1
        assert "Imported Profiles" in result.output

    def test_unknown_employer_user_writes_nothing(self, tmp_path, import_repositories, import_data):
        import_data["jobs"][0]["employer_user_id"] = "user-404"

        result = runner.invoke(cli.app, ["import-profiles", str(_write_import(tmp_path, import_data))])

        assert result.exit_code == 1
        assert "Unknown employer_user_id: user-404" in result.output
        assert all(repo.created == [] for repo in import_repositories.values())

    def test_invalid_job_writes_nothing(self, tmp_path, import_repositories, import_data):
        import_data["jobs"][0]["salary_min"] = -1

        result = runner.invoke(cli.app, ["import-profiles", str(_write_import(tmp_path, import_data))])

        assert result.exit_code == 1
        assert "Invalid profile data" in result.output
        assert all(repo.created == [] for repo in import_repositories.values())

    def test_invalid_talent_writes_nothing(self, tmp_path, import_repositories, import_data):
        import_data["talents"][0]["o1_score"] = 150

        result = runner.invoke(cli.app, ["import-profiles", str(_write_import(tmp_path, import_data))])

        assert result.exit_code == 1
        assert all(repo.created == [] for repo in import_repositories.values())

    def test_top_level_must_be_object(self, tmp_path, import_repositories):
        result = runner.invoke(cli.app, ["import-profiles", str(_write_import(tmp_path, []))])
        assert result.exit_code == 1
        assert "Expected a JSON object" in result.output
