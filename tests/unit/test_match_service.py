"""
Tests for o1match.services.match_service: lookups, authorization and result shaping.
"""

import pytest
from bson import ObjectId

from o1match.core.exceptions import (
    EmployerNotFoundError,
    JobAccessDeniedError,
    JobNotFoundError,
    MatchServiceError,
    TalentNotFoundError,
)
from o1match.data.models import EmployerProfile, JobMatchSummary, SingleMatch, TalentMatchSummary
from o1match.utils.constants import JobStatus, MatchCategory, ProfileVisibility


# ── single_match ─────────────────────────────────────────────────────────────


class TestSingleMatch:
    def test_scores_stored_records(self, make_match_service, make_talent_profile, make_job_listing):
        talent = make_talent_profile()
        job = make_job_listing()
        service = make_match_service(talents=[talent], jobs=[job])

        result = service.single_match(str(talent.id), str(job.id))

        assert isinstance(result, SingleMatch)
        assert result.talent_id == str(talent.id)
        assert result.job_id == str(job.id)
        assert 0 <= result.match.overall_score <= 100
        assert set(result.match.breakdown) == {"o1_score", "criteria", "skills", "education", "experience"}

    def test_unknown_talent(self, make_match_service, make_job_listing):
        job = make_job_listing()
        service = make_match_service(jobs=[job])
        with pytest.raises(TalentNotFoundError) as exc_info:
            service.single_match(str(ObjectId()), str(job.id))
        assert isinstance(exc_info.value, MatchServiceError)

    def test_unknown_job(self, make_match_service, make_talent_profile):
        talent = make_talent_profile()
        service = make_match_service(talents=[talent])
        with pytest.raises(JobNotFoundError):
            service.single_match(str(talent.id), str(ObjectId()))

    def test_result_matches_engine(
        self, make_match_service, make_talent_profile, make_job_listing, matching_engine
    ):
        talent = make_talent_profile()
        job = make_job_listing()
        service = make_match_service(talents=[talent], jobs=[job])

        expected = matching_engine.calculate_match_score(talent.to_match_profile(), job.to_match_profile())
        assert service.single_match(str(talent.id), str(job.id)).match == expected


# ── job_matches_for_talent ───────────────────────────────────────────────────


class TestJobMatchesForTalent:
    def test_ranks_active_jobs_only(
        self, make_match_service, make_talent_profile, make_job_listing, employer
    ):
        talent = make_talent_profile()
        easy = make_job_listing(title="Easy", min_score=0, preferred_criteria=[])
        hard = make_job_listing(title="Hard", min_score=100, min_experience=15)
        draft = make_job_listing(title="Draft", status=JobStatus.DRAFT, min_score=0)
        service = make_match_service(talents=[talent], jobs=[hard, draft, easy], employers=[employer])

        results = service.job_matches_for_talent(str(talent.id))

        assert [r.title for r in results] == ["Easy", "Hard"]
        assert all(isinstance(r, JobMatchSummary) for r in results)
        assert results[0].match_score >= results[1].match_score

    def test_summary_carries_listing_and_company(
        self, make_match_service, make_talent_profile, make_job_listing, employer
    ):
        talent = make_talent_profile()
        job = make_job_listing()
        service = make_match_service(talents=[talent], jobs=[job], employers=[employer])

        [summary] = service.job_matches_for_talent(str(talent.id))

        assert summary.job_id == str(job.id)
        assert summary.company_name == "Acme Robotics"
        assert summary.logo_url == "https://example.com/acme.png"
        assert summary.salary_min == 150000
        assert summary.work_arrangement == "hybrid"
        assert summary.locations == ["Austin, TX"]
        assert MatchCategory(summary.match_category) == MatchCategory.from_score(summary.match_score)
        assert summary.match_summary

    def test_missing_employer_leaves_company_blank(
        self, make_match_service, make_talent_profile, make_job_listing
    ):
        talent = make_talent_profile()
        service = make_match_service(talents=[talent], jobs=[make_job_listing()])
        [summary] = service.job_matches_for_talent(str(talent.id))
        assert summary.company_name is None

    def test_limit(self, make_match_service, make_talent_profile, make_job_listing):
        talent = make_talent_profile()
        jobs = [make_job_listing(title=f"Job {i}") for i in range(5)]
        service = make_match_service(talents=[talent], jobs=jobs)
        assert len(service.job_matches_for_talent(str(talent.id), limit=2)) == 2

    def test_default_limit_from_settings(self, make_match_service, make_talent_profile, make_job_listing):
        talent = make_talent_profile()
        jobs = [make_job_listing(title=f"Job {i}") for i in range(5)]
        service = make_match_service(talents=[talent], jobs=jobs, default_job_limit=3)
        assert len(service.job_matches_for_talent(str(talent.id))) == 3

    def test_no_active_jobs(self, make_match_service, make_talent_profile):
        talent = make_talent_profile()
        service = make_match_service(talents=[talent])
        assert service.job_matches_for_talent(str(talent.id)) == []

    def test_unknown_talent(self, make_match_service, make_job_listing):
        service = make_match_service(jobs=[make_job_listing()])
        with pytest.raises(TalentNotFoundError):
            service.job_matches_for_talent("not-an-id")


# ── talent_matches_for_job ───────────────────────────────────────────────────


class TestTalentMatchesForJob:
    def test_ranks_public_pool(self, make_match_service, make_talent_profile, make_job_listing, employer):
        job = make_job_listing()
        top = make_talent_profile(candidate_id="top", o1_score=95)
        mid = make_talent_profile(candidate_id="mid", o1_score=66)
        hidden = make_talent_profile(candidate_id="hidden", o1_score=99, visibility=ProfileVisibility.PRIVATE)
        service = make_match_service(talents=[mid, hidden, top], jobs=[job], employers=[employer])

        results = service.talent_matches_for_job(str(job.id), employer.user_id)

        assert [r.candidate_id for r in results] == ["top", "mid"]
        assert all(isinstance(r, TalentMatchSummary) for r in results)

    def test_pool_filtered_by_half_min_score(
        self, make_match_service, make_talent_profile, make_job_listing, employer
    ):
        job = make_job_listing(min_score=80)
        low = make_talent_profile(candidate_id="low", o1_score=39)
        edge = make_talent_profile(candidate_id="edge", o1_score=40)
        service = make_match_service(talents=[low, edge], jobs=[job], employers=[employer])

        results = service.talent_matches_for_job(str(job.id), employer.user_id)

        assert [r.candidate_id for r in results] == ["edge"]
        assert service.talents.pool_queries == [(40.0, 100)]

    def test_summary_fields(self, make_match_service, make_talent_profile, make_job_listing, employer):
        job = make_job_listing()
        talent = make_talent_profile()
        service = make_match_service(talents=[talent], jobs=[job], employers=[employer])

        [summary] = service.talent_matches_for_job(str(job.id), employer.user_id)

        assert summary.talent_id == str(talent.id)
        assert summary.o1_score == 70
        assert summary.current_job_title == "ML Engineer"
        assert summary.city == "Austin"
        assert summary.visa_status == "H-1B"
        assert summary.criteria_met == ["critical_employment"]
        assert set(summary.breakdown) == {"o1_score", "criteria", "skills", "education", "experience"}

    def test_unknown_user(self, make_match_service, make_job_listing, employer):
        job = make_job_listing()
        service = make_match_service(jobs=[job], employers=[employer])
        with pytest.raises(EmployerNotFoundError):
            service.talent_matches_for_job(str(job.id), "someone-else")

    def test_job_owned_by_other_employer(self, make_match_service, make_job_listing, employer):
        other = EmployerProfile(_id=ObjectId(), user_id="user-other", company_name="Other Co")
        job = make_job_listing()
        service = make_match_service(jobs=[job], employers=[employer, other])
        with pytest.raises(JobAccessDeniedError):
            service.talent_matches_for_job(str(job.id), other.user_id)

    def test_missing_job_indistinguishable_from_foreign_job(
        self, make_match_service, employer
    ):
        service = make_match_service(employers=[employer])
        with pytest.raises(JobAccessDeniedError) as exc_info:
            service.talent_matches_for_job(str(ObjectId()), employer.user_id)
        assert "not found or unauthorized" in str(exc_info.value)

    def test_empty_pool(self, make_match_service, make_job_listing, employer):
        job = make_job_listing()
        service = make_match_service(jobs=[job], employers=[employer])
        assert service.talent_matches_for_job(str(job.id), employer.user_id) == []

    def test_limit(self, make_match_service, make_talent_profile, make_job_listing, employer):
        job = make_job_listing()
        talents = [make_talent_profile(candidate_id=str(i)) for i in range(4)]
        service = make_match_service(talents=talents, jobs=[job], employers=[employer])
        assert len(service.talent_matches_for_job(str(job.id), employer.user_id, limit=1)) == 1
