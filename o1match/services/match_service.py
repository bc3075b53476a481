"""
Match service for O1-Match.

Loads talent and job records from the profile store, feeds them to the
matching engine, and shapes the results for display. Three operations:

- single_match: one talent against one job
- job_matches_for_talent: best active jobs for a talent
- talent_matches_for_job: best public talent for a job owned by the caller
"""

from typing import Optional

from o1match.core.exceptions import (
    EmployerNotFoundError,
    JobAccessDeniedError,
    JobNotFoundError,
    TalentNotFoundError,
)
from o1match.core.matching import MatchingEngine, get_matching_engine
from o1match.data.models import (
    JobListing,
    JobMatchSummary,
    SingleMatch,
    TalentMatchSummary,
    TalentProfile,
)
from o1match.data.repositories import (
    EmployerRepository,
    JobRepository,
    TalentRepository,
    get_employer_repository,
    get_job_repository,
    get_talent_repository,
)
from o1match.utils.config import MatchingSettings, get_settings
from o1match.utils.constants import AuditAction
from o1match.utils.logger import audit_log, get_logger

logger = get_logger(__name__)


class MatchService:
    """Runs match operations against the profile store."""

    def __init__(
        self,
        talent_repository: TalentRepository,
        job_repository: JobRepository,
        employer_repository: EmployerRepository,
        engine: Optional[MatchingEngine] = None,
        settings: Optional[MatchingSettings] = None,
    ):
        self.talents = talent_repository
        self.jobs = job_repository
        self.employers = employer_repository
        self.engine = engine or get_matching_engine()
        self.settings = settings or get_settings().matching

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def _require_talent(self, talent_id: str) -> TalentProfile:
        talent = self.talents.get_by_id(talent_id)
        if talent is None:
            logger.info(f"Talent profile not found: {talent_id}")
            raise TalentNotFoundError(talent_id)
        return talent

    def _require_job(self, job_id: str) -> JobListing:
        job = self.jobs.get_by_id(job_id)
        if job is None:
            logger.info(f"Job listing not found: {job_id}")
            raise JobNotFoundError(job_id)
        return job

    def _require_owned_job(self, job_id: str, user_id: str) -> JobListing:
        """Load a job, checking the user's employer profile owns it."""
        employer = self.employers.get_by_user_id(user_id)
        if employer is None:
            logger.info(f"No employer profile for user {user_id}")
            raise EmployerNotFoundError(user_id)

        job = self.jobs.get_by_id(job_id)
        if job is None or job.employer_id is None or str(job.employer_id) != str(employer.id):
            logger.warning(f"User {user_id} denied talent ranking for job {job_id}")
            audit_log(
                AuditAction.ACCESS_DENIED.value,
                {"user_id": user_id, "job_id": job_id},
                audit_type="ACCESS",
            )
            raise JobAccessDeniedError(job_id)
        return job

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def single_match(self, talent_id: str, job_id: str) -> SingleMatch:
        """
        Score one talent against one job.

        Raises:
            TalentNotFoundError: No such talent profile
            JobNotFoundError: No such job listing
        """
        talent = self._require_talent(talent_id)
        job = self._require_job(job_id)

        match = self.engine.calculate_match_score(talent.to_match_profile(), job.to_match_profile())
        audit_log(
            AuditAction.TALENT_SCORED.value,
            {"talent_id": talent_id, "job_id": job_id, "score": match.overall_score},
        )
        return SingleMatch(talent_id=str(talent.id), job_id=str(job.id), match=match)

    def job_matches_for_talent(
        self,
        talent_id: str,
        limit: Optional[int] = None,
    ) -> list[JobMatchSummary]:
        """
        Rank active jobs for a talent.

        Args:
            talent_id: Talent profile id
            limit: Maximum results (settings default when omitted)

        Raises:
            TalentNotFoundError: No such talent profile
        """
        limit = self.settings.default_job_limit if limit is None else limit
        talent = self._require_talent(talent_id)

        listings = self.jobs.get_active_jobs(limit=self.settings.candidate_pool_limit)
        if not listings:
            return []

        by_id = {str(listing.id): listing for listing in listings}
        employers = self.employers.get_many([l.employer_id for l in listings if l.employer_id])

        ranked = self.engine.get_best_job_matches(
            talent.to_match_profile(),
            [listing.to_match_profile() for listing in listings],
            limit,
        )

        summaries = []
        for entry in ranked:
            listing = by_id[entry.job.id]
            employer = employers.get(str(listing.employer_id))
            summaries.append(
                JobMatchSummary(
                    job_id=entry.job.id,
                    title=listing.title,
                    company_name=employer.company_name if employer else None,
                    logo_url=employer.logo_url if employer else None,
                    salary_min=listing.salary_min,
                    salary_max=listing.salary_max,
                    work_arrangement=listing.work_arrangement,
                    locations=listing.locations,
                    match_score=entry.match.overall_score,
                    match_category=entry.match.category,
                    match_summary=entry.match.summary,
                )
            )

        audit_log(
            AuditAction.JOBS_RANKED.value,
            {"talent_id": talent_id, "pool_size": len(listings), "returned": len(summaries)},
        )
        return summaries

    def talent_matches_for_job(
        self,
        job_id: str,
        user_id: str,
        limit: Optional[int] = None,
    ) -> list[TalentMatchSummary]:
        """
        Rank public talent for a job owned by the requesting employer.

        Args:
            job_id: Job listing id
            user_id: Authenticated user asking for the ranking
            limit: Maximum results (settings default when omitted)

        Raises:
            EmployerNotFoundError: The user has no employer profile
            JobAccessDeniedError: The job is missing or owned by someone else
        """
        limit = self.settings.default_talent_limit if limit is None else limit
        job = self._require_owned_job(job_id, user_id)
        job_profile = job.to_match_profile()

        pool = self.talents.get_public_pool(
            min_o1_score=job_profile.min_score * self.settings.talent_pool_score_ratio,
            limit=self.settings.candidate_pool_limit,
        )
        if not pool:
            return []

        by_id = {str(talent.id): talent for talent in pool}
        ranked = self.engine.get_best_talent_matches(
            job_profile,
            [talent.to_match_profile() for talent in pool],
            limit,
        )

        summaries = []
        for entry in ranked:
            talent = by_id[entry.talent.id]
            summaries.append(
                TalentMatchSummary(
                    talent_id=entry.talent.id,
                    candidate_id=talent.candidate_id,
                    o1_score=talent.o1_score,
                    current_job_title=talent.current_job_title,
                    city=talent.city,
                    state=talent.state,
                    visa_status=talent.visa_status,
                    criteria_met=talent.criteria_met,
                    match_score=entry.match.overall_score,
                    match_category=entry.match.category,
                    match_summary=entry.match.summary,
                    breakdown=entry.match.breakdown,
                )
            )

        audit_log(
            AuditAction.TALENT_RANKED.value,
            {
                "job_id": job_id,
                "user_id": user_id,
                "pool_size": len(pool),
                "ranked": [(s.talent_id, s.match_score) for s in summaries],
            },
        )
        return summaries


_match_service: Optional[MatchService] = None


def get_match_service() -> MatchService:
    """Get the match service singleton, wired to the MongoDB repositories."""
    global _match_service
    if _match_service is None:
        _match_service = MatchService(
            talent_repository=get_talent_repository(),
            job_repository=get_job_repository(),
            employer_repository=get_employer_repository(),
        )
    return _match_service
