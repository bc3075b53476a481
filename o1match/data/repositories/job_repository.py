"""
Job listing repository for O1-Match.
"""

from typing import Optional

from o1match.data.models.job import JobListing
from o1match.utils.constants import JOB_COLLECTION, JobStatus

from .base import BaseRepository


class JobRepository(BaseRepository[JobListing]):
    """Repository for job listing documents."""

    @property
    def collection_name(self) -> str:
        return JOB_COLLECTION

    @property
    def model_class(self) -> type[JobListing]:
        return JobListing

    def get_by_status(
        self,
        status: JobStatus,
        skip: int = 0,
        limit: int = 100,
    ) -> list[JobListing]:
        """Get jobs by status, newest first."""
        return self.find({"status": status.value}, skip=skip, limit=limit)

    def get_active_jobs(self, limit: int = 100) -> list[JobListing]:
        """Get active job listings eligible for ranking."""
        return self.get_by_status(JobStatus.ACTIVE, limit=limit)


_job_repository: Optional[JobRepository] = None


def get_job_repository() -> JobRepository:
    """Get the job repository singleton instance."""
    global _job_repository
    if _job_repository is None:
        _job_repository = JobRepository()
    return _job_repository
