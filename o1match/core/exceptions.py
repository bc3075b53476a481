"""
Errors raised by the match service.

The match engine itself never raises; these signal lookup and
authorization failures around it.
"""


class MatchServiceError(Exception):
    """Base class for match service failures."""


class TalentNotFoundError(MatchServiceError):
    """No talent profile with the requested id."""

    def __init__(self, talent_id: str):
        super().__init__(f"Talent profile not found: {talent_id}")
        self.talent_id = talent_id


class JobNotFoundError(MatchServiceError):
    """No job listing with the requested id."""

    def __init__(self, job_id: str):
        super().__init__(f"Job listing not found: {job_id}")
        self.job_id = job_id


class EmployerNotFoundError(MatchServiceError):
    """The requesting user has no employer profile."""

    def __init__(self, user_id: str):
        super().__init__(f"Employer profile not found for user: {user_id}")
        self.user_id = user_id


class JobAccessDeniedError(MatchServiceError):
    """The job does not exist or belongs to another employer."""

    def __init__(self, job_id: str):
        super().__init__(f"Job not found or unauthorized: {job_id}")
        self.job_id = job_id
