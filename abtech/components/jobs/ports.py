"""Job board component ports."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from abtech.core.entities import Job, JobApplication, JobSubmission


class JobRepoPort(Protocol):
    def list_active(self, type: str | None = None, location: str | None = None) -> list[Job]:
        """
        Active jobs, newest first. `type` matches exactly; `location` is a
        case-insensitive substring.
        """
        ...

    def list_all(self) -> list[Job]:
        """Every job, active or not, newest first."""
        ...

    def get_by_id(self, job_id: UUID) -> Job | None:
        ...

    def save(self, job: Job) -> Job:
        ...

    def delete(self, job_id: UUID) -> bool:
        ...

    def save_submission(self, submission: JobSubmission) -> JobSubmission:
        """Insert, or update the review status of an existing submission."""
        ...

    def get_submission(self, submission_id: UUID) -> JobSubmission | None:
        ...

    def list_submissions(self) -> list[JobSubmission]:
        ...

    def delete_submission(self, submission_id: UUID) -> bool:
        ...

    def save_application(self, application: JobApplication) -> JobApplication:
        """Insert, or update the status of an existing application."""
        ...

    def get_application(self, application_id: UUID) -> JobApplication | None:
        ...

    def list_applications(self, job_id: UUID | None = None) -> list[JobApplication]:
        ...

    def delete_application(self, application_id: UUID) -> bool:
        ...
