"""Job board component models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from abtech.core.entities import Job, JobApplication, JobSubmission


@dataclass(frozen=True)
class SearchJobsInput:
    q: str | None = None
    type: str | None = None
    location: str | None = None


@dataclass(frozen=True)
class SubmitJobInput:
    """
    Public job submission. `captcha_passed` is decided by the caller, which
    owns the provider round-trip.
    """

    title: str | None = None
    company: str | None = None
    location: str | None = None
    type: str | None = None
    description: str | None = None
    apply_url: str | None = None
    contact_email: str | None = None
    tags: str | None = None
    compensation_type: str | None = None
    salary_min: int | None = None
    salary_max: int | None = None
    currency: str | None = None
    remote_type: str | None = None
    experience_level: str | None = None
    honeypot: Any = None
    captcha_passed: bool = False


@dataclass(frozen=True)
class ValidationError:
    code: str
    message: str
    field: str | None = None


@dataclass(frozen=True)
class SearchJobsOutput:
    abtech: list[Job]
    external: list[Job]


@dataclass(frozen=True)
class SubmitJobOutput:
    success: bool
    submission: JobSubmission | None = None
    errors: list[ValidationError] = field(default_factory=list)


@dataclass(frozen=True)
class ApplyInput:
    """Application to an active job. `captcha_passed` is decided by the caller."""

    job_id: str
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    linkedin: str | None = None
    portfolio: str | None = None
    resume_url: str | None = None
    cover_letter: str | None = None
    honeypot: Any = None
    captcha_passed: bool = False


@dataclass(frozen=True)
class ApplyOutput:
    success: bool
    application: JobApplication | None = None
    errors: list[ValidationError] = field(default_factory=list)


# --- Moderation (ADMIN / MODERATOR) ---


@dataclass(frozen=True)
class CreateJobInput:
    title: str | None = None
    company: str | None = None
    location: str | None = None
    type: str | None = None
    description: str | None = None
    source: str | None = None
    tags: str | None = None
    apply_url: str | None = None
    contact_email: str | None = None
    active: bool = True


@dataclass(frozen=True)
class UpdateJobInput:
    """`changes` holds only the fields the caller sent."""

    job_id: Any
    changes: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class JobOutput:
    success: bool
    job: Job | None = None
    errors: list[ValidationError] = field(default_factory=list)


@dataclass(frozen=True)
class ReviewSubmissionInput:
    submission_id: Any
    op: str | None = None  # approve | reject


@dataclass(frozen=True)
class ReviewSubmissionOutput:
    success: bool
    submission: JobSubmission | None = None
    job: Job | None = None  # set on approve
    errors: list[ValidationError] = field(default_factory=list)


@dataclass(frozen=True)
class ListApplicationsInput:
    job_id: str | None = None


@dataclass(frozen=True)
class UpdateApplicationInput:
    application_id: Any
    status: Any = None


@dataclass(frozen=True)
class ApplicationOutput:
    success: bool
    application: JobApplication | None = None
    errors: list[ValidationError] = field(default_factory=list)


@dataclass(frozen=True)
class DeleteInput:
    """Delete a job, submission or application by id."""

    id: Any


@dataclass(frozen=True)
class DeleteOutput:
    success: bool
    errors: list[ValidationError] = field(default_factory=list)
