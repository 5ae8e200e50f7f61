"""
Job board component.

Search splits results by source (AB TECH postings vs. external listings).
Submissions go to a moderation table, never straight onto the board; an
approved submission becomes an EXTERNAL job. Applications attach to active
jobs only.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from typing import Any
from uuid import UUID

from abtech.components.jobs.models import (
    ApplicationOutput,
    ApplyInput,
    ApplyOutput,
    CreateJobInput,
    DeleteInput,
    DeleteOutput,
    JobOutput,
    ListApplicationsInput,
    ReviewSubmissionInput,
    ReviewSubmissionOutput,
    SearchJobsInput,
    SearchJobsOutput,
    SubmitJobInput,
    SubmitJobOutput,
    UpdateApplicationInput,
    UpdateJobInput,
    ValidationError,
)
from abtech.components.jobs.ports import JobRepoPort
from abtech.core.entities import (
    Job,
    JobApplication,
    JobSource,
    JobSubmission,
    ReviewStatus,
    new_id,
    utc_now,
)
from abtech.core.spam import is_spam

logger = logging.getLogger(__name__)

# Checked in this order; only the first missing field is reported.
REQUIRED_FIELDS: list[tuple[str, str]] = [
    ("title", "Title"),
    ("company", "Company"),
    ("location", "Location"),
    ("type", "Type"),
    ("description", "Description"),
    ("apply_url", "Apply URL"),
    ("contact_email", "Contact Email"),
]

# A posted job needs only the descriptive fields.
JOB_FIELDS = REQUIRED_FIELDS[:5]

EDITABLE_JOB_FIELDS = frozenset(
    {
        "title",
        "company",
        "location",
        "type",
        "description",
        "source",
        "tags",
        "apply_url",
        "contact_email",
        "active",
    }
)
NULLABLE_JOB_FIELDS = frozenset({"tags", "apply_url", "contact_email"})

SPAM = ValidationError("SPAM", "Spam detected", "honeypot")
CAPTCHA = ValidationError("CAPTCHA", "Captcha verification failed", "captchaToken")
MISSING_ID = ValidationError("MISSING_ID", "Missing id", "id")
NOT_FOUND = ValidationError("NOT_FOUND", "Not found")
JOB_NOT_FOUND = ValidationError("JOB_NOT_FOUND", "Job not found")


def parse_id(value: Any) -> UUID | None:
    try:
        return UUID(str(value))
    except ValueError:
        return None


def matches_query(job: Job, q: str) -> bool:
    haystack = " ".join(
        [job.title, job.company, job.location, job.description, job.tags or ""]
    ).lower()
    return q in haystack


def missing_fields(inp: SubmitJobInput) -> list[ValidationError]:
    errors = []
    for attr, label in REQUIRED_FIELDS:
        value = getattr(inp, attr)
        if not value or not str(value).strip():
            errors.append(ValidationError("REQUIRED", f"{label} is required", attr))
    return errors


def run_search(inp: SearchJobsInput, repo: JobRepoPort) -> SearchJobsOutput:
    jobs = repo.list_active(type=inp.type or None, location=inp.location or None)

    q = (inp.q or "").strip().lower()
    if q:
        jobs = [j for j in jobs if matches_query(j, q)]

    return SearchJobsOutput(
        abtech=[j for j in jobs if j.source == JobSource.ABTECH.value],
        external=[j for j in jobs if j.source == JobSource.EXTERNAL.value],
    )


def run_submit(inp: SubmitJobInput, repo: JobRepoPort) -> SubmitJobOutput:
    if is_spam(inp.honeypot):
        return SubmitJobOutput(success=False, errors=[SPAM])
    if not inp.captcha_passed:
        return SubmitJobOutput(success=False, errors=[CAPTCHA])

    errors = missing_fields(inp)
    if errors:
        return SubmitJobOutput(success=False, errors=errors[:1])

    submission = JobSubmission(
        id=new_id(),
        title=inp.title or "",
        company=inp.company or "",
        location=inp.location or "",
        type=inp.type or "",
        description=inp.description or "",
        apply_url=inp.apply_url or "",
        contact_email=inp.contact_email or "",
        tags=inp.tags or None,
        compensation_type=inp.compensation_type or None,
        salary_min=inp.salary_min,
        salary_max=inp.salary_max,
        currency=inp.currency or None,
        remote_type=inp.remote_type or None,
        experience_level=inp.experience_level or None,
        created_at=utc_now(),
    )
    return SubmitJobOutput(success=True, submission=repo.save_submission(submission))


def run_apply(inp: ApplyInput, repo: JobRepoPort) -> ApplyOutput:
    """Checked in order: job, honeypot, captcha, name, email."""
    job_id = parse_id(inp.job_id)
    job = repo.get_by_id(job_id) if job_id else None
    if job is None or not job.active:
        return ApplyOutput(success=False, errors=[JOB_NOT_FOUND])
    if is_spam(inp.honeypot):
        return ApplyOutput(success=False, errors=[SPAM])
    if not inp.captcha_passed:
        return ApplyOutput(success=False, errors=[CAPTCHA])
    for attr, label in (("name", "Name"), ("email", "Email")):
        value = getattr(inp, attr)
        if not value or not str(value).strip():
            return ApplyOutput(
                success=False,
                errors=[ValidationError("REQUIRED", f"{label} is required", attr)],
            )

    application = JobApplication(
        id=new_id(),
        job_id=job.id,
        name=inp.name or "",
        email=inp.email or "",
        phone=inp.phone or None,
        linkedin=inp.linkedin or None,
        portfolio=inp.portfolio or None,
        resume_url=inp.resume_url or None,
        cover_letter=inp.cover_letter or None,
        created_at=utc_now(),
    )
    return ApplyOutput(success=True, application=repo.save_application(application))


# --- Moderation ---


def job_errors(job: Job) -> list[ValidationError]:
    errors = []
    for attr, label in JOB_FIELDS:
        if not str(getattr(job, attr) or "").strip():
            errors.append(ValidationError("REQUIRED", f"{label} is required", attr))
    if job.source not in {s.value for s in JobSource}:
        errors.append(ValidationError("INVALID_SOURCE", "Invalid source", "source"))
    return errors


def run_list_jobs(repo: JobRepoPort) -> list[Job]:
    return repo.list_all()


def run_create_job(inp: CreateJobInput, repo: JobRepoPort) -> JobOutput:
    job = Job(
        id=new_id(),
        title=inp.title or "",
        company=inp.company or "",
        location=inp.location or "",
        type=inp.type or "",
        description=inp.description or "",
        source=inp.source or JobSource.EXTERNAL.value,
        tags=inp.tags or None,
        apply_url=inp.apply_url or None,
        contact_email=inp.contact_email or None,
        active=inp.active,
        posted_at=utc_now(),
    )
    errors = job_errors(job)
    if errors:
        return JobOutput(success=False, errors=errors[:1])
    return JobOutput(success=True, job=repo.save(job))


def run_update_job(inp: UpdateJobInput, repo: JobRepoPort) -> JobOutput:
    if not inp.job_id:
        return JobOutput(success=False, errors=[MISSING_ID])
    job_id = parse_id(inp.job_id)
    job = repo.get_by_id(job_id) if job_id else None
    if job is None:
        return JobOutput(success=False, errors=[NOT_FOUND])

    changes = {
        k: v
        for k, v in inp.changes.items()
        if k in EDITABLE_JOB_FIELDS and (v is not None or k in NULLABLE_JOB_FIELDS)
    }
    updated = replace(job, **changes)
    errors = job_errors(updated)
    if errors:
        return JobOutput(success=False, errors=errors[:1])
    return JobOutput(success=True, job=repo.save(updated))


def run_list_submissions(repo: JobRepoPort) -> list[JobSubmission]:
    return repo.list_submissions()


def run_review_submission(inp: ReviewSubmissionInput, repo: JobRepoPort) -> ReviewSubmissionOutput:
    """
    `approve` posts the submission as an active EXTERNAL job; `reject` only
    marks it. An approved submission cannot be approved again.
    """
    if not inp.submission_id:
        return ReviewSubmissionOutput(success=False, errors=[MISSING_ID])
    submission_id = parse_id(inp.submission_id)
    submission = repo.get_submission(submission_id) if submission_id else None
    if submission is None:
        return ReviewSubmissionOutput(success=False, errors=[NOT_FOUND])

    now = utc_now()
    if inp.op == "approve":
        if submission.status == ReviewStatus.APPROVED.value:
            return ReviewSubmissionOutput(
                success=False,
                errors=[ValidationError("ALREADY_APPROVED", "Already approved", "op")],
            )
        job = repo.save(
            Job(
                id=new_id(),
                title=submission.title,
                company=submission.company,
                location=submission.location,
                type=submission.type,
                description=submission.description,
                source=JobSource.EXTERNAL.value,
                tags=submission.tags or None,
                apply_url=submission.apply_url,
                contact_email=submission.contact_email,
                active=True,
                posted_at=now,
            )
        )
        reviewed = repo.save_submission(
            replace(submission, status=ReviewStatus.APPROVED.value, reviewed_at=now)
        )
        logger.info("Job submission %s approved as job %s", submission.id, job.id)
        return ReviewSubmissionOutput(success=True, submission=reviewed, job=job)
    elif inp.op == "reject":
        reviewed = repo.save_submission(
            replace(submission, status=ReviewStatus.REJECTED.value, reviewed_at=now)
        )
        logger.info("Job submission %s rejected", submission.id)
        return ReviewSubmissionOutput(success=True, submission=reviewed)
    else:
        return ReviewSubmissionOutput(
            success=False, errors=[ValidationError("INVALID_OP", "Invalid op", "op")]
        )


def run_list_applications(inp: ListApplicationsInput, repo: JobRepoPort) -> list[JobApplication]:
    """An unparseable `job_id` matches nothing."""
    if not inp.job_id:
        return repo.list_applications()
    job_id = parse_id(inp.job_id)
    return repo.list_applications(job_id) if job_id else []


def run_update_application(inp: UpdateApplicationInput, repo: JobRepoPort) -> ApplicationOutput:
    if not inp.application_id or not inp.status:
        return ApplicationOutput(
            success=False,
            errors=[ValidationError("MISSING_ID", "Missing id or status")],
        )
    status = str(inp.status).upper()
    if status not in {s.value for s in ReviewStatus}:
        return ApplicationOutput(
            success=False,
            errors=[ValidationError("INVALID_STATUS", "Invalid status", "status")],
        )
    application_id = parse_id(inp.application_id)
    application = repo.get_application(application_id) if application_id else None
    if application is None:
        return ApplicationOutput(success=False, errors=[NOT_FOUND])
    return ApplicationOutput(
        success=True,
        application=repo.save_application(replace(application, status=status)),
    )


def _delete(inp: DeleteInput, remove: Callable[[UUID], bool]) -> DeleteOutput:
    if not inp.id:
        return DeleteOutput(success=False, errors=[MISSING_ID])
    target = parse_id(inp.id)
    if target is None or not remove(target):
        return DeleteOutput(success=False, errors=[NOT_FOUND])
    return DeleteOutput(success=True)


def run_delete_job(inp: DeleteInput, repo: JobRepoPort) -> DeleteOutput:
    return _delete(inp, repo.delete)


def run_delete_submission(inp: DeleteInput, repo: JobRepoPort) -> DeleteOutput:
    return _delete(inp, repo.delete_submission)


def run_delete_application(inp: DeleteInput, repo: JobRepoPort) -> DeleteOutput:
    return _delete(inp, repo.delete_application)


def run(
    inp: SearchJobsInput
    | SubmitJobInput
    | ApplyInput
    | CreateJobInput
    | UpdateJobInput
    | ReviewSubmissionInput
    | UpdateApplicationInput,
    *,
    repo: JobRepoPort,
) -> (
    SearchJobsOutput
    | SubmitJobOutput
    | ApplyOutput
    | JobOutput
    | ReviewSubmissionOutput
    | ApplicationOutput
):
    if isinstance(inp, SearchJobsInput):
        return run_search(inp, repo)
    elif isinstance(inp, SubmitJobInput):
        return run_submit(inp, repo)
    elif isinstance(inp, ApplyInput):
        return run_apply(inp, repo)
    elif isinstance(inp, CreateJobInput):
        return run_create_job(inp, repo)
    elif isinstance(inp, UpdateJobInput):
        return run_update_job(inp, repo)
    elif isinstance(inp, ReviewSubmissionInput):
        return run_review_submission(inp, repo)
    elif isinstance(inp, UpdateApplicationInput):
        return run_update_application(inp, repo)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
