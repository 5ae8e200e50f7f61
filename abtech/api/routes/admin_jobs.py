"""
Job board moderation (ADMIN / MODERATOR).

- /api/admin/jobs - list, create, PATCH and delete (`?id=`) jobs
- /api/admin/jobs/submissions - review public submissions (`op: approve | reject`)
- /api/admin/jobs/applications - list (`?jobId=`), set status, delete

Errors render under `error`.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query

from abtech.adapters.sqlite.catalog import SQLiteJobRepo
from abtech.api.deps import get_job_repo, require_editor
from abtech.api.schemas import (
    ApplicationListResponse,
    ApplicationStatusRequest,
    ApplicationWriteResponse,
    JobApplicationResponse,
    JobListResponse,
    JobResponse,
    JobSubmissionResponse,
    JobWriteRequest,
    JobWriteResponse,
    SubmissionListResponse,
    SubmissionReviewRequest,
    SubmissionReviewResponse,
    SuccessResponse,
)
from abtech.components.jobs import (
    CreateJobInput,
    DeleteInput,
    ListApplicationsInput,
    ReviewSubmissionInput,
    UpdateApplicationInput,
    UpdateJobInput,
    ValidationError as ComponentError,
    run_create_job,
    run_delete_application,
    run_delete_job,
    run_delete_submission,
    run_list_applications,
    run_list_jobs,
    run_list_submissions,
    run_review_submission,
    run_update_application,
    run_update_job,
)
from abtech.core.entities import SessionIdentity
from abtech.core.errors import InternalError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter()

editor = require_editor(key="error")


def raise_for(errors: list[ComponentError]) -> None:
    error = errors[0]
    if error.code == "NOT_FOUND":
        raise NotFoundError(error.message, key="error")
    raise ValidationError(error.message, key="error")


# --- Jobs ---


@router.get("", response_model=JobListResponse)
def list_jobs(
    _session: SessionIdentity = Depends(editor),
    repo: SQLiteJobRepo = Depends(get_job_repo),
) -> JobListResponse:
    try:
        jobs = run_list_jobs(repo)
    except Exception:
        logger.exception("Admin jobs GET error")
        raise InternalError(key="error") from None
    return JobListResponse(jobs=[JobResponse.from_entity(j) for j in jobs])


@router.post("", response_model=JobWriteResponse, status_code=201)
def create_job(
    body: JobWriteRequest,
    session: SessionIdentity = Depends(editor),
    repo: SQLiteJobRepo = Depends(get_job_repo),
) -> JobWriteResponse:
    inp = CreateJobInput(
        title=body.title,
        company=body.company,
        location=body.location,
        type=body.type,
        description=body.description,
        source=body.source,
        tags=body.tags,
        apply_url=body.apply_url,
        contact_email=body.contact_email,
        active=True if body.active is None else body.active,
    )
    try:
        result = run_create_job(inp, repo)
    except Exception:
        logger.exception("Admin jobs POST error")
        raise InternalError(key="error") from None
    if not result.success or result.job is None:
        raise_for(result.errors)
    logger.info("Job %s created by %s", result.job.id, session.user_id)
    return JobWriteResponse(job=JobResponse.from_entity(result.job))


@router.patch("", response_model=JobWriteResponse)
def update_job(
    body: JobWriteRequest,
    _session: SessionIdentity = Depends(editor),
    repo: SQLiteJobRepo = Depends(get_job_repo),
) -> JobWriteResponse:
    changes = body.model_dump(exclude_unset=True, exclude={"id"})
    try:
        result = run_update_job(UpdateJobInput(job_id=body.id, changes=changes), repo)
    except Exception:
        logger.exception("Admin jobs PATCH error")
        raise InternalError(key="error") from None
    if not result.success or result.job is None:
        raise_for(result.errors)
    return JobWriteResponse(job=JobResponse.from_entity(result.job))


@router.delete("", response_model=SuccessResponse)
def delete_job(
    id: str | None = Query(None),
    _session: SessionIdentity = Depends(editor),
    repo: SQLiteJobRepo = Depends(get_job_repo),
) -> SuccessResponse:
    try:
        result = run_delete_job(DeleteInput(id=id), repo)
    except Exception:
        logger.exception("Admin jobs DELETE error")
        raise InternalError(key="error") from None
    if not result.success:
        raise_for(result.errors)
    return SuccessResponse(success=True)


# --- Submissions ---


@router.get("/submissions", response_model=SubmissionListResponse)
def list_submissions(
    _session: SessionIdentity = Depends(editor),
    repo: SQLiteJobRepo = Depends(get_job_repo),
) -> SubmissionListResponse:
    try:
        submissions = run_list_submissions(repo)
    except Exception:
        logger.exception("Admin job submissions GET error")
        raise InternalError(key="error") from None
    return SubmissionListResponse(
        submissions=[JobSubmissionResponse.from_entity(s) for s in submissions]
    )


@router.patch("/submissions", response_model=SubmissionReviewResponse)
def review_submission(
    body: SubmissionReviewRequest,
    _session: SessionIdentity = Depends(editor),
    repo: SQLiteJobRepo = Depends(get_job_repo),
) -> SubmissionReviewResponse:
    try:
        result = run_review_submission(
            ReviewSubmissionInput(submission_id=body.id, op=body.op), repo
        )
    except Exception:
        logger.exception("Admin job submissions PATCH error")
        raise InternalError(key="error") from None
    if not result.success or result.submission is None:
        raise_for(result.errors)
    return SubmissionReviewResponse(
        success=True,
        submission=JobSubmissionResponse.from_entity(result.submission),
        job=JobResponse.from_entity(result.job) if result.job else None,
    )


@router.delete("/submissions", response_model=SuccessResponse)
def delete_submission(
    id: str | None = Query(None),
    _session: SessionIdentity = Depends(editor),
    repo: SQLiteJobRepo = Depends(get_job_repo),
) -> SuccessResponse:
    try:
        result = run_delete_submission(DeleteInput(id=id), repo)
    except Exception:
        logger.exception("Admin job submissions DELETE error")
        raise InternalError(key="error") from None
    if not result.success:
        raise_for(result.errors)
    return SuccessResponse(success=True)


# --- Applications ---


@router.get("/applications", response_model=ApplicationListResponse)
def list_applications(
    job_id: str | None = Query(None, alias="jobId"),
    _session: SessionIdentity = Depends(editor),
    repo: SQLiteJobRepo = Depends(get_job_repo),
) -> ApplicationListResponse:
    try:
        applications = run_list_applications(ListApplicationsInput(job_id=job_id), repo)
    except Exception:
        logger.exception("Admin job applications GET error")
        raise InternalError(key="error") from None
    return ApplicationListResponse(
        applications=[JobApplicationResponse.from_entity(a) for a in applications]
    )


@router.patch("/applications", response_model=ApplicationWriteResponse)
def update_application(
    body: ApplicationStatusRequest,
    _session: SessionIdentity = Depends(editor),
    repo: SQLiteJobRepo = Depends(get_job_repo),
) -> ApplicationWriteResponse:
    inp = UpdateApplicationInput(application_id=body.id, status=body.status)
    try:
        result = run_update_application(inp, repo)
    except Exception:
        logger.exception("Admin job applications PATCH error")
        raise InternalError(key="error") from None
    if not result.success or result.application is None:
        raise_for(result.errors)
    return ApplicationWriteResponse(
        application=JobApplicationResponse.from_entity(result.application)
    )


@router.delete("/applications", response_model=SuccessResponse)
def delete_application(
    id: str | None = Query(None),
    _session: SessionIdentity = Depends(editor),
    repo: SQLiteJobRepo = Depends(get_job_repo),
) -> SuccessResponse:
    try:
        result = run_delete_application(DeleteInput(id=id), repo)
    except Exception:
        logger.exception("Admin job applications DELETE error")
        raise InternalError(key="error") from None
    if not result.success:
        raise_for(result.errors)
    return SuccessResponse(success=True)
