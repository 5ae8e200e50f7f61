"""
Job board endpoints.

- GET /api/jobs - Active jobs split into AB TECH and external listings
- POST /api/jobs/submit - Public job submission behind honeypot + CAPTCHA
- POST /api/jobs/{job_id}/apply - Application to an active job, same checks
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Request

from abtech.adapters.captcha import TurnstileVerifier
from abtech.adapters.sqlite.catalog import SQLiteJobRepo
from abtech.api.deps import get_captcha_verifier, get_job_repo
from abtech.api.schemas import (
    JobApplicationResponse,
    JobApplyRequest,
    JobApplyResponse,
    JobResponse,
    JobSearchResponse,
    JobSubmissionResponse,
    JobSubmitRequest,
    JobSubmitResponse,
)
from abtech.components.jobs import (
    ApplyInput,
    SearchJobsInput,
    SubmitJobInput,
    run_apply,
    run_search,
    run_submit,
)
from abtech.core.errors import InternalError, NotFoundError, ValidationError
from abtech.core.spam import is_spam

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=JobSearchResponse)
def search_jobs(
    q: str | None = Query(None),
    type: str | None = Query(None),
    location: str | None = Query(None),
    repo: SQLiteJobRepo = Depends(get_job_repo),
) -> JobSearchResponse:
    try:
        result = run_search(SearchJobsInput(q=q, type=type, location=location), repo)
    except Exception:
        logger.exception("Jobs search error")
        return JobSearchResponse(abtech=[], external=[])
    return JobSearchResponse(
        abtech=[JobResponse.from_entity(j) for j in result.abtech],
        external=[JobResponse.from_entity(j) for j in result.external],
    )


@router.post("/submit", response_model=JobSubmitResponse)
async def submit_job(
    body: JobSubmitRequest,
    request: Request,
    repo: SQLiteJobRepo = Depends(get_job_repo),
    captcha: TurnstileVerifier = Depends(get_captcha_verifier),
) -> JobSubmitResponse:
    # Skip the provider round trip for obvious bots.
    captcha_passed = False
    if not is_spam(body.honeypot):
        remote_ip = request.headers.get("x-forwarded-for")
        captcha_passed = await captcha.verify(body.captcha_token, remote_ip)

    inp = SubmitJobInput(
        title=body.title,
        company=body.company,
        location=body.location,
        type=body.type,
        description=body.description,
        apply_url=body.apply_url,
        contact_email=body.contact_email,
        tags=body.tags,
        compensation_type=body.compensation_type,
        salary_min=body.salary_min,
        salary_max=body.salary_max,
        currency=body.currency,
        remote_type=body.remote_type,
        experience_level=body.experience_level,
        honeypot=body.honeypot,
        captcha_passed=captcha_passed,
    )
    try:
        result = run_submit(inp, repo)
    except Exception:
        logger.exception("Job submit error")
        raise ValidationError("Bad Request", key="error") from None

    if not result.success or result.submission is None:
        raise ValidationError(result.errors[0].message, key="error")
    return JobSubmitResponse(
        success=True,
        submission=JobSubmissionResponse.from_entity(result.submission),
    )


@router.post("/{job_id}/apply", response_model=JobApplyResponse, status_code=201)
async def apply_to_job(
    job_id: str,
    body: JobApplyRequest,
    request: Request,
    repo: SQLiteJobRepo = Depends(get_job_repo),
    captcha: TurnstileVerifier = Depends(get_captcha_verifier),
) -> JobApplyResponse:
    captcha_passed = False
    if not is_spam(body.honeypot):
        remote_ip = request.headers.get("x-forwarded-for")
        captcha_passed = await captcha.verify(body.captcha_token, remote_ip)

    inp = ApplyInput(
        job_id=job_id,
        name=body.name,
        email=body.email,
        phone=body.phone,
        linkedin=body.linkedin,
        portfolio=body.portfolio,
        resume_url=body.resume_url,
        cover_letter=body.cover_letter,
        honeypot=body.honeypot,
        captcha_passed=captcha_passed,
    )
    try:
        result = run_apply(inp, repo)
    except Exception:
        logger.exception("Job apply error")
        raise InternalError(key="error") from None

    if not result.success or result.application is None:
        error = result.errors[0]
        if error.code == "JOB_NOT_FOUND":
            raise NotFoundError(error.message, key="error")
        raise ValidationError(error.message, key="error")
    logger.info("Application %s received for job %s", result.application.id, job_id)
    return JobApplyResponse(
        success=True,
        application=JobApplicationResponse.from_entity(result.application),
    )
