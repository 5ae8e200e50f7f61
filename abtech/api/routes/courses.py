"""
Public course endpoints.

Listing and the view counter never fail the caller: errors are logged and an
empty / `success: false` body is returned instead.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends

from abtech.adapters.sqlite.catalog import SQLiteCourseRepo
from abtech.api.deps import get_course_repo
from abtech.api.schemas import (
    CourseDetail,
    CourseDetailResponse,
    CourseListResponse,
    CourseSummaryResponse,
)
from abtech.components.courses import (
    GetCourseInput,
    ListCoursesInput,
    RecordViewInput,
    run_get,
    run_list,
    run_record_view,
)
from abtech.core.errors import AppError, NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=CourseListResponse)
def list_courses(repo: SQLiteCourseRepo = Depends(get_course_repo)) -> CourseListResponse:
    """Published courses, newest first."""
    try:
        result = run_list(ListCoursesInput(), repo)
    except Exception:
        logger.exception("List courses error")
        return CourseListResponse(courses=[])
    return CourseListResponse(
        courses=[CourseSummaryResponse.from_summary(s) for s in result.courses]
    )


@router.get("/{slug}", response_model=CourseDetailResponse)
def get_course(
    slug: str, repo: SQLiteCourseRepo = Depends(get_course_repo)
) -> CourseDetailResponse:
    try:
        result = run_get(GetCourseInput(slug=slug), repo)
    except Exception:
        logger.exception("Course detail error for %s", slug)
        raise AppError("Failed to load course", key="error") from None

    if not result.success or result.course is None:
        raise NotFoundError(key="error")
    return CourseDetailResponse(course=CourseDetail.from_entity(result.course))


@router.post("/{slug}/view")
def record_course_view(
    slug: str,
    repo: SQLiteCourseRepo = Depends(get_course_repo),
) -> dict[str, Any]:
    try:
        result = run_record_view(RecordViewInput(slug=slug), repo)
    except Exception:
        logger.exception("Course view increment failed for %s", slug)
        return {"success": False}
    if not result.success:
        return {"success": False}
    return {"id": str(result.id), "views": result.views}
