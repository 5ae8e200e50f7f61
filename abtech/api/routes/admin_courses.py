"""
Course editor (ADMIN only).

- /api/admin/courses - list every course, create, PATCH and delete (`?id=`)
- /api/admin/courses/{course_id}/modules - add, edit or reorder, delete (`?id=`)

Errors render under `error`. Field problems answer 400 with
`details.fieldErrors`, slug clashes 409.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query

from abtech.adapters.sqlite.catalog import SQLiteCourseRepo
from abtech.api.deps import get_course_repo, require_admin
from abtech.api.schemas import (
    CourseDetail,
    CourseDetailResponse,
    CourseListAdminResponse,
    CourseWriteRequest,
    ModuleResponse,
    ModuleWriteRequest,
    ModuleWriteResponse,
    SuccessResponse,
)
from abtech.components.courses import (
    AdminListCoursesInput,
    CreateCourseInput,
    CreateModuleInput,
    DeleteCourseInput,
    DeleteModuleInput,
    ReorderModulesInput,
    UpdateCourseInput,
    UpdateModuleInput,
    run_admin_list,
    run_create_course,
    run_create_module,
    run_delete_course,
    run_delete_module,
    run_reorder_modules,
    run_update_course,
    run_update_module,
)
from abtech.components.courses.models import ValidationError as ComponentError
from abtech.core.entities import SessionIdentity
from abtech.core.errors import DuplicateError, InternalError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter()

admin = require_admin(key="error")


def raise_for(errors: list[ComponentError]) -> None:
    invalid = [e for e in errors if e.code == "INVALID"]
    if invalid:
        field_errors: dict[str, list[str]] = {}
        for e in invalid:
            field_errors.setdefault(e.field or "", []).append(e.message)
        raise ValidationError(
            "Invalid data",
            key="error",
            extra={"details": {"fieldErrors": field_errors, "formErrors": []}},
        )
    error = errors[0]
    if error.code in ("SLUG_EXISTS", "SLUG_TAKEN"):
        raise DuplicateError(error.message, key="error")
    if error.code == "NOT_FOUND":
        raise NotFoundError(error.message, key="error")
    raise ValidationError(error.message, key="error")


# --- Courses ---


@router.get("", response_model=CourseListAdminResponse)
def list_courses(
    _session: SessionIdentity = Depends(admin),
    repo: SQLiteCourseRepo = Depends(get_course_repo),
) -> CourseListAdminResponse:
    try:
        result = run_admin_list(AdminListCoursesInput(), repo)
    except Exception:
        logger.exception("Admin courses GET error")
        raise InternalError(key="error") from None
    return CourseListAdminResponse(courses=[CourseDetail.from_entity(c) for c in result.courses])


@router.post("", response_model=CourseDetailResponse, status_code=201)
def create_course(
    body: CourseWriteRequest,
    _session: SessionIdentity = Depends(admin),
    repo: SQLiteCourseRepo = Depends(get_course_repo),
) -> CourseDetailResponse:
    inp = CreateCourseInput(
        title=body.title,
        slug=body.slug,
        description=body.description,
        cover_image=body.cover_image,
        level=body.level,
        status=body.status,
    )
    try:
        result = run_create_course(inp, repo)
    except Exception:
        logger.exception("Admin courses POST error")
        raise InternalError(key="error") from None
    if not result.success or result.course is None:
        raise_for(result.errors)
    return CourseDetailResponse(course=CourseDetail.from_entity(result.course))


@router.patch("", response_model=CourseDetailResponse)
def update_course(
    body: CourseWriteRequest,
    _session: SessionIdentity = Depends(admin),
    repo: SQLiteCourseRepo = Depends(get_course_repo),
) -> CourseDetailResponse:
    changes = body.model_dump(exclude_unset=True, exclude={"id"})
    try:
        result = run_update_course(UpdateCourseInput(course_id=body.id, changes=changes), repo)
    except Exception:
        logger.exception("Admin courses PATCH error")
        raise InternalError(key="error") from None
    if not result.success or result.course is None:
        raise_for(result.errors)
    return CourseDetailResponse(course=CourseDetail.from_entity(result.course))


@router.delete("", response_model=SuccessResponse)
def delete_course(
    id: str | None = Query(None),
    _session: SessionIdentity = Depends(admin),
    repo: SQLiteCourseRepo = Depends(get_course_repo),
) -> SuccessResponse:
    try:
        result = run_delete_course(DeleteCourseInput(course_id=id), repo)
    except Exception:
        logger.exception("Admin courses DELETE error")
        raise InternalError(key="error") from None
    if not result.success:
        raise_for(result.errors)
    return SuccessResponse(success=True)


# --- Modules ---


@router.post("/{course_id}/modules", response_model=ModuleWriteResponse, status_code=201)
def create_module(
    course_id: str,
    body: ModuleWriteRequest,
    _session: SessionIdentity = Depends(admin),
    repo: SQLiteCourseRepo = Depends(get_course_repo),
) -> ModuleWriteResponse:
    inp = CreateModuleInput(course_id=course_id, title=body.title, description=body.description)
    try:
        result = run_create_module(inp, repo)
    except Exception:
        logger.exception("Admin course modules POST error")
        raise InternalError(key="error") from None
    if not result.success or result.module is None:
        raise_for(result.errors)
    return ModuleWriteResponse(module=ModuleResponse.from_entity(result.module))


@router.patch("/{course_id}/modules", response_model=ModuleWriteResponse | SuccessResponse)
def update_module(
    course_id: str,
    body: ModuleWriteRequest,
    _session: SessionIdentity = Depends(admin),
    repo: SQLiteCourseRepo = Depends(get_course_repo),
) -> ModuleWriteResponse | SuccessResponse:
    """A `reorder` list moves several modules at once; otherwise edits module `id`."""
    try:
        if body.reorder is not None:
            run_reorder_modules(ReorderModulesInput(course_id=course_id, items=body.reorder), repo)
            return SuccessResponse(success=True)
        changes = body.model_dump(exclude_unset=True, exclude={"id", "reorder"})
        result = run_update_module(
            UpdateModuleInput(course_id=course_id, module_id=body.id, changes=changes), repo
        )
    except Exception:
        logger.exception("Admin course modules PATCH error")
        raise InternalError(key="error") from None
    if not result.success or result.module is None:
        raise_for(result.errors)
    return ModuleWriteResponse(module=ModuleResponse.from_entity(result.module))


@router.delete("/{course_id}/modules", response_model=SuccessResponse)
def delete_module(
    course_id: str,
    id: str | None = Query(None),
    _session: SessionIdentity = Depends(admin),
    repo: SQLiteCourseRepo = Depends(get_course_repo),
) -> SuccessResponse:
    try:
        result = run_delete_module(DeleteModuleInput(course_id=course_id, module_id=id), repo)
    except Exception:
        logger.exception("Admin course modules DELETE error")
        raise InternalError(key="error") from None
    if not result.success:
        raise_for(result.errors)
    return SuccessResponse(success=True)
