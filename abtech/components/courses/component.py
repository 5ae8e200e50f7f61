"""
Course component.

Public course catalog: listing summaries, detail with modules and a view
counter. Admins list every course, edit course rows and manage modules.
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Any
from urllib.parse import urlparse
from uuid import UUID

from abtech.components.courses.models import (
    AdminListCoursesInput,
    AdminListCoursesOutput,
    CourseOutput,
    CourseSummary,
    CreateCourseInput,
    CreateModuleInput,
    DeleteCourseInput,
    DeleteModuleInput,
    GetCourseInput,
    GetCourseOutput,
    ListCoursesInput,
    ListCoursesOutput,
    ModuleOutput,
    RecordViewInput,
    RecordViewOutput,
    ReorderModulesInput,
    UpdateCourseInput,
    UpdateModuleInput,
    ValidationError,
)
from abtech.components.courses.ports import CourseAdminRepoPort, CourseRepoPort
from abtech.core.entities import Course, CourseModule, new_id

logger = logging.getLogger(__name__)

PREVIEW_MODULE_TITLES = 2
EDITABLE_COURSE_FIELDS = ("title", "slug", "description", "cover_image", "level", "status")


def summarize(course: Course) -> CourseSummary:
    return CourseSummary(
        id=course.id,
        title=course.title,
        slug=course.slug,
        description=course.description,
        cover_image=course.cover_image,
        level=course.level,
        views=course.views,
        created_at=course.created_at,
        module_count=len(course.modules),
        asset_count=sum(len(m.assets) for m in course.modules),
        module_titles=[m.title for m in course.modules[:PREVIEW_MODULE_TITLES]],
    )


def run_list(inp: ListCoursesInput, repo: CourseRepoPort) -> ListCoursesOutput:
    return ListCoursesOutput(courses=[summarize(c) for c in repo.list_published()])


def run_get(inp: GetCourseInput, repo: CourseRepoPort) -> GetCourseOutput:
    course = repo.get_by_slug(inp.slug)
    # Drafts are indistinguishable from missing courses.
    if course is None or not course.is_public:
        return GetCourseOutput(
            success=False,
            errors=[ValidationError("NOT_FOUND", "Not found", "slug")],
        )
    return GetCourseOutput(success=True, course=course)


def run_record_view(inp: RecordViewInput, repo: CourseRepoPort) -> RecordViewOutput:
    result = repo.increment_views(inp.slug)
    if result is None:
        return RecordViewOutput(success=False)
    course_id, views = result
    return RecordViewOutput(success=True, id=course_id, views=views)


# --- Admin ---

LEVELS = ("BEGINNER", "INTERMEDIATE", "ADVANCED")
STATUSES = ("DRAFT", "PUBLISHED", "ARCHIVED")
SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")
MIN_TITLE = 2

MISSING_ID = ValidationError("MISSING_ID", "Missing id", "id")
NOT_FOUND = ValidationError("NOT_FOUND", "Not found")
SLUG_EXISTS = ValidationError("SLUG_EXISTS", "Slug already exists", "slug")
SLUG_TAKEN = ValidationError("SLUG_TAKEN", "Slug already taken", "slug")


def _invalid(field_name: str, message: str) -> ValidationError:
    return ValidationError("INVALID", message, field_name)


def _text_error(field_name: str, value: Any, min_length: int = 0) -> ValidationError | None:
    if not isinstance(value, str):
        return _invalid(field_name, "Expected string")
    if len(value) < min_length:
        return _invalid(field_name, f"Must be at least {min_length} characters")
    return None


def _is_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def course_field_errors(values: dict[str, Any]) -> list[ValidationError]:
    """Check each supplied course field; absent keys are not checked."""
    errors: list[ValidationError] = []
    for name, min_length in (("title", MIN_TITLE), ("slug", MIN_TITLE)):
        if name in values:
            error = _text_error(name, values[name], min_length)
            if error:
                errors.append(error)
    slug = values.get("slug")
    if isinstance(slug, str) and len(slug) >= MIN_TITLE and not SLUG_PATTERN.match(slug):
        errors.append(_invalid("slug", "Use lowercase letters, digits and hyphens"))

    if values.get("description") is not None:
        error = _text_error("description", values["description"])
        if error:
            errors.append(error)
    cover = values.get("cover_image")
    if cover is not None and not (isinstance(cover, str) and _is_url(cover)):
        errors.append(_invalid("coverImage", "Invalid url"))

    for name, allowed in (("level", LEVELS), ("status", STATUSES)):
        if name in values and values[name] not in allowed:
            errors.append(_invalid(name, f"Expected one of {', '.join(allowed)}"))
    return errors


def run_admin_list(inp: AdminListCoursesInput, repo: CourseAdminRepoPort) -> AdminListCoursesOutput:
    return AdminListCoursesOutput(courses=repo.list_all())


def run_create_course(inp: CreateCourseInput, repo: CourseAdminRepoPort) -> CourseOutput:
    values = {
        "title": inp.title,
        "slug": inp.slug,
        "description": inp.description,
        "cover_image": inp.cover_image,
        "level": inp.level or LEVELS[0],
        "status": inp.status or STATUSES[0],
    }
    errors = course_field_errors(values)
    if errors:
        return CourseOutput(success=False, errors=errors)
    if repo.slug_taken(values["slug"]):
        return CourseOutput(success=False, errors=[SLUG_EXISTS])

    course = Course(
        id=new_id(),
        title=values["title"],
        slug=values["slug"],
        description=values["description"],
        cover_image=values["cover_image"],
        level=values["level"],
        status=values["status"],
        published=values["status"] == "PUBLISHED",
    )
    repo.save(course)
    logger.info("Course created: %s", course.slug)
    return CourseOutput(success=True, course=course)


def run_update_course(inp: UpdateCourseInput, repo: CourseAdminRepoPort) -> CourseOutput:
    course_id = parse_id(inp.course_id)
    if course_id is None:
        return CourseOutput(success=False, errors=[_invalid("id", "Invalid id")])
    changes = {k: v for k, v in inp.changes.items() if k in EDITABLE_COURSE_FIELDS}
    errors = course_field_errors(changes)
    if errors:
        return CourseOutput(success=False, errors=errors)

    course = repo.get_by_id(course_id)
    if course is None:
        return CourseOutput(success=False, errors=[NOT_FOUND])
    if "slug" in changes and repo.slug_taken(changes["slug"], exclude_id=course_id):
        return CourseOutput(success=False, errors=[SLUG_TAKEN])

    updated = replace(course, **changes)
    # Publishing is one-way here; moving back to DRAFT keeps the flag.
    if changes.get("status") == "PUBLISHED":
        updated.published = True
    repo.update(updated)
    return CourseOutput(success=True, course=updated)


def run_delete_course(inp: DeleteCourseInput, repo: CourseAdminRepoPort) -> CourseOutput:
    if not inp.course_id:
        return CourseOutput(success=False, errors=[MISSING_ID])
    course_id = parse_id(inp.course_id)
    if course_id is None or not repo.delete(course_id):
        return CourseOutput(success=False, errors=[NOT_FOUND])
    logger.info("Course deleted: %s", course_id)
    return CourseOutput(success=True)


def run_create_module(inp: CreateModuleInput, repo: CourseAdminRepoPort) -> ModuleOutput:
    errors = [e for e in [_text_error("title", inp.title, MIN_TITLE)] if e]
    if inp.description is not None:
        errors += [e for e in [_text_error("description", inp.description)] if e]
    if errors:
        return ModuleOutput(success=False, errors=errors)

    course_id = parse_id(inp.course_id)
    if course_id is None or repo.get_by_id(course_id) is None:
        return ModuleOutput(success=False, errors=[NOT_FOUND])
    module = CourseModule(
        id=new_id(),
        course_id=course_id,
        title=inp.title,
        description=inp.description,
        position=repo.count_modules(course_id),
    )
    repo.save_module(module)
    return ModuleOutput(success=True, module=module)


def run_update_module(inp: UpdateModuleInput, repo: CourseAdminRepoPort) -> ModuleOutput:
    changes = inp.changes
    errors: list[ValidationError] = []
    if parse_id(inp.module_id) is None:
        errors.append(_invalid("id", "Invalid id"))
    if "title" in changes:
        errors += [e for e in [_text_error("title", changes["title"], MIN_TITLE)] if e]
    if changes.get("description") is not None:
        errors += [e for e in [_text_error("description", changes["description"])] if e]
    order = changes.get("order")
    if order is not None and not (_is_int(order) and order >= 0):
        errors.append(_invalid("order", "Expected a non-negative integer"))
    if errors:
        return ModuleOutput(success=False, errors=errors)

    course_id = parse_id(inp.course_id)
    module_id = parse_id(inp.module_id)
    module = repo.get_module(course_id, module_id) if course_id and module_id else None
    if module is None:
        return ModuleOutput(success=False, errors=[NOT_FOUND])

    if "title" in changes:
        module.title = changes["title"]
    if "description" in changes:
        module.description = changes["description"]
    if order is not None:
        module.position = order
    repo.save_module(module)
    return ModuleOutput(success=True, module=module)


def run_reorder_modules(inp: ReorderModulesInput, repo: CourseAdminRepoPort) -> ModuleOutput:
    course_id = parse_id(inp.course_id)
    if course_id is None:
        return ModuleOutput(success=True)
    for item in inp.items:
        if not isinstance(item, dict):
            continue
        module_id = parse_id(item.get("id"))
        order = item.get("order")
        if module_id is None or not _is_int(order):
            continue
        repo.set_module_position(course_id, module_id, order)
    return ModuleOutput(success=True)


def run_delete_module(inp: DeleteModuleInput, repo: CourseAdminRepoPort) -> ModuleOutput:
    if not inp.module_id:
        return ModuleOutput(success=False, errors=[MISSING_ID])
    course_id = parse_id(inp.course_id)
    module_id = parse_id(inp.module_id)
    if course_id is None or module_id is None or not repo.delete_module(course_id, module_id):
        return ModuleOutput(success=False, errors=[NOT_FOUND])
    return ModuleOutput(success=True)


def parse_id(value: Any) -> UUID | None:
    try:
        return UUID(str(value))
    except ValueError:
        return None


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def run(
    inp: ListCoursesInput
    | GetCourseInput
    | RecordViewInput
    | AdminListCoursesInput
    | CreateCourseInput
    | UpdateCourseInput
    | DeleteCourseInput
    | CreateModuleInput
    | UpdateModuleInput
    | ReorderModulesInput
    | DeleteModuleInput,
    *,
    repo: CourseAdminRepoPort,
) -> Any:
    if isinstance(inp, ListCoursesInput):
        return run_list(inp, repo)
    elif isinstance(inp, GetCourseInput):
        return run_get(inp, repo)
    elif isinstance(inp, RecordViewInput):
        return run_record_view(inp, repo)
    elif isinstance(inp, AdminListCoursesInput):
        return run_admin_list(inp, repo)
    elif isinstance(inp, CreateCourseInput):
        return run_create_course(inp, repo)
    elif isinstance(inp, UpdateCourseInput):
        return run_update_course(inp, repo)
    elif isinstance(inp, DeleteCourseInput):
        return run_delete_course(inp, repo)
    elif isinstance(inp, CreateModuleInput):
        return run_create_module(inp, repo)
    elif isinstance(inp, UpdateModuleInput):
        return run_update_module(inp, repo)
    elif isinstance(inp, ReorderModulesInput):
        return run_reorder_modules(inp, repo)
    elif isinstance(inp, DeleteModuleInput):
        return run_delete_module(inp, repo)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
