"""Course component models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID

from abtech.core.entities import Course, CourseModule


@dataclass(frozen=True)
class CourseSummary:
    """Listing card for a published course."""

    id: UUID
    title: str
    slug: str
    description: str | None
    cover_image: str | None
    level: str | None
    views: int
    created_at: datetime
    module_count: int
    asset_count: int
    module_titles: list[str]


@dataclass(frozen=True)
class ListCoursesInput:
    pass


@dataclass(frozen=True)
class GetCourseInput:
    slug: str


@dataclass(frozen=True)
class RecordViewInput:
    slug: str


@dataclass(frozen=True)
class ValidationError:
    code: str
    message: str
    field: str | None = None


@dataclass(frozen=True)
class ListCoursesOutput:
    courses: list[CourseSummary]


@dataclass(frozen=True)
class GetCourseOutput:
    success: bool
    course: Course | None = None
    errors: list[ValidationError] = field(default_factory=list)


@dataclass(frozen=True)
class RecordViewOutput:
    success: bool
    id: UUID | None = None
    views: int = 0


# --- Admin (ADMIN only) ---


@dataclass(frozen=True)
class CreateCourseInput:
    """Raw field values as posted; the component validates them."""

    title: Any = None
    slug: Any = None
    description: Any = None
    cover_image: Any = None
    level: Any = None
    status: Any = None


@dataclass(frozen=True)
class UpdateCourseInput:
    """`changes` holds only the fields the caller sent."""

    course_id: Any
    changes: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DeleteCourseInput:
    course_id: Any


@dataclass(frozen=True)
class CourseOutput:
    success: bool
    course: Course | None = None
    errors: list[ValidationError] = field(default_factory=list)


@dataclass(frozen=True)
class CreateModuleInput:
    course_id: str
    title: Any = None
    description: Any = None


@dataclass(frozen=True)
class UpdateModuleInput:
    course_id: str
    module_id: Any
    changes: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ReorderModulesInput:
    """`items` are `{id, order}` mappings; malformed entries are skipped."""

    course_id: str
    items: list[Any] = field(default_factory=list)


@dataclass(frozen=True)
class DeleteModuleInput:
    course_id: str
    module_id: Any


@dataclass(frozen=True)
class ModuleOutput:
    success: bool
    module: CourseModule | None = None
    errors: list[ValidationError] = field(default_factory=list)


@dataclass(frozen=True)
class AdminListCoursesInput:
    pass


@dataclass(frozen=True)
class AdminListCoursesOutput:
    courses: list[Course]
