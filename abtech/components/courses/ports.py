"""Course component ports."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from abtech.core.entities import Course, CourseModule


class CourseRepoPort(Protocol):
    def list_published(self) -> list[Course]:
        """
        PUBLISHED and published courses, newest first, with modules loaded
        in position order (assets included).
        """
        ...

    def get_by_slug(self, slug: str) -> Course | None:
        """Course with ordered modules and assets, regardless of status."""
        ...

    def increment_views(self, slug: str) -> tuple[UUID, int] | None:
        """Add one view; returns (id, views) or None when no such course."""
        ...


class CourseAdminRepoPort(CourseRepoPort, Protocol):
    def list_all(self) -> list[Course]:
        """Every course, newest first, with modules loaded."""
        ...

    def get_by_id(self, course_id: UUID) -> Course | None:
        ...

    def slug_taken(self, slug: str, exclude_id: UUID | None = None) -> bool:
        ...

    def save(self, course: Course) -> Course:
        """Upsert the course and replace its modules with `course.modules`."""
        ...

    def update(self, course: Course) -> Course:
        """Write the course row only."""
        ...

    def delete(self, course_id: UUID) -> bool:
        ...

    def count_modules(self, course_id: UUID) -> int:
        ...

    def get_module(self, course_id: UUID, module_id: UUID) -> CourseModule | None:
        ...

    def save_module(self, module: CourseModule) -> CourseModule:
        ...

    def set_module_position(self, course_id: UUID, module_id: UUID, position: int) -> bool:
        ...

    def delete_module(self, course_id: UUID, module_id: UUID) -> bool:
        ...
