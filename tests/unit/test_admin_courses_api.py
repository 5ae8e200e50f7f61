"""
Tests for the admin course editor: courses and their modules.
"""

from __future__ import annotations

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from abtech.adapters.sqlite.catalog import SQLiteCourseRepo
from abtech.core.entities import Course, CourseModule


@pytest.fixture
def course_repo(db_path: str) -> SQLiteCourseRepo:
    return SQLiteCourseRepo(db_path)


def add_course(repo: SQLiteCourseRepo, slug: str, *, modules: int = 0, **kwargs) -> Course:
    course_id = uuid4()
    return repo.save(
        Course(
            id=course_id,
            title=slug.replace("-", " ").title(),
            slug=slug,
            modules=[
                CourseModule(id=uuid4(), course_id=course_id, title=f"Module {i + 1}", position=i)
                for i in range(modules)
            ],
            **kwargs,
        )
    )


NEW_COURSE = {
    "title": "Cloud Foundations",
    "slug": "cloud-foundations",
    "description": "Start here",
    "coverImage": "https://cdn.example/cloud.png",
    "level": "INTERMEDIATE",
}


class TestAccess:
    def test_admin_only(
        self,
        client: TestClient,
        moderator_headers: dict[str, str],
        user_headers: dict[str, str],
    ) -> None:
        for headers in ({}, user_headers, moderator_headers):
            response = client.get("/api/admin/courses", headers=headers)
            assert response.status_code == 403
            assert response.json() == {"error": "Forbidden"}

        response = client.post(
            f"/api/admin/courses/{uuid4()}/modules",
            json={"title": "Intro"},
            headers=moderator_headers,
        )
        assert response.status_code == 403


class TestCourses:
    def test_list_includes_drafts(
        self, client: TestClient, course_repo: SQLiteCourseRepo, admin_headers: dict[str, str]
    ) -> None:
        add_course(course_repo, "live", status="PUBLISHED", published=True, modules=2)
        add_course(course_repo, "draft")

        response = client.get("/api/admin/courses", headers=admin_headers)

        courses = {c["slug"]: c for c in response.json()["courses"]}
        assert set(courses) == {"live", "draft"}
        assert courses["draft"]["status"] == "DRAFT"
        assert [m["order"] for m in courses["live"]["modules"]] == [0, 1]

    def test_create_defaults_to_draft(
        self, client: TestClient, course_repo: SQLiteCourseRepo, admin_headers: dict[str, str]
    ) -> None:
        response = client.post("/api/admin/courses", json=NEW_COURSE, headers=admin_headers)

        assert response.status_code == 201
        course = response.json()["course"]
        assert course["status"] == "DRAFT"
        assert course["published"] is False
        assert course["level"] == "INTERMEDIATE"
        assert course_repo.get_by_slug("cloud-foundations") is not None

    def test_create_published(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        body = {**NEW_COURSE, "status": "PUBLISHED"}

        response = client.post("/api/admin/courses", json=body, headers=admin_headers)

        assert response.json()["course"]["published"] is True
        assert client.get("/api/courses/cloud-foundations").status_code == 200

    def test_create_field_errors(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        body = {"title": "X", "slug": "Bad Slug", "coverImage": "not a url", "level": "EXPERT"}

        response = client.post("/api/admin/courses", json=body, headers=admin_headers)

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "Invalid data"
        assert data["details"]["formErrors"] == []
        assert set(data["details"]["fieldErrors"]) == {"title", "slug", "coverImage", "level"}

    def test_create_duplicate_slug_is_409(
        self, client: TestClient, course_repo: SQLiteCourseRepo, admin_headers: dict[str, str]
    ) -> None:
        add_course(course_repo, "cloud-foundations")

        response = client.post("/api/admin/courses", json=NEW_COURSE, headers=admin_headers)

        assert response.status_code == 409
        assert response.json() == {"error": "Slug already exists"}

    def test_patch_publishes_and_keeps_modules(
        self, client: TestClient, course_repo: SQLiteCourseRepo, admin_headers: dict[str, str]
    ) -> None:
        course = add_course(course_repo, "draft", modules=2)

        response = client.patch(
            "/api/admin/courses",
            json={"id": str(course.id), "status": "PUBLISHED", "title": "Now Live"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        stored = course_repo.get_by_id(course.id)
        assert stored.published is True
        assert stored.title == "Now Live"
        assert stored.slug == "draft"
        assert len(stored.modules) == 2

    def test_patch_slug_taken_and_unknown(
        self, client: TestClient, course_repo: SQLiteCourseRepo, admin_headers: dict[str, str]
    ) -> None:
        add_course(course_repo, "taken")
        course = add_course(course_repo, "mine")

        taken = client.patch(
            "/api/admin/courses",
            json={"id": str(course.id), "slug": "taken"},
            headers=admin_headers,
        )
        same = client.patch(
            "/api/admin/courses",
            json={"id": str(course.id), "slug": "mine"},
            headers=admin_headers,
        )
        unknown = client.patch(
            "/api/admin/courses",
            json={"id": str(uuid4()), "title": "Ghost"},
            headers=admin_headers,
        )

        assert taken.status_code == 409
        assert taken.json() == {"error": "Slug already taken"}
        assert same.status_code == 200
        assert unknown.status_code == 404

    def test_delete(
        self, client: TestClient, course_repo: SQLiteCourseRepo, admin_headers: dict[str, str]
    ) -> None:
        course = add_course(course_repo, "old", modules=1)

        response = client.delete(
            "/api/admin/courses", params={"id": str(course.id)}, headers=admin_headers
        )
        missing = client.delete("/api/admin/courses", headers=admin_headers)

        assert response.json() == {"success": True}
        assert course_repo.get_by_id(course.id) is None
        assert missing.status_code == 400
        assert missing.json() == {"error": "Missing id"}


class TestModules:
    def test_add_appends(
        self, client: TestClient, course_repo: SQLiteCourseRepo, admin_headers: dict[str, str]
    ) -> None:
        course = add_course(course_repo, "python", modules=2)

        response = client.post(
            f"/api/admin/courses/{course.id}/modules",
            json={"title": "Decorators", "description": "Wrapping functions"},
            headers=admin_headers,
        )

        assert response.status_code == 201
        module = response.json()["module"]
        assert module["order"] == 2
        assert module["description"] == "Wrapping functions"
        assert [m.title for m in course_repo.get_by_id(course.id).modules][-1] == "Decorators"

    def test_add_validation_and_unknown_course(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        short = client.post(
            f"/api/admin/courses/{uuid4()}/modules", json={"title": "A"}, headers=admin_headers
        )
        unknown = client.post(
            f"/api/admin/courses/{uuid4()}/modules", json={"title": "Intro"}, headers=admin_headers
        )

        assert short.status_code == 400
        assert short.json()["details"]["fieldErrors"] == {
            "title": ["Must be at least 2 characters"]
        }
        assert unknown.status_code == 404
        assert unknown.json() == {"error": "Not found"}

    def test_patch_single_module(
        self, client: TestClient, course_repo: SQLiteCourseRepo, admin_headers: dict[str, str]
    ) -> None:
        course = add_course(course_repo, "python", modules=1)
        module = course.modules[0]

        response = client.patch(
            f"/api/admin/courses/{course.id}/modules",
            json={"id": str(module.id), "title": "Basics", "order": 5},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["module"]["title"] == "Basics"
        assert course_repo.get_module(course.id, module.id).position == 5

    def test_patch_rejects_negative_order(
        self, client: TestClient, course_repo: SQLiteCourseRepo, admin_headers: dict[str, str]
    ) -> None:
        course = add_course(course_repo, "python", modules=1)

        response = client.patch(
            f"/api/admin/courses/{course.id}/modules",
            json={"id": str(course.modules[0].id), "order": -1},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert "order" in response.json()["details"]["fieldErrors"]

    def test_module_of_other_course_not_found(
        self, client: TestClient, course_repo: SQLiteCourseRepo, admin_headers: dict[str, str]
    ) -> None:
        course = add_course(course_repo, "python")
        other = add_course(course_repo, "golang", modules=1)

        response = client.patch(
            f"/api/admin/courses/{course.id}/modules",
            json={"id": str(other.modules[0].id), "title": "Stolen"},
            headers=admin_headers,
        )

        assert response.status_code == 404

    def test_reorder(
        self, client: TestClient, course_repo: SQLiteCourseRepo, admin_headers: dict[str, str]
    ) -> None:
        course = add_course(course_repo, "python", modules=3)
        first, second, third = course.modules

        response = client.patch(
            f"/api/admin/courses/{course.id}/modules",
            json={
                "reorder": [
                    {"id": str(third.id), "order": 0},
                    {"id": str(first.id), "order": 1},
                    {"id": str(second.id), "order": 2},
                    {"id": "junk", "order": "x"},
                ]
            },
            headers=admin_headers,
        )

        assert response.json() == {"success": True}
        titles = [m.title for m in course_repo.get_by_id(course.id).modules]
        assert titles == ["Module 3", "Module 1", "Module 2"]

    def test_delete(
        self, client: TestClient, course_repo: SQLiteCourseRepo, admin_headers: dict[str, str]
    ) -> None:
        course = add_course(course_repo, "python", modules=2)
        doomed = course.modules[0]
        path = f"/api/admin/courses/{course.id}/modules"

        response = client.delete(path, params={"id": str(doomed.id)}, headers=admin_headers)
        again = client.delete(path, params={"id": str(doomed.id)}, headers=admin_headers)

        assert response.json() == {"success": True}
        assert [m.title for m in course_repo.get_by_id(course.id).modules] == ["Module 2"]
        assert again.status_code == 404
