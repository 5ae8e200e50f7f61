"""
Tests for the editable section APIs: pricing and contact FAQs, help and
community sections, and their public reads.
"""

from __future__ import annotations

import sqlite3

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from abtech.api.deps import get_section_repo

FAQ_A = {"question": "Is there a free plan?", "answer": "Yes"}
FAQ_B = {"question": "Can I cancel?", "answer": "Any time"}


class TestPricingFaqs:
    def test_add_prepends(self, client: TestClient) -> None:
        client.patch("/api/admin/pricing/faqs", json={"op": "add", "item": FAQ_A})
        response = client.patch("/api/admin/pricing/faqs", json={"op": "add", "item": FAQ_B})

        assert response.json() == {"ok": True}
        assert client.get("/api/admin/pricing/faqs").json() == {"faqs": [FAQ_B, FAQ_A]}

    def test_add_requires_question_and_answer(self, client: TestClient) -> None:
        response = client.patch(
            "/api/admin/pricing/faqs", json={"op": "add", "item": {"question": "Q"}}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "question and answer are required"}

    def test_replace_and_delete(self, client: TestClient) -> None:
        client.patch("/api/admin/pricing/faqs", json={"op": "add", "item": FAQ_A})

        client.patch("/api/admin/pricing/faqs", json={"index": 0, "item": FAQ_B})
        assert client.get("/api/admin/pricing/faqs").json() == {"faqs": [FAQ_B]}

        response = client.request("DELETE", "/api/admin/pricing/faqs", json={"index": 0})
        assert response.json() == {"ok": True}
        assert client.get("/api/admin/pricing/faqs").json() == {"faqs": []}

    def test_out_of_range_index(self, client: TestClient) -> None:
        response = client.patch("/api/admin/pricing/faqs", json={"index": 3, "item": FAQ_A})

        assert response.status_code == 400
        assert response.json() == {"error": "invalid index"}

    def test_string_index_rejected(self, client: TestClient) -> None:
        client.patch("/api/admin/pricing/faqs", json={"op": "add", "item": FAQ_A})

        response = client.request("DELETE", "/api/admin/pricing/faqs", json={"index": "0"})

        assert response.status_code == 400


class TestContactFaqs:
    def test_requires_editor(self, client: TestClient, user_headers: dict[str, str]) -> None:
        response = client.get("/api/admin/contact/faqs", headers=user_headers)

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    def test_append_and_replace(
        self, client: TestClient, moderator_headers: dict[str, str]
    ) -> None:
        url = "/api/admin/contact/faqs"
        client.patch(url, json={"item": FAQ_A}, headers=moderator_headers)
        response = client.patch(url, json={"index": "0", "item": FAQ_B}, headers=moderator_headers)

        assert response.json() == {"success": True, "faqs": [FAQ_B]}

    def test_index_zero_on_empty_list(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        response = client.patch(
            "/api/admin/contact/faqs", json={"index": 0, "item": FAQ_A}, headers=admin_headers
        )

        assert response.json() == {"success": True, "faqs": [FAQ_A]}

    def test_delete_out_of_range(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        response = client.request(
            "DELETE", "/api/admin/contact/faqs", json={"index": 2}, headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Index out of range"}

    def test_delete_bad_index(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        response = client.request(
            "DELETE", "/api/admin/contact/faqs", json={"index": "abc"}, headers=admin_headers
        )

        assert response.json() == {"error": "Invalid index"}


class TestHelpSections:
    URL = "/api/admin/help/sections"

    def test_requires_editor(self, client: TestClient) -> None:
        response = client.get(self.URL)

        assert response.status_code == 401
        assert response.json() == {"message": "Unauthorized"}

    def test_patch_appends_then_replaces(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        client.patch(
            self.URL, json={"key": "categories", "data": {"name": "Billing"}}, headers=admin_headers
        )
        response = client.patch(
            self.URL,
            json={"key": "categories", "index": 0, "data": {"name": "Accounts"}},
            headers=admin_headers,
        )

        assert response.status_code == 200
        row = response.json()
        assert row["key"] == "categories"
        assert row["data"] == [{"name": "Accounts"}]

    def test_out_of_range_patch_appends(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        client.patch(self.URL, json={"key": "categories", "data": "a"}, headers=admin_headers)
        response = client.patch(
            self.URL, json={"key": "categories", "index": 9, "data": "b"}, headers=admin_headers
        )

        assert response.json()["data"] == ["a", "b"]

    def test_invalid_key(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        response = client.patch(self.URL, json={"key": "secrets", "data": 1}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid key"}

    def test_delete(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        client.patch(self.URL, json={"key": "videoTutorials", "data": "v1"}, headers=admin_headers)

        response = client.request(
            "DELETE", self.URL, json={"key": "videoTutorials", "index": 0}, headers=admin_headers
        )
        assert response.json()["data"] == []

        missing = client.request(
            "DELETE", self.URL, json={"key": "videoTutorials", "index": 0}, headers=admin_headers
        )
        assert missing.json() == {"message": "Index out of range"}

        invalid = client.request("DELETE", self.URL, json={"key": "x"}, headers=admin_headers)
        assert invalid.json() == {"message": "Invalid request"}

    def test_bulk_post_skips_unknown_keys(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        response = client.post(
            self.URL,
            json=[
                {"key": "categories", "data": ["c"]},
                {"key": "bogus", "data": ["x"]},
                {"key": "popularArticles"},
            ],
            headers=admin_headers,
        )

        assert [(r["key"], r["data"]) for r in response.json()] == [
            ("categories", ["c"]),
            ("popularArticles", []),
        ]

    def test_bulk_post_requires_list(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        response = client.post(self.URL, json={"key": "categories"}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid body"}

    def test_public_map(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        client.post(
            self.URL,
            json=[{"key": "categories", "data": ["c"]}, {"key": "popularArticles", "data": {}}],
            headers=admin_headers,
        )

        response = client.get("/api/help/sections")

        assert response.json() == {"categories": ["c"], "popularArticles": []}


class TestCommunitySections:
    URL = "/api/admin/community/sections"

    def test_put_and_public_read(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        response = client.post(
            self.URL,
            json={"key": "upcomingEvents", "data": [{"title": "Meetup"}]},
            headers=admin_headers,
        )

        assert response.json()["success"] is True
        assert response.json()["section"]["key"] == "upcomingEvents"
        public = client.get("/api/community/sections").json()
        assert public["upcomingEvents"] == [{"title": "Meetup"}]

    def test_invalid_key(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        response = client.patch(self.URL, json={"key": "nope", "item": 1}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid key"}

    def test_item_edits(self, client: TestClient, moderator_headers: dict[str, str]) -> None:
        client.patch(
            self.URL, json={"key": "trendingTopics", "op": "add", "item": "ai"},
            headers=moderator_headers,
        )
        client.patch(
            self.URL, json={"key": "trendingTopics", "item": "cloud"}, headers=moderator_headers
        )
        response = client.request(
            "DELETE", self.URL, json={"key": "trendingTopics", "index": 0},
            headers=moderator_headers,
        )

        assert response.json()["section"]["data"] == ["cloud"]
        assert client.get(self.URL, headers=moderator_headers).json() == {
            "trendingTopics": ["cloud"]
        }

    def test_requires_editor(self, client: TestClient) -> None:
        response = client.post(self.URL, json={"key": "upcomingEvents", "data": []})

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}


class BrokenSectionRepo:
    def get(self, namespace, key):
        raise sqlite3.OperationalError("database is locked")

    def list_namespace(self, namespace):
        raise sqlite3.OperationalError("database is locked")

    def upsert(self, section):
        raise sqlite3.OperationalError("database is locked")


class TestStoreFailures:
    """A failing store answers a JSON 500 under the endpoint's error key."""

    @pytest.fixture(autouse=True)
    def broken_store(self, app: FastAPI) -> None:
        app.dependency_overrides[get_section_repo] = lambda: BrokenSectionRepo()

    @pytest.mark.parametrize(
        "method, body",
        [("get", None), ("patch", {"op": "add", "item": FAQ_A}), ("delete", {"index": 0})],
    )
    def test_pricing_faqs(self, client: TestClient, method: str, body) -> None:
        response = client.request(method.upper(), "/api/admin/pricing/faqs", json=body)

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}

    def test_contact_faqs_get(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        response = client.get("/api/admin/contact/faqs", headers=admin_headers)

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}

    def test_admin_community_get(
        self, client: TestClient, moderator_headers: dict[str, str]
    ) -> None:
        response = client.get("/api/admin/community/sections", headers=moderator_headers)

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}

    def test_public_community_get(self, client: TestClient) -> None:
        response = client.get("/api/community/sections")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}

    def test_public_help_reads_empty(self, client: TestClient) -> None:
        assert client.get("/api/help/sections").json() == {}
