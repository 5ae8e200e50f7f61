"""Media library component unit tests."""

from __future__ import annotations

from typing import Any

import pytest

from abtech.components.media import (
    ListMediaInput,
    MediaInfoInput,
    MediaProviderError,
    run,
)
from abtech.core.entities import SessionIdentity

ADMIN = SessionIdentity(user_id="a1", role="ADMIN")
MODERATOR = SessionIdentity(user_id="m1", role="MODERATOR")


class MockLibrary:
    def __init__(self, configured: bool = True, fail: bool = False) -> None:
        self.configured = configured
        self.fail = fail
        self.calls: list[tuple[str, Any]] = []

    def is_configured(self) -> bool:
        return self.configured

    def get_resource(self, public_id: str) -> dict[str, Any]:
        self.calls.append(("get", public_id))
        if self.fail:
            raise MediaProviderError("Resource not found")
        return {"public_id": public_id, "format": "png"}

    def list_resources(self, prefix: str, max_results: int) -> dict[str, Any]:
        self.calls.append(("list", (prefix, max_results)))
        if self.fail:
            raise MediaProviderError("rate limited")
        return {"resources": [{"public_id": f"{prefix}a"}]}


class TestInfo:
    def test_admin(self) -> None:
        out = run(MediaInfoInput("site/logo", ADMIN), library=MockLibrary())
        assert out.success
        assert out.data["public_id"] == "site/logo"

    @pytest.mark.parametrize("session", [None, MODERATOR])
    def test_forbidden_before_anything(self, session) -> None:
        lib = MockLibrary(configured=False)
        out = run(MediaInfoInput(None, session), library=lib)
        assert out.errors[0].code == "FORBIDDEN"
        assert lib.calls == []

    def test_not_configured_before_missing_id(self) -> None:
        out = run(MediaInfoInput(None, ADMIN), library=MockLibrary(configured=False))
        assert out.errors[0].message == "Cloudinary not configured on server"

    def test_missing_id(self) -> None:
        out = run(MediaInfoInput("", ADMIN), library=MockLibrary())
        assert out.errors[0].message == "Missing publicId"

    def test_provider_error(self) -> None:
        out = run(MediaInfoInput("x", ADMIN), library=MockLibrary(fail=True))
        assert out.errors[0].code == "PROVIDER"
        assert out.errors[0].message == "Resource not found"


class TestList:
    def test_defaults(self) -> None:
        lib = MockLibrary()
        out = run(ListMediaInput(ADMIN), library=lib)
        assert out.success
        assert lib.calls == [("list", ("", 100))]

    def test_prefix(self) -> None:
        out = run(ListMediaInput(ADMIN, prefix="courses/"), library=MockLibrary())
        assert out.data["resources"][0]["public_id"] == "courses/a"

    def test_provider_error(self) -> None:
        out = run(ListMediaInput(ADMIN), library=MockLibrary(fail=True))
        assert not out.success
