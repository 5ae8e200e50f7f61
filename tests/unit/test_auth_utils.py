"""Session token tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from abtech.api.auth_utils import (
    create_access_token,
    create_session_token,
    decode_access_token,
    session_from_token,
)

SECRET = "test-secret"


class TestSessionTokens:
    def test_round_trip_identity(self) -> None:
        token = create_session_token("u-1", "ADMIN", email="a@b.com", secret_key=SECRET)

        session = session_from_token(token, SECRET)

        assert session is not None
        assert session.user_id == "u-1"
        assert session.role == "ADMIN"
        assert session.email == "a@b.com"
        assert session.is_admin

    def test_wrong_secret(self) -> None:
        token = create_session_token("u-1", "ADMIN", secret_key=SECRET)

        assert session_from_token(token, "other-secret") is None

    def test_expired(self) -> None:
        token = create_session_token(
            "u-1",
            "ADMIN",
            expires_delta=timedelta(minutes=5),
            now_utc=datetime.now(UTC) - timedelta(hours=1),
            secret_key=SECRET,
        )

        assert session_from_token(token, SECRET) is None

    def test_missing_or_garbage(self) -> None:
        assert session_from_token(None, SECRET) is None
        assert session_from_token("", SECRET) is None
        assert session_from_token("not.a.jwt", SECRET) is None

    def test_token_without_subject(self) -> None:
        token = create_access_token({"role": "ADMIN"}, secret_key=SECRET)

        assert decode_access_token(token, SECRET)["role"] == "ADMIN"
        assert session_from_token(token, SECRET) is None
