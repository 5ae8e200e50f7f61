import os
from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import jwt

from abtech.core.entities import SessionIdentity

SECRET_KEY = os.environ.get("ABTECH_SECRET_KEY", "dev-secret-unsafe")
ALGORITHM = "HS256"
SESSION_TOKEN_EXPIRE_MINUTES = 60 * 24 * 7  # 7 days


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
    now_utc: datetime | None = None,
    secret_key: str | None = None,
) -> str:
    """
    Create a JWT access token.

    Args:
        data: Claims to encode in the token
        expires_delta: Optional custom expiration delta
        now_utc: Current UTC time (for testing/determinism). Defaults to datetime.now(UTC).
        secret_key: Signing key. Defaults to ABTECH_SECRET_KEY.
    """
    to_encode = data.copy()
    current_time = now_utc if now_utc is not None else datetime.now(UTC)

    if expires_delta:
        expire = current_time + expires_delta
    else:
        expire = current_time + timedelta(minutes=15)

    to_encode.update({"exp": expire})
    encoded_jwt: str = jwt.encode(to_encode, secret_key or SECRET_KEY, algorithm=ALGORITHM)
    return encoded_jwt


def decode_access_token(token: str, secret_key: str | None = None) -> dict[str, Any] | None:
    try:
        payload = jwt.decode(token, secret_key or SECRET_KEY, algorithms=[ALGORITHM])
        return cast(dict[str, Any], payload)
    except jwt.JWTError:
        return None


def create_session_token(
    user_id: str,
    role: str,
    email: str | None = None,
    expires_delta: timedelta | None = None,
    now_utc: datetime | None = None,
    secret_key: str | None = None,
) -> str:
    """Mint a session token. Used by the sign-in provider and by tests."""
    claims: dict[str, Any] = {"sub": user_id, "role": role}
    if email:
        claims["email"] = email
    return create_access_token(
        claims,
        expires_delta=expires_delta or timedelta(minutes=SESSION_TOKEN_EXPIRE_MINUTES),
        now_utc=now_utc,
        secret_key=secret_key,
    )


def session_from_token(token: str | None, secret_key: str | None = None) -> SessionIdentity | None:
    """Decode a session token into an identity. None for missing, bad or expired tokens."""
    if not token:
        return None
    payload = decode_access_token(token, secret_key)
    if not payload:
        return None

    user_id = payload.get("sub")
    if not user_id or not isinstance(user_id, str):
        return None

    role = payload.get("role")
    email = payload.get("email")
    return SessionIdentity(
        user_id=user_id,
        role=role if isinstance(role, str) else "",
        email=email if isinstance(email, str) else None,
    )
