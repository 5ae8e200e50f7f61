"""
Email token models.

Single-use, purpose-scoped, expiring tokens delivered by email. A token is
never deleted; it lapses lazily once `expires_at` has passed.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

NEWSLETTER_CONFIRM = "newsletter-confirm"


class FailureReason(Enum):
    """Why a token failed verification."""

    INVALID = "invalid"
    EXPIRED = "expired"


@dataclass
class EmailToken:
    value: str
    purpose: str
    subject_email: str
    issued_at: datetime
    expires_at: datetime
    consumed_at: datetime | None = None

    @property
    def is_consumed(self) -> bool:
        return self.consumed_at is not None

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


# --- Input Models ---


@dataclass(frozen=True)
class IssueTokenInput:
    email: str
    purpose: str
    ttl: timedelta


@dataclass(frozen=True)
class VerifyTokenInput:
    value: str
    expected_purpose: str


@dataclass(frozen=True)
class ConsumeTokenInput:
    value: str


# --- Output Models ---


@dataclass(frozen=True)
class IssueTokenOutput:
    token: EmailToken


@dataclass(frozen=True)
class VerifyTokenOutput:
    """
    Verification outcome.

    `email` is set only when `ok`; `reason` only when not.
    """

    ok: bool
    email: str | None = None
    reason: FailureReason | None = None


@dataclass(frozen=True)
class ConsumeTokenOutput:
    consumed: bool  # False when already consumed or unknown
