"""
Newsletter component models.

Subscription state is derived from the stored record:

- none: no record for the email / user
- pending: record with active=False that was never confirmed (only created
  for signed-in users who ask to subscribe)
- verified: record with active=True
- unsubscribed: record with active=False after having been verified

The status query cannot tell pending and unsubscribed apart and reports both
as pending.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any
from uuid import UUID

from abtech.core.entities import SessionIdentity


class SubscriptionStatus(Enum):
    NONE = "none"
    PENDING = "pending"
    VERIFIED = "verified"


@dataclass
class NewsletterSubscription:
    id: UUID
    email: str | None = None  # Lowercased
    user_id: str | None = None
    active: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def status(self) -> SubscriptionStatus:
        return SubscriptionStatus.VERIFIED if self.active else SubscriptionStatus.PENDING


# --- Input Models ---


@dataclass(frozen=True)
class CheckInput:
    email: str | None


@dataclass(frozen=True)
class ConfirmInput:
    token: str | None


@dataclass(frozen=True)
class StatusInput:
    email: str | None = None
    session: SessionIdentity | None = None


@dataclass(frozen=True)
class UnsubscribeInput:
    email: str | None = None
    honeypot: Any = None
    captcha_token: str | None = None  # Accepted, not verified
    session: SessionIdentity | None = None


@dataclass(frozen=True)
class SubscribeInput:
    email: str | None = None
    honeypot: Any = None
    captcha_token: str | None = None
    session: SessionIdentity | None = None


@dataclass(frozen=True)
class ResendInput:
    email: str | None = None
    honeypot: Any = None
    captcha_token: str | None = None
    session: SessionIdentity | None = None


# --- Output Models ---


@dataclass(frozen=True)
class ValidationError:
    """Coded error; the API layer maps `code` to an HTTP status."""

    code: str
    message: str
    field: str | None = None


@dataclass(frozen=True)
class CheckOutput:
    success: bool
    is_subscribed: bool = False
    errors: list[ValidationError] = field(default_factory=list)


@dataclass(frozen=True)
class ConfirmOutput:
    success: bool
    email: str | None = None
    errors: list[ValidationError] = field(default_factory=list)


@dataclass(frozen=True)
class StatusOutput:
    status: SubscriptionStatus


@dataclass(frozen=True)
class UnsubscribeOutput:
    success: bool
    already_unsubscribed: bool = False
    errors: list[ValidationError] = field(default_factory=list)


@dataclass(frozen=True)
class SubscribeOutput:
    success: bool
    pending: bool = False
    already_subscribed: bool = False
    errors: list[ValidationError] = field(default_factory=list)


@dataclass(frozen=True)
class ResendOutput:
    success: bool
    already_subscribed: bool = False
    errors: list[ValidationError] = field(default_factory=list)


# --- Configuration ---


@dataclass(frozen=True)
class NewsletterConfig:
    token_ttl_hours: int = 24
    site_name: str = "AB TECH"
    base_url: str = "http://localhost:3000"
    confirm_path: str = "/newsletter/confirm"
    confirm_subject: str = "Confirm your newsletter subscription"
    debug: bool = False  # SMTP_DEBUG: log each confirm outcome
