"""Newsletter component ports."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from abtech.components.newsletter.models import NewsletterSubscription


class NewsletterRepoPort(Protocol):
    """
    Subscription store.

    Email arguments are already lowercased by the component.
    """

    def get_by_email(self, email: str) -> NewsletterSubscription | None:
        ...

    def get_by_user_id(self, user_id: str) -> NewsletterSubscription | None:
        ...

    def upsert_active(self, email: str, now: datetime) -> NewsletterSubscription:
        """Create or update the record for `email` with active=True."""
        ...

    def set_active(self, subscription_id: UUID, active: bool, now: datetime) -> None:
        ...

    def create_pending(
        self, email: str | None, user_id: str, now: datetime
    ) -> NewsletterSubscription:
        """Insert an inactive record linked to a user."""
        ...
