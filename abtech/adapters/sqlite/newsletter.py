"""SQLite newsletter subscription store."""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from abtech.adapters.sqlite.base import SQLiteRepoBase, iso
from abtech.components.newsletter import NewsletterSubscription


class SQLiteNewsletterRepo(SQLiteRepoBase):
    """Implements NewsletterRepoPort. Emails are stored lowercased."""

    def get_by_email(self, email: str) -> NewsletterSubscription | None:
        row = self._fetchone(
            "SELECT * FROM newsletter_subscriptions WHERE email = ?", (email.lower(),)
        )
        return self._map_row(row) if row else None

    def get_by_user_id(self, user_id: str) -> NewsletterSubscription | None:
        row = self._fetchone(
            "SELECT * FROM newsletter_subscriptions WHERE user_id = ?", (user_id,)
        )
        return self._map_row(row) if row else None

    def upsert_active(self, email: str, now: datetime) -> NewsletterSubscription:
        email = email.lower()
        self._execute(
            """
            INSERT INTO newsletter_subscriptions (id, email, active, created_at, updated_at)
            VALUES (?, ?, 1, ?, ?)
            ON CONFLICT(email) DO UPDATE SET
                active = 1,
                updated_at = excluded.updated_at
            """,
            (str(uuid4()), email, iso(now), iso(now)),
        )
        sub = self.get_by_email(email)
        if sub is None:
            raise RuntimeError(f"Subscription upsert for {email} did not persist")
        return sub

    def set_active(self, subscription_id: UUID, active: bool, now: datetime) -> None:
        self._execute(
            "UPDATE newsletter_subscriptions SET active = ?, updated_at = ? WHERE id = ?",
            (int(active), iso(now), str(subscription_id)),
        )

    def create_pending(
        self, email: str | None, user_id: str, now: datetime
    ) -> NewsletterSubscription:
        sub = NewsletterSubscription(
            id=uuid4(),
            email=email.lower() if email else None,
            user_id=user_id,
            active=False,
            created_at=now,
            updated_at=now,
        )
        self._execute(
            """
            INSERT INTO newsletter_subscriptions
                (id, email, user_id, active, created_at, updated_at)
            VALUES (?, ?, ?, 0, ?, ?)
            """,
            (str(sub.id), sub.email, user_id, iso(now), iso(now)),
        )
        return sub

    def _map_row(self, row: dict[str, Any]) -> NewsletterSubscription:
        return NewsletterSubscription(
            id=UUID(row["id"]),
            email=row["email"],
            user_id=row["user_id"],
            active=bool(row["active"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
