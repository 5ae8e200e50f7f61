"""SQLite email token store."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from abtech.adapters.sqlite.base import SQLiteRepoBase, iso, parse_dt
from abtech.components.email_tokens import EmailToken


class SQLiteEmailTokenRepo(SQLiteRepoBase):
    """Implements EmailTokenRepoPort."""

    def save(self, token: EmailToken) -> EmailToken:
        self._execute(
            """
            INSERT INTO email_tokens (
                value, purpose, subject_email, issued_at, expires_at, consumed_at
            ) VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                token.value,
                token.purpose,
                token.subject_email,
                iso(token.issued_at),
                iso(token.expires_at),
                iso(token.consumed_at),
            ),
        )
        return token

    def get_by_value(self, value: str) -> EmailToken | None:
        row = self._fetchone("SELECT * FROM email_tokens WHERE value = ?", (value,))
        return self._map_row(row) if row else None

    def mark_consumed(self, value: str, when: datetime) -> bool:
        # consumed_at is write-once.
        count = self._execute(
            "UPDATE email_tokens SET consumed_at = ? WHERE value = ? AND consumed_at IS NULL",
            (iso(when), value),
        )
        return count == 1

    def _map_row(self, row: dict[str, Any]) -> EmailToken:
        return EmailToken(
            value=row["value"],
            purpose=row["purpose"],
            subject_email=row["subject_email"],
            issued_at=datetime.fromisoformat(row["issued_at"]),
            expires_at=datetime.fromisoformat(row["expires_at"]),
            consumed_at=parse_dt(row["consumed_at"]),
        )
