"""SQLite site section store. Section data is stored as JSON text."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from abtech.adapters.sqlite.base import SQLiteRepoBase, iso
from abtech.core.entities import SiteSection


class SQLiteSectionRepo(SQLiteRepoBase):
    """Implements SectionRepoPort."""

    def get(self, namespace: str, key: str) -> SiteSection | None:
        row = self._fetchone(
            "SELECT * FROM site_sections WHERE namespace = ? AND key = ?", (namespace, key)
        )
        return self._map_row(row) if row else None

    def list_namespace(self, namespace: str) -> list[SiteSection]:
        rows = self._fetchall(
            "SELECT * FROM site_sections WHERE namespace = ? ORDER BY key ASC", (namespace,)
        )
        return [self._map_row(r) for r in rows]

    def upsert(self, section: SiteSection) -> SiteSection:
        self._execute(
            """
            INSERT INTO site_sections (namespace, key, data_json, updated_at)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(namespace, key) DO UPDATE SET
                data_json=excluded.data_json,
                updated_at=excluded.updated_at
            """,
            (section.namespace, section.key, json.dumps(section.data), iso(section.updated_at)),
        )
        return section

    def _map_row(self, row: dict[str, Any]) -> SiteSection:
        return SiteSection(
            namespace=row["namespace"],
            key=row["key"],
            data=json.loads(row["data_json"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
