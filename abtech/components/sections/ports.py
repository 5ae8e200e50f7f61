"""Section component ports."""

from __future__ import annotations

from typing import Protocol

from abtech.core.entities import SiteSection


class SectionRepoPort(Protocol):
    def get(self, namespace: str, key: str) -> SiteSection | None:
        ...

    def list_namespace(self, namespace: str) -> list[SiteSection]:
        """All sections of a namespace ordered by key."""
        ...

    def upsert(self, section: SiteSection) -> SiteSection:
        ...
