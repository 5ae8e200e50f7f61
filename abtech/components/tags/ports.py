"""Tag component ports."""

from __future__ import annotations

from typing import Protocol

from abtech.core.entities import Tag


class TagRepoPort(Protocol):
    def list_all(self) -> list[Tag]:
        """All tags ordered by name."""
        ...

    def find_by_name_or_slug(self, name: str, slug: str) -> Tag | None:
        ...

    def save(self, tag: Tag) -> Tag:
        ...
