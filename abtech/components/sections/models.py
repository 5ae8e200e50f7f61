"""
Section component models.

Sections are JSON blocks keyed by (namespace, key). Most hold a list that the
admin UI edits one item at a time by index.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from abtech.core.entities import SiteSection

PRICING = "pricing"
COMMUNITY = "community"
HELP = "help"

PRICING_FAQS_KEY = "faqs"
CONTACT_FAQS_KEY = "contactFaqs"

HELP_KEYS = ("categories", "popularArticles", "videoTutorials")
COMMUNITY_KEYS = ("trendingTopics", "recentDiscussions", "upcomingEvents", "featuredMembers")


# --- Input Models ---


@dataclass(frozen=True)
class ReadListInput:
    namespace: str
    key: str


@dataclass(frozen=True)
class ReadNamespaceInput:
    namespace: str


@dataclass(frozen=True)
class PricingFaqEditInput:
    """`op="add"` prepends `item`; otherwise `item` replaces `index`."""

    op: str | None = None
    index: Any = None
    item: Any = None


@dataclass(frozen=True)
class PricingFaqDeleteInput:
    index: Any = None


@dataclass(frozen=True)
class ListItemEditInput:
    """Append on `op="add"` or a missing index, otherwise replace at index."""

    namespace: str
    key: str
    op: str | None = None
    index: Any = None
    item: Any = None
    allowed_keys: tuple[str, ...] | None = None


@dataclass(frozen=True)
class ListItemDeleteInput:
    namespace: str
    key: str
    index: Any = None
    allowed_keys: tuple[str, ...] | None = None


@dataclass(frozen=True)
class HelpItemEditInput:
    """Replace at index when it is in range, otherwise append."""

    key: str | None
    index: Any = None
    data: Any = None
    allowed_keys: tuple[str, ...] = HELP_KEYS


@dataclass(frozen=True)
class HelpItemDeleteInput:
    key: str | None
    index: Any = None
    allowed_keys: tuple[str, ...] = HELP_KEYS


@dataclass(frozen=True)
class PutSectionInput:
    namespace: str
    key: str | None
    data: Any = None
    allowed_keys: tuple[str, ...] | None = None


@dataclass(frozen=True)
class BulkPutInput:
    """Upsert several sections; unknown keys are skipped."""

    namespace: str
    items: list[dict[str, Any]]
    allowed_keys: tuple[str, ...]


# --- Output Models ---


@dataclass(frozen=True)
class ValidationError:
    code: str
    message: str
    field: str | None = None


@dataclass(frozen=True)
class ReadListOutput:
    items: list[Any]


@dataclass(frozen=True)
class ReadNamespaceOutput:
    sections: list[SiteSection]

    def as_map(self, lists_only: bool = False) -> dict[str, Any]:
        """key -> data. With `lists_only`, non-list data reads as []."""
        if lists_only:
            return {
                s.key: s.data if isinstance(s.data, list) else [] for s in self.sections
            }
        return {s.key: s.data for s in self.sections}


@dataclass(frozen=True)
class EditOutput:
    success: bool
    section: SiteSection | None = None
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def items(self) -> list[Any]:
        if self.section is None or not isinstance(self.section.data, list):
            return []
        return self.section.data


@dataclass(frozen=True)
class BulkPutOutput:
    sections: list[SiteSection]
