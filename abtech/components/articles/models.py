"""Article component models: listing and editing, the author directory and admin stats."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID

from abtech.core.entities import Article, SessionIdentity


@dataclass(frozen=True)
class AuthorRow:
    """One article's author reference, as read from the store."""

    author_id: UUID | None
    author_name: str | None


@dataclass(frozen=True)
class AuthorCount:
    id: str
    name: str
    count: int


@dataclass(frozen=True)
class RecentArticle:
    id: UUID
    title: str
    views: int
    published_at: datetime | None


@dataclass(frozen=True)
class ListAuthorsInput:
    published: bool | None = None


@dataclass(frozen=True)
class AdminStatsInput:
    session: SessionIdentity | None


@dataclass(frozen=True)
class ValidationError:
    code: str
    message: str
    field: str | None = None


@dataclass(frozen=True)
class ListAuthorsOutput:
    authors: list[AuthorCount]


@dataclass(frozen=True)
class AdminStatsOutput:
    success: bool
    total_articles: int = 0
    total_users: int = 0
    total_views: int = 0
    recent_articles: list[RecentArticle] = field(default_factory=list)
    errors: list[ValidationError] = field(default_factory=list)


# --- Article CRUD ---


class LockReason(Enum):
    NONE = "none"
    AUTHENTICATION_REQUIRED = "authentication_required"
    PREMIUM_REQUIRED = "premium_required"


@dataclass(frozen=True)
class ArticleFilter:
    """Store-level listing filter. `search` is a case-sensitive substring."""

    published: bool = True
    tag_slug: str | None = None
    search: str | None = None
    exclude_slug: str | None = None
    author_role: str | None = None
    author_id: str | None = None


@dataclass(frozen=True)
class ListArticlesInput:
    session: SessionIdentity | None = None
    page: int = 1
    limit: int = 10
    tag: str | None = None
    search: str | None = None
    drafts: bool = False
    exclude: str | None = None
    author_role: str | None = None
    author_id: str | None = None


@dataclass(frozen=True)
class CreateArticleInput:
    session: SessionIdentity | None
    title: str | None = None
    excerpt: str | None = None
    content: str | None = None
    featured: bool = False
    trending: bool = False
    premium: bool = False
    read_time: int = 0
    cover_image: str | None = None
    tag_ids: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class GetArticleInput:
    session: SessionIdentity | None
    article_id: str


@dataclass(frozen=True)
class UpdateArticleInput:
    """Partial update; None leaves a field as stored."""

    session: SessionIdentity | None
    article_id: str
    title: str | None = None
    excerpt: str | None = None
    content: str | None = None
    featured: bool | None = None
    trending: bool | None = None
    premium: bool | None = None
    read_time: int | None = None
    cover_image: str | None = None
    published: bool | None = None
    tag_ids: list[str] | None = None


@dataclass(frozen=True)
class DeleteArticleInput:
    session: SessionIdentity | None
    article_id: str


@dataclass(frozen=True)
class GetBySlugInput:
    session: SessionIdentity | None
    slug: str


@dataclass(frozen=True)
class ListArticlesOutput:
    articles: list[Article]
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        return -(-self.total // self.limit)


@dataclass(frozen=True)
class ArticleOutput:
    success: bool
    article: Article | None = None
    errors: list[ValidationError] = field(default_factory=list)


@dataclass(frozen=True)
class ArticleView:
    """A reader's view of one article; `content` is blank when locked."""

    article: Article
    content: str
    locked: bool
    lock_reason: LockReason


@dataclass(frozen=True)
class GetBySlugOutput:
    success: bool
    view: ArticleView | None = None
    errors: list[ValidationError] = field(default_factory=list)
