"""Article component ports."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from abtech.components.articles.models import ArticleFilter, AuthorRow, RecentArticle
from abtech.core.entities import Article, Tag, User


class ArticleRepoPort(Protocol):
    def save(self, article: Article) -> Article:
        """Upsert; the stored tag links are replaced with `article.tags`."""
        ...

    def get_by_id(self, article_id: UUID) -> Article | None:
        ...

    def get_by_slug(self, slug: str) -> Article | None:
        ...

    def slug_exists(self, slug: str, exclude_id: UUID | None = None) -> bool:
        ...

    def delete(self, article_id: UUID) -> bool:
        ...

    def list_articles(
        self, filters: ArticleFilter, offset: int, limit: int
    ) -> tuple[list[Article], int]:
        """One page, newest publishedAt first, plus the total match count."""
        ...

    def list_author_rows(self, published: bool | None = None) -> list[AuthorRow]:
        ...

    def count_published(self) -> int:
        ...

    def sum_published_views(self) -> int:
        ...

    def recent_published(self, limit: int) -> list[RecentArticle]:
        """Published articles, newest publishedAt first."""
        ...


class TagLookupPort(Protocol):
    def get_many(self, ids: list[UUID]) -> list[Tag]:
        ...


class UserCountPort(Protocol):
    def count(self) -> int:
        ...


class UserLookupPort(Protocol):
    def get_by_id(self, user_id: UUID) -> User | None:
        ...
