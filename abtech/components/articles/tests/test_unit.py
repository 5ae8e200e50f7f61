"""Article component unit tests."""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import uuid4

import pytest

from abtech.components.articles import (
    AdminStatsInput,
    ArticleFilter,
    AuthorRow,
    CreateArticleInput,
    DeleteArticleInput,
    GetArticleInput,
    GetBySlugInput,
    ListArticlesInput,
    ListAuthorsInput,
    LockReason,
    RecentArticle,
    UpdateArticleInput,
    count_authors,
    run,
)
from abtech.core.entities import Article, SessionIdentity, Tag, User

ADA = uuid4()
BOB = uuid4()
GHOST = uuid4()


class MockArticleRepo:
    def __init__(self) -> None:
        self.rows = [
            (AuthorRow(BOB, "bob"), True),
            (AuthorRow(ADA, "Ada"), True),
            (AuthorRow(ADA, "Ada"), False),
            (AuthorRow(GHOST, None), True),
            (AuthorRow(None, None), True),
        ]
        self.recent = [
            RecentArticle(uuid4(), "Newest", 10, datetime(2025, 2, 1, tzinfo=UTC)),
        ]

    def list_author_rows(self, published: bool | None = None) -> list[AuthorRow]:
        return [r for r, pub in self.rows if published is None or pub == published]

    def count_published(self) -> int:
        return 4

    def sum_published_views(self) -> int:
        return 120

    def recent_published(self, limit: int) -> list[RecentArticle]:
        return self.recent[:limit]


class MockUsers:
    def count(self) -> int:
        return 7


@pytest.fixture
def deps():
    return {"repo": MockArticleRepo(), "users": MockUsers()}


class TestAuthors:
    def test_counts_and_sorting(self, deps) -> None:
        out = run(ListAuthorsInput(), **deps)

        assert [(a.name, a.count) for a in out.authors] == [
            ("Unknown", 1),
            ("Ada", 2),
            ("bob", 1),
        ]

    def test_published_filter(self, deps) -> None:
        out = run(ListAuthorsInput(published=False), **deps)
        assert [(a.name, a.count) for a in out.authors] == [("Ada", 1)]

    def test_name_backfilled_from_later_row(self) -> None:
        rows = [AuthorRow(ADA, None), AuthorRow(ADA, "Ada")]
        assert count_authors(rows)[0].name == "Ada"


class TestAdminStats:
    def test_admin(self, deps) -> None:
        session = SessionIdentity(user_id="u1", role="ADMIN")

        out = run(AdminStatsInput(session), **deps)

        assert out.success
        assert out.total_articles == 4
        assert out.total_users == 7
        assert out.total_views == 120
        assert out.recent_articles[0].title == "Newest"

    @pytest.mark.parametrize("role", ["MODERATOR", "FREE_USER"])
    def test_non_admin(self, deps, role: str) -> None:
        out = run(AdminStatsInput(SessionIdentity(user_id="u1", role=role)), **deps)
        assert out.errors[0].code == "UNAUTHORIZED"

    def test_anonymous(self, deps) -> None:
        assert not run(AdminStatsInput(None), **deps).success


# --- Article CRUD ---


class ArticleStore:
    """Dict-backed article repo; filters cover what the component passes through."""

    def __init__(self) -> None:
        self.articles: dict = {}
        self.last_filter: ArticleFilter | None = None

    def save(self, article: Article) -> Article:
        self.articles[article.id] = article
        return article

    def get_by_id(self, article_id) -> Article | None:
        return self.articles.get(article_id)

    def get_by_slug(self, slug: str) -> Article | None:
        return next((a for a in self.articles.values() if a.slug == slug), None)

    def slug_exists(self, slug: str, exclude_id=None) -> bool:
        found = self.get_by_slug(slug)
        return found is not None and found.id != exclude_id

    def delete(self, article_id) -> bool:
        return self.articles.pop(article_id, None) is not None

    def list_articles(self, filters: ArticleFilter, offset: int, limit: int):
        self.last_filter = filters
        found = [a for a in self.articles.values() if a.published == filters.published]
        return found[offset : offset + limit], len(found)


class TagStore:
    def __init__(self, tags: list[Tag]) -> None:
        self.tags = {t.id: t for t in tags}

    def get_many(self, ids) -> list[Tag]:
        return [self.tags[i] for i in ids if i in self.tags]


class UserStore:
    def __init__(self, users: list[User]) -> None:
        self.users = {u.id: u for u in users}

    def get_by_id(self, user_id) -> User | None:
        return self.users.get(user_id)


WRITER = User(id=uuid4(), email="w@abtech.test", name="Writer", role="AUTHOR")
RIVAL = User(id=uuid4(), email="r@abtech.test", name="Rival", role="AUTHOR")
PYTHON = Tag(id=uuid4(), name="Python", slug="python")


def session(role: str, user: User | None = None) -> SessionIdentity:
    return SessionIdentity(user_id=str(user.id) if user else "someone", role=role)


@pytest.fixture
def crud():
    return {
        "repo": ArticleStore(),
        "users": UserStore([WRITER, RIVAL]),
        "tags": TagStore([PYTHON]),
    }


def create(crud, title: str = "Hello World", user: User = WRITER, **kw):
    inp = CreateArticleInput(
        session=session("AUTHOR", user), title=title, excerpt="e", content="c", **kw
    )
    return run(inp, **crud)


class TestCreateArticle:
    def test_slug_author_and_tags(self, crud) -> None:
        out = create(crud, "Hello, World!", tag_ids=[str(PYTHON.id), str(PYTHON.id)])

        assert out.success
        assert out.article.slug == "hello-world"
        assert out.article.author_id == WRITER.id
        assert out.article.author_name == "Writer"
        assert out.article.tags == [PYTHON]
        assert out.article.published_at is not None

    @pytest.mark.parametrize("role", ["FREE_USER", "PREMIUM_USER", "MODERATOR"])
    def test_non_editors_unauthorized(self, crud, role: str) -> None:
        inp = CreateArticleInput(session=session(role, WRITER), title="T", excerpt="e", content="c")
        assert run(inp, **crud).errors[0].code == "UNAUTHORIZED"

    def test_unknown_user_unauthorized(self, crud) -> None:
        stranger = User(id=uuid4(), email="s@x", name="S")
        assert create(crud, user=stranger).errors[0].code == "UNAUTHORIZED"

    def test_title_without_letters(self, crud) -> None:
        assert create(crud, "!!!").errors[0].code == "INVALID_TITLE"

    def test_duplicate_and_unknown_tag(self, crud) -> None:
        create(crud)

        assert create(crud).errors[0].code == "DUPLICATE"
        assert create(crud, "Other", tag_ids=["nope"]).errors[0].code == "UNKNOWN_TAG"


class TestEditArticle:
    def test_owner_updates_title_and_slug(self, crud) -> None:
        article = create(crud).article

        out = run(
            UpdateArticleInput(
                session("AUTHOR", WRITER), str(article.id), title="Fresh Title", tag_ids=[]
            ),
            **crud,
        )

        assert out.article.slug == "fresh-title"
        assert out.article.tags == []
        assert out.article.excerpt == "e"

    def test_unpublish_clears_published_at(self, crud) -> None:
        article = create(crud).article

        out = run(
            UpdateArticleInput(session("ADMIN"), str(article.id), published=False), **crud
        )

        assert out.article.published is False
        assert out.article.published_at is None

    def test_rival_author_forbidden(self, crud) -> None:
        article = create(crud).article

        update = run(UpdateArticleInput(session("AUTHOR", RIVAL), str(article.id)), **crud)
        delete = run(DeleteArticleInput(session("AUTHOR", RIVAL), str(article.id)), **crud)

        assert update.errors[0].code == "FORBIDDEN"
        assert delete.errors[0].code == "FORBIDDEN"
        assert article.id in crud["repo"].articles

    def test_get_requires_editor(self, crud) -> None:
        article = create(crud).article

        assert run(GetArticleInput(None, str(article.id)), **crud).errors[0].code == "UNAUTHORIZED"
        assert run(GetArticleInput(session("ADMIN"), "bad-id"), **crud).errors[0].code == (
            "NOT_FOUND"
        )


class TestListArticles:
    def test_page_and_limit_clamped(self, crud) -> None:
        out = run(ListArticlesInput(page=0, limit=-5), **crud)

        assert (out.page, out.limit) == (1, 1)
        assert out.pages == 0

    def test_drafts_only_for_editors(self, crud) -> None:
        run(ListArticlesInput(session=session("FREE_USER"), drafts=True), **crud)
        assert crud["repo"].last_filter.published is True

        run(ListArticlesInput(session=session("AUTHOR", WRITER), drafts=True), **crud)
        assert crud["repo"].last_filter.published is False

    def test_blank_search_dropped(self, crud) -> None:
        run(ListArticlesInput(search="   ", tag=""), **crud)

        assert crud["repo"].last_filter.search is None
        assert crud["repo"].last_filter.tag_slug is None


class TestReaderView:
    @pytest.fixture
    def premium(self, crud) -> Article:
        return create(crud, "Deep Dive", premium=True).article

    @pytest.mark.parametrize(
        "reader,reason",
        [
            (None, LockReason.AUTHENTICATION_REQUIRED),
            (session("FREE_USER"), LockReason.PREMIUM_REQUIRED),
            (session("AUTHOR", RIVAL), LockReason.PREMIUM_REQUIRED),
            (session("AUTHOR", WRITER), LockReason.NONE),
            (session("PREMIUM_USER"), LockReason.NONE),
            (session("ADMIN"), LockReason.NONE),
        ],
    )
    def test_lock_reason(self, crud, premium: Article, reader, reason: LockReason) -> None:
        view = run(GetBySlugInput(reader, "deep-dive"), **crud).view

        assert view.lock_reason is reason
        assert view.locked is (reason is not LockReason.NONE)
        assert view.content == ("" if view.locked else premium.content)

    def test_draft_hidden_from_rival(self, crud) -> None:
        article = create(crud, "Secret").article
        article.published = False

        assert not run(GetBySlugInput(session("AUTHOR", RIVAL), "secret"), **crud).success
        assert run(GetBySlugInput(session("AUTHOR", WRITER), "secret"), **crud).success
