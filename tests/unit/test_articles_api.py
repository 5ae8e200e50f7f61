"""
Tests for the article API: listing, editing and the reader view.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from abtech.adapters.sqlite.catalog import SQLiteArticleRepo, SQLiteTagRepo, SQLiteUserRepo
from abtech.core.entities import Article, Tag, User


@pytest.fixture
def article_repo(db_path: str) -> SQLiteArticleRepo:
    return SQLiteArticleRepo(db_path)


@pytest.fixture
def writer(db_path: str) -> User:
    user = User(id=uuid4(), email="wanjiru@abtech.test", name="Wanjiru", role="AUTHOR")
    SQLiteUserRepo(db_path).save(user)
    return user


@pytest.fixture
def other_writer(db_path: str) -> User:
    user = User(id=uuid4(), email="kofi@abtech.test", name="Kofi", role="AUTHOR")
    SQLiteUserRepo(db_path).save(user)
    return user


@pytest.fixture
def writer_headers(writer: User, session_headers) -> dict[str, str]:
    return session_headers("AUTHOR", str(writer.id), writer.email)


@pytest.fixture
def python_tag(db_path: str) -> Tag:
    tag = Tag(id=uuid4(), name="Python", slug="python")
    SQLiteTagRepo(db_path).save(tag)
    return tag


def add_article(
    repo: SQLiteArticleRepo,
    author: User,
    title: str,
    *,
    published: bool = True,
    premium: bool = False,
    age: int = 0,
    tags: list[Tag] | None = None,
) -> Article:
    return repo.save(
        Article(
            id=uuid4(),
            title=title,
            slug=title.lower().replace(" ", "-"),
            excerpt=f"About {title}",
            content=f"Body of {title}",
            author_id=author.id,
            published=published,
            premium=premium,
            published_at=datetime.now(UTC) - timedelta(days=age) if published else None,
            tags=tags or [],
        )
    )


ARTICLE_FORM = {
    "title": "Async Python in Practice",
    "excerpt": "Event loops without tears",
    "content": "Long form body",
    "readTime": 7,
}


class TestListArticles:
    def test_newest_first_with_pagination(
        self, client: TestClient, article_repo: SQLiteArticleRepo, writer: User
    ) -> None:
        for age in range(3):
            add_article(article_repo, writer, f"Post {age}", age=age)

        response = client.get("/api/articles", params={"page": 2, "limit": 2})

        assert response.status_code == 200
        data = response.json()
        assert [a["title"] for a in data["articles"]] == ["Post 2"]
        assert data["pagination"] == {"page": 2, "limit": 2, "total": 3, "pages": 2}
        assert "content" not in data["articles"][0]
        assert data["articles"][0]["authorName"] == "Wanjiru"

    def test_drafts_hidden_from_readers(
        self,
        client: TestClient,
        article_repo: SQLiteArticleRepo,
        writer: User,
        user_headers: dict[str, str],
        admin_headers: dict[str, str],
    ) -> None:
        add_article(article_repo, writer, "Live")
        add_article(article_repo, writer, "Draft", published=False)

        public = client.get("/api/articles", params={"drafts": "true"}, headers=user_headers)
        editor = client.get("/api/articles", params={"drafts": "true"}, headers=admin_headers)

        assert [a["title"] for a in public.json()["articles"]] == ["Live"]
        assert [a["title"] for a in editor.json()["articles"]] == ["Draft"]

    def test_tag_search_and_exclude(
        self,
        client: TestClient,
        article_repo: SQLiteArticleRepo,
        writer: User,
        python_tag: Tag,
    ) -> None:
        add_article(article_repo, writer, "Python Tips", tags=[python_tag])
        add_article(article_repo, writer, "Python Tricks", tags=[python_tag], age=1)
        add_article(article_repo, writer, "Go Tips")

        tagged = client.get("/api/articles", params={"tag": "python", "exclude": "python-tips"})
        searched = client.get("/api/articles", params={"search": "Tips"})
        lowercase = client.get("/api/articles", params={"search": "tips"})

        assert [a["title"] for a in tagged.json()["articles"]] == ["Python Tricks"]
        assert tagged.json()["articles"][0]["tags"][0]["slug"] == "python"
        assert {a["title"] for a in searched.json()["articles"]} == {"Python Tips", "Go Tips"}
        assert lowercase.json()["pagination"]["total"] == 0

    def test_non_integer_page_is_422(self, client: TestClient) -> None:
        assert client.get("/api/articles", params={"page": "two"}).status_code == 422


class TestCreateArticle:
    def test_author_creates_published_article(
        self,
        client: TestClient,
        writer: User,
        writer_headers: dict[str, str],
        python_tag: Tag,
    ) -> None:
        form = {**ARTICLE_FORM, "tagIds": [str(python_tag.id)]}

        response = client.post("/api/articles", json=form, headers=writer_headers)

        assert response.status_code == 201
        article = response.json()
        assert article["slug"] == "async-python-in-practice"
        assert article["published"] is True
        assert article["authorId"] == str(writer.id)
        assert article["readTime"] == 7
        assert [t["name"] for t in article["tags"]] == ["Python"]

    def test_anonymous_and_readers_unauthorized(
        self, client: TestClient, user_headers: dict[str, str]
    ) -> None:
        assert client.post("/api/articles", json=ARTICLE_FORM).status_code == 401
        response = client.post("/api/articles", json=ARTICLE_FORM, headers=user_headers)

        assert response.status_code == 401
        assert response.json() == {"message": "Unauthorized"}

    def test_session_without_user_row_unauthorized(
        self, client: TestClient, session_headers
    ) -> None:
        headers = session_headers("AUTHOR", str(uuid4()))

        response = client.post("/api/articles", json=ARTICLE_FORM, headers=headers)

        assert response.status_code == 401

    def test_missing_fields(self, client: TestClient, writer_headers: dict[str, str]) -> None:
        form = {**ARTICLE_FORM, "content": ""}

        response = client.post("/api/articles", json=form, headers=writer_headers)

        assert response.status_code == 400
        assert response.json() == {"message": "Missing required fields"}

    def test_duplicate_title(self, client: TestClient, writer_headers: dict[str, str]) -> None:
        client.post("/api/articles", json=ARTICLE_FORM, headers=writer_headers)

        response = client.post("/api/articles", json=ARTICLE_FORM, headers=writer_headers)

        assert response.status_code == 400
        assert response.json() == {"message": "Article with this title already exists"}

    def test_unknown_tag(self, client: TestClient, writer_headers: dict[str, str]) -> None:
        form = {**ARTICLE_FORM, "tagIds": [str(uuid4())]}

        response = client.post("/api/articles", json=form, headers=writer_headers)

        assert response.status_code == 400
        assert response.json() == {"message": "Unknown tag"}


class TestArticleById:
    def test_editor_reads_draft(
        self,
        client: TestClient,
        article_repo: SQLiteArticleRepo,
        writer: User,
        admin_headers: dict[str, str],
    ) -> None:
        draft = add_article(article_repo, writer, "Draft", published=False)

        response = client.get(f"/api/articles/{draft.id}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["content"] == "Body of Draft"

    def test_reader_unauthorized_and_unknown_404(
        self,
        client: TestClient,
        article_repo: SQLiteArticleRepo,
        writer: User,
        user_headers: dict[str, str],
        admin_headers: dict[str, str],
    ) -> None:
        article = add_article(article_repo, writer, "Live")

        assert client.get(f"/api/articles/{article.id}", headers=user_headers).status_code == 401
        response = client.get(f"/api/articles/{uuid4()}", headers=admin_headers)

        assert response.status_code == 404
        assert response.json() == {"message": "Article not found"}

    def test_owner_updates_and_unpublishes(
        self,
        client: TestClient,
        article_repo: SQLiteArticleRepo,
        writer: User,
        writer_headers: dict[str, str],
        python_tag: Tag,
    ) -> None:
        article = add_article(article_repo, writer, "Old Title", tags=[python_tag])

        response = client.put(
            f"/api/articles/{article.id}",
            json={"title": "New Title", "published": False},
            headers=writer_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["slug"] == "new-title"
        assert data["published"] is False
        assert data["publishedAt"] is None
        # Tags untouched when tagIds is omitted.
        assert [t["slug"] for t in data["tags"]] == ["python"]
        assert article_repo.get_by_slug("new-title") is not None

    def test_other_author_forbidden(
        self,
        client: TestClient,
        article_repo: SQLiteArticleRepo,
        other_writer: User,
        writer_headers: dict[str, str],
    ) -> None:
        article = add_article(article_repo, other_writer, "Not Yours")

        update = client.put(
            f"/api/articles/{article.id}", json={"title": "Mine"}, headers=writer_headers
        )
        delete = client.delete(f"/api/articles/{article.id}", headers=writer_headers)

        assert update.status_code == 403
        assert update.json() == {"message": "Forbidden"}
        assert delete.status_code == 403
        assert article_repo.get_by_id(article.id) is not None

    def test_admin_deletes(
        self,
        client: TestClient,
        article_repo: SQLiteArticleRepo,
        writer: User,
        admin_headers: dict[str, str],
    ) -> None:
        article = add_article(article_repo, writer, "Doomed")

        response = client.delete(f"/api/articles/{article.id}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Article deleted successfully"}
        assert article_repo.get_by_id(article.id) is None
        again = client.delete(f"/api/articles/{article.id}", headers=admin_headers)
        assert again.status_code == 404


class TestArticleBySlug:
    def test_free_article_open(
        self, client: TestClient, article_repo: SQLiteArticleRepo, writer: User
    ) -> None:
        add_article(article_repo, writer, "Open Post")

        response = client.get("/api/articles/by-slug/open-post")

        assert response.status_code == 200
        data = response.json()
        assert data["locked"] is False
        assert data["lockReason"] == "none"
        assert data["article"]["content"] == "Body of Open Post"

    def test_premium_locked_for_anonymous_and_free(
        self,
        client: TestClient,
        article_repo: SQLiteArticleRepo,
        writer: User,
        user_headers: dict[str, str],
    ) -> None:
        add_article(article_repo, writer, "Paid Post", premium=True)

        anonymous = client.get("/api/articles/by-slug/paid-post").json()
        free = client.get("/api/articles/by-slug/paid-post", headers=user_headers).json()

        assert anonymous["lockReason"] == "authentication_required"
        assert anonymous["article"]["content"] == ""
        assert free["locked"] is True
        assert free["lockReason"] == "premium_required"

    def test_premium_member_reads(
        self,
        client: TestClient,
        article_repo: SQLiteArticleRepo,
        writer: User,
        session_headers,
    ) -> None:
        add_article(article_repo, writer, "Paid Post", premium=True)
        headers = session_headers("PREMIUM_USER", "member-1")

        data = client.get("/api/articles/by-slug/paid-post", headers=headers).json()

        assert data["locked"] is False
        assert data["article"]["content"] == "Body of Paid Post"

    def test_draft_visible_to_owner_only(
        self,
        client: TestClient,
        article_repo: SQLiteArticleRepo,
        writer: User,
        writer_headers: dict[str, str],
    ) -> None:
        add_article(article_repo, writer, "Hidden Draft", published=False)

        assert client.get("/api/articles/by-slug/hidden-draft").status_code == 404
        response = client.get("/api/articles/by-slug/hidden-draft", headers=writer_headers)

        assert response.status_code == 200
