"""
Article component.

Listing, reading and editing articles, plus aggregations over them: authors
with article counts and the admin dashboard totals.

Editing is open to ADMIN and AUTHOR sessions; an author may change only
their own articles.
"""

from __future__ import annotations

from dataclasses import replace
from uuid import UUID

from abtech.components.articles.models import (
    AdminStatsInput,
    AdminStatsOutput,
    ArticleFilter,
    ArticleOutput,
    ArticleView,
    AuthorCount,
    AuthorRow,
    CreateArticleInput,
    DeleteArticleInput,
    GetArticleInput,
    GetBySlugInput,
    GetBySlugOutput,
    ListArticlesInput,
    ListArticlesOutput,
    ListAuthorsInput,
    ListAuthorsOutput,
    LockReason,
    UpdateArticleInput,
    ValidationError,
)
from abtech.components.articles.ports import (
    ArticleRepoPort,
    TagLookupPort,
    UserCountPort,
    UserLookupPort,
)
from abtech.components.tags import slugify
from abtech.core.entities import Article, Role, SessionIdentity, Tag, new_id, utc_now

RECENT_ARTICLES = 5
UNKNOWN_AUTHOR = "Unknown"

EDITOR_ROLES = (Role.ADMIN.value, Role.AUTHOR.value)

ERRORS = {
    "UNAUTHORIZED": ValidationError("UNAUTHORIZED", "Unauthorized"),
    "FORBIDDEN": ValidationError("FORBIDDEN", "Forbidden"),
    "NOT_FOUND": ValidationError("NOT_FOUND", "Article not found"),
    "MISSING_FIELDS": ValidationError("MISSING_FIELDS", "Missing required fields"),
    "INVALID_TITLE": ValidationError(
        "INVALID_TITLE", "Title must contain letters or digits", "title"
    ),
    "DUPLICATE": ValidationError("DUPLICATE", "Article with this title already exists", "title"),
    "UNKNOWN_TAG": ValidationError("UNKNOWN_TAG", "Unknown tag", "tagIds"),
}


def count_authors(rows: list[AuthorRow]) -> list[AuthorCount]:
    """Group rows by author id; rows without an author are skipped."""
    counts: dict[str, list] = {}
    for row in rows:
        if row.author_id is None:
            continue
        key = str(row.author_id)
        entry = counts.setdefault(key, [row.author_name, 0])
        entry[1] += 1
        if not entry[0] and row.author_name:
            entry[0] = row.author_name

    ordered = sorted(counts.items(), key=lambda kv: (kv[1][0] or "").lower())
    return [
        AuthorCount(id=key, name=name or UNKNOWN_AUTHOR, count=count)
        for key, (name, count) in ordered
    ]


def run_list_authors(inp: ListAuthorsInput, repo: ArticleRepoPort) -> ListAuthorsOutput:
    return ListAuthorsOutput(authors=count_authors(repo.list_author_rows(inp.published)))


def run_admin_stats(
    inp: AdminStatsInput,
    repo: ArticleRepoPort,
    users: UserCountPort,
) -> AdminStatsOutput:
    if inp.session is None or inp.session.role != Role.ADMIN.value:
        return AdminStatsOutput(
            success=False,
            errors=[ValidationError("UNAUTHORIZED", "Unauthorized")],
        )

    return AdminStatsOutput(
        success=True,
        total_articles=repo.count_published(),
        total_users=users.count(),
        total_views=repo.sum_published_views() or 0,
        recent_articles=repo.recent_published(RECENT_ARTICLES),
    )


# --- Article CRUD ---


def can_edit(session: SessionIdentity | None) -> bool:
    return session is not None and session.role in EDITOR_ROLES


def can_read_premium(session: SessionIdentity | None, article: Article) -> bool:
    if session is None:
        return False
    if session.role in (Role.ADMIN.value, Role.PREMIUM_USER.value):
        return True
    return session.role == Role.AUTHOR.value and article.is_owned_by(session)


def can_see_draft(session: SessionIdentity | None, article: Article) -> bool:
    if session is None:
        return False
    if session.is_admin:
        return True
    return session.role == Role.AUTHOR.value and article.is_owned_by(session)


def lock_reason(session: SessionIdentity | None, article: Article) -> LockReason:
    if not article.premium or can_read_premium(session, article):
        return LockReason.NONE
    if session is None:
        return LockReason.AUTHENTICATION_REQUIRED
    return LockReason.PREMIUM_REQUIRED


def _parse_id(value: str | None) -> UUID | None:
    try:
        return UUID(str(value))
    except ValueError:
        return None


def _failure(code: str) -> ArticleOutput:
    return ArticleOutput(success=False, errors=[ERRORS[code]])


def resolve_tags(tag_ids: list[str], tags: TagLookupPort) -> list[Tag] | None:
    """The tags named by `tag_ids`, or None when any id is unknown."""
    ids = []
    for raw in dict.fromkeys(tag_ids):
        parsed = _parse_id(raw)
        if parsed is None:
            return None
        ids.append(parsed)
    found = tags.get_many(ids)
    return found if len(found) == len(ids) else None


def _editable(
    session: SessionIdentity | None, article_id: str, repo: ArticleRepoPort
) -> Article | ArticleOutput:
    """The article when `session` may change it, otherwise the failure to report."""
    if not can_edit(session):
        return _failure("UNAUTHORIZED")
    parsed = _parse_id(article_id)
    article = repo.get_by_id(parsed) if parsed else None
    if article is None:
        return _failure("NOT_FOUND")
    if not session.is_admin and not article.is_owned_by(session):
        return _failure("FORBIDDEN")
    return article


def run_list_articles(inp: ListArticlesInput, repo: ArticleRepoPort) -> ListArticlesOutput:
    """Drafts are listed only for editors who ask for them."""
    page = max(inp.page, 1)
    limit = max(inp.limit, 1)
    search = (inp.search or "").strip()
    filters = ArticleFilter(
        published=not (inp.drafts and can_edit(inp.session)),
        tag_slug=inp.tag or None,
        search=search or None,
        exclude_slug=inp.exclude or None,
        author_role=inp.author_role or None,
        author_id=inp.author_id or None,
    )
    articles, total = repo.list_articles(filters, offset=(page - 1) * limit, limit=limit)
    return ListArticlesOutput(articles=articles, page=page, limit=limit, total=total)


def run_create_article(
    inp: CreateArticleInput,
    repo: ArticleRepoPort,
    tags: TagLookupPort,
    users: UserLookupPort,
) -> ArticleOutput:
    if not can_edit(inp.session):
        return _failure("UNAUTHORIZED")
    author_id = _parse_id(inp.session.user_id)
    author = users.get_by_id(author_id) if author_id else None
    if author is None:
        return _failure("UNAUTHORIZED")

    if not inp.title or not inp.excerpt or not inp.content:
        return _failure("MISSING_FIELDS")
    slug = slugify(inp.title)
    if not slug:
        return _failure("INVALID_TITLE")
    if repo.slug_exists(slug):
        return _failure("DUPLICATE")

    linked = resolve_tags(inp.tag_ids, tags)
    if linked is None:
        return _failure("UNKNOWN_TAG")

    now = utc_now()
    article = Article(
        id=new_id(),
        title=inp.title,
        slug=slug,
        excerpt=inp.excerpt,
        content=inp.content,
        author_id=author.id,
        published=True,
        premium=inp.premium,
        featured=inp.featured,
        trending=inp.trending,
        read_time=inp.read_time,
        cover_image=inp.cover_image,
        published_at=now,
        created_at=now,
        updated_at=now,
        tags=linked,
        author_name=author.name,
    )
    repo.save(article)
    return ArticleOutput(success=True, article=article)


def run_get_article(inp: GetArticleInput, repo: ArticleRepoPort) -> ArticleOutput:
    """Editor read by id, drafts included. Ownership is not checked."""
    if not can_edit(inp.session):
        return _failure("UNAUTHORIZED")
    parsed = _parse_id(inp.article_id)
    article = repo.get_by_id(parsed) if parsed else None
    if article is None:
        return _failure("NOT_FOUND")
    return ArticleOutput(success=True, article=article)


def run_update_article(
    inp: UpdateArticleInput,
    repo: ArticleRepoPort,
    tags: TagLookupPort,
) -> ArticleOutput:
    found = _editable(inp.session, inp.article_id, repo)
    if isinstance(found, ArticleOutput):
        return found
    article = found

    changes: dict = {}
    if inp.title and inp.title != article.title:
        slug = slugify(inp.title)
        if not slug:
            return _failure("INVALID_TITLE")
        if repo.slug_exists(slug, exclude_id=article.id):
            return _failure("DUPLICATE")
        changes.update(title=inp.title, slug=slug)
    for name in ("excerpt", "content", "featured", "trending", "premium", "read_time"):
        value = getattr(inp, name)
        if value is not None:
            changes[name] = value
    if inp.cover_image is not None:
        changes["cover_image"] = inp.cover_image or None
    if inp.published is not None:
        changes["published"] = inp.published
        changes["published_at"] = utc_now() if inp.published else None
    if inp.tag_ids is not None:
        linked = resolve_tags(inp.tag_ids, tags)
        if linked is None:
            return _failure("UNKNOWN_TAG")
        changes["tags"] = linked

    updated = replace(article, updated_at=utc_now(), **changes)
    repo.save(updated)
    return ArticleOutput(success=True, article=updated)


def run_delete_article(inp: DeleteArticleInput, repo: ArticleRepoPort) -> ArticleOutput:
    found = _editable(inp.session, inp.article_id, repo)
    if isinstance(found, ArticleOutput):
        return found
    repo.delete(found.id)
    return ArticleOutput(success=True, article=found)


def run_get_by_slug(inp: GetBySlugInput, repo: ArticleRepoPort) -> GetBySlugOutput:
    """
    Reader view of one article.

    Drafts read as missing unless the caller is an admin or the owning
    author. Premium content is blanked for everyone else who is not a
    premium member.
    """
    article = repo.get_by_slug(inp.slug)
    if article is None or (not article.published and not can_see_draft(inp.session, article)):
        return GetBySlugOutput(success=False, errors=[ERRORS["NOT_FOUND"]])

    reason = lock_reason(inp.session, article)
    locked = reason is not LockReason.NONE
    view = ArticleView(
        article=article,
        content="" if locked else article.content,
        locked=locked,
        lock_reason=reason,
    )
    return GetBySlugOutput(success=True, view=view)


def run(
    inp: ListAuthorsInput
    | AdminStatsInput
    | ListArticlesInput
    | CreateArticleInput
    | GetArticleInput
    | UpdateArticleInput
    | DeleteArticleInput
    | GetBySlugInput,
    *,
    repo: ArticleRepoPort,
    users: UserCountPort | UserLookupPort,
    tags: TagLookupPort | None = None,
) -> (
    ListAuthorsOutput | AdminStatsOutput | ListArticlesOutput | ArticleOutput | GetBySlugOutput
):
    if isinstance(inp, ListAuthorsInput):
        return run_list_authors(inp, repo)
    elif isinstance(inp, AdminStatsInput):
        return run_admin_stats(inp, repo, users)
    elif isinstance(inp, ListArticlesInput):
        return run_list_articles(inp, repo)
    elif isinstance(inp, CreateArticleInput):
        return run_create_article(inp, repo, tags, users)
    elif isinstance(inp, GetArticleInput):
        return run_get_article(inp, repo)
    elif isinstance(inp, UpdateArticleInput):
        return run_update_article(inp, repo, tags)
    elif isinstance(inp, DeleteArticleInput):
        return run_delete_article(inp, repo)
    elif isinstance(inp, GetBySlugInput):
        return run_get_by_slug(inp, repo)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
