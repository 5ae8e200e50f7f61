"""Article component: listing, editing, reader view and aggregations."""

from abtech.components.articles.component import (
    EDITOR_ROLES,
    can_edit,
    can_read_premium,
    count_authors,
    lock_reason,
    resolve_tags,
    run,
    run_admin_stats,
    run_create_article,
    run_delete_article,
    run_get_article,
    run_get_by_slug,
    run_list_articles,
    run_list_authors,
    run_update_article,
)
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
    RecentArticle,
    UpdateArticleInput,
    ValidationError,
)
from abtech.components.articles.ports import (
    ArticleRepoPort,
    TagLookupPort,
    UserCountPort,
    UserLookupPort,
)

__all__ = [
    # Component
    "run",
    "run_list_authors",
    "run_admin_stats",
    "run_list_articles",
    "run_create_article",
    "run_get_article",
    "run_update_article",
    "run_delete_article",
    "run_get_by_slug",
    # Pure functions
    "count_authors",
    "can_edit",
    "can_read_premium",
    "lock_reason",
    "resolve_tags",
    "EDITOR_ROLES",
    # Models
    "AdminStatsInput",
    "AdminStatsOutput",
    "ArticleFilter",
    "ArticleOutput",
    "ArticleView",
    "AuthorCount",
    "AuthorRow",
    "CreateArticleInput",
    "DeleteArticleInput",
    "GetArticleInput",
    "GetBySlugInput",
    "GetBySlugOutput",
    "ListArticlesInput",
    "ListArticlesOutput",
    "ListAuthorsInput",
    "ListAuthorsOutput",
    "LockReason",
    "RecentArticle",
    "UpdateArticleInput",
    "ValidationError",
    # Ports
    "ArticleRepoPort",
    "TagLookupPort",
    "UserCountPort",
    "UserLookupPort",
]
