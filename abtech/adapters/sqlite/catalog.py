"""
SQLite repositories for the public catalog: users, tags, courses, articles
and jobs.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime
from typing import Any
from uuid import UUID

from abtech.adapters.sqlite.base import (
    SQLiteRepoBase,
    escape_like,
    iso,
    parse_dt,
    parse_uuid,
)
from abtech.components.articles import ArticleFilter, AuthorRow, RecentArticle
from abtech.core.entities import (
    Article,
    Course,
    CourseModule,
    Job,
    JobApplication,
    JobSubmission,
    ModuleAsset,
    Tag,
    User,
)

# -----------------------------------------------------------------------------
# Users
# -----------------------------------------------------------------------------


class SQLiteUserRepo(SQLiteRepoBase):
    def save(self, user: User) -> User:
        self._execute(
            """
            INSERT INTO users (id, email, name, role, created_at)
            VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                email=excluded.email,
                name=excluded.name,
                role=excluded.role
            """,
            (str(user.id), user.email, user.name, user.role, iso(user.created_at)),
        )
        return user

    def get_by_id(self, user_id: UUID) -> User | None:
        row = self._fetchone("SELECT * FROM users WHERE id = ?", (str(user_id),))
        if not row:
            return None
        return User(
            id=UUID(row["id"]),
            email=row["email"],
            name=row["name"],
            role=row["role"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    def count(self) -> int:
        row = self._fetchone("SELECT COUNT(*) AS n FROM users")
        return int(row["n"]) if row else 0


# -----------------------------------------------------------------------------
# Tags
# -----------------------------------------------------------------------------


class SQLiteTagRepo(SQLiteRepoBase):
    """Implements TagRepoPort."""

    def list_all(self) -> list[Tag]:
        rows = self._fetchall("SELECT * FROM tags ORDER BY name ASC")
        return [self._map_row(r) for r in rows]

    def find_by_name_or_slug(self, name: str, slug: str) -> Tag | None:
        row = self._fetchone(
            "SELECT * FROM tags WHERE name = ? OR slug = ? LIMIT 1", (name, slug)
        )
        return self._map_row(row) if row else None

    def get_many(self, ids: list[UUID]) -> list[Tag]:
        if not ids:
            return []
        marks = ", ".join("?" for _ in ids)
        rows = self._fetchall(
            f"SELECT * FROM tags WHERE id IN ({marks}) ORDER BY name ASC",
            tuple(str(i) for i in ids),
        )
        return [self._map_row(r) for r in rows]

    def save(self, tag: Tag) -> Tag:
        self._execute(
            "INSERT INTO tags (id, name, slug, created_at) VALUES (?, ?, ?, ?)",
            (str(tag.id), tag.name, tag.slug, iso(tag.created_at)),
        )
        return tag

    def _map_row(self, row: dict[str, Any]) -> Tag:
        return Tag(
            id=UUID(row["id"]),
            name=row["name"],
            slug=row["slug"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )


# -----------------------------------------------------------------------------
# Courses
# -----------------------------------------------------------------------------


class SQLiteCourseRepo(SQLiteRepoBase):
    """Implements CourseRepoPort and CourseAdminRepoPort."""

    def save(self, course: Course) -> Course:
        """Upsert a course and replace its modules and assets."""
        conn = self._get_conn()
        try:
            self._upsert_row(conn, course)
            # Assets go with their modules via ON DELETE CASCADE.
            conn.execute("DELETE FROM course_modules WHERE course_id = ?", (str(course.id),))
            for module in course.modules:
                self._upsert_module(conn, module)
                for asset in module.assets:
                    conn.execute(
                        """
                        INSERT INTO module_assets (id, module_id, title, url, position)
                        VALUES (?, ?, ?, ?, ?)
                        """,
                        (str(asset.id), str(module.id), asset.title, asset.url, asset.position),
                    )
            if self._should_close():
                conn.commit()
            return course
        except Exception:
            if self._should_close():
                conn.rollback()
            raise
        finally:
            if self._should_close():
                conn.close()

    def update(self, course: Course) -> Course:
        """Write the course row only; modules are left as stored."""
        conn = self._get_conn()
        try:
            self._upsert_row(conn, course)
            if self._should_close():
                conn.commit()
            return course
        finally:
            if self._should_close():
                conn.close()

    def delete(self, course_id: UUID) -> bool:
        return self._execute("DELETE FROM courses WHERE id = ?", (str(course_id),)) > 0

    def list_published(self) -> list[Course]:
        rows = self._fetchall(
            """
            SELECT * FROM courses
            WHERE status = 'PUBLISHED' AND published = 1
            ORDER BY created_at DESC
            """
        )
        return [self._load_modules(self._map_row(r)) for r in rows]

    def list_all(self) -> list[Course]:
        rows = self._fetchall("SELECT * FROM courses ORDER BY created_at DESC")
        return [self._load_modules(self._map_row(r)) for r in rows]

    def get_by_slug(self, slug: str) -> Course | None:
        row = self._fetchone("SELECT * FROM courses WHERE slug = ?", (slug,))
        return self._load_modules(self._map_row(row)) if row else None

    def get_by_id(self, course_id: UUID) -> Course | None:
        row = self._fetchone("SELECT * FROM courses WHERE id = ?", (str(course_id),))
        return self._load_modules(self._map_row(row)) if row else None

    def slug_taken(self, slug: str, exclude_id: UUID | None = None) -> bool:
        row = self._fetchone(
            "SELECT 1 FROM courses WHERE slug = ? AND id != ? LIMIT 1",
            (slug, str(exclude_id) if exclude_id else ""),
        )
        return row is not None

    def increment_views(self, slug: str) -> tuple[UUID, int] | None:
        count = self._execute("UPDATE courses SET views = views + 1 WHERE slug = ?", (slug,))
        if count == 0:
            return None
        row = self._fetchone("SELECT id, views FROM courses WHERE slug = ?", (slug,))
        if not row:
            return None
        return UUID(row["id"]), int(row["views"])

    # --- Modules ---

    def count_modules(self, course_id: UUID) -> int:
        row = self._fetchone(
            "SELECT COUNT(*) AS n FROM course_modules WHERE course_id = ?", (str(course_id),)
        )
        return int(row["n"]) if row else 0

    def get_module(self, course_id: UUID, module_id: UUID) -> CourseModule | None:
        row = self._fetchone(
            "SELECT * FROM course_modules WHERE id = ? AND course_id = ?",
            (str(module_id), str(course_id)),
        )
        return self._map_module(row) if row else None

    def save_module(self, module: CourseModule) -> CourseModule:
        """Upsert the module row; its assets are untouched."""
        conn = self._get_conn()
        try:
            self._upsert_module(conn, module)
            if self._should_close():
                conn.commit()
            return module
        finally:
            if self._should_close():
                conn.close()

    def set_module_position(self, course_id: UUID, module_id: UUID, position: int) -> bool:
        count = self._execute(
            "UPDATE course_modules SET position = ? WHERE id = ? AND course_id = ?",
            (position, str(module_id), str(course_id)),
        )
        return count > 0

    def delete_module(self, course_id: UUID, module_id: UUID) -> bool:
        count = self._execute(
            "DELETE FROM course_modules WHERE id = ? AND course_id = ?",
            (str(module_id), str(course_id)),
        )
        return count > 0

    def _upsert_row(self, conn: sqlite3.Connection, course: Course) -> None:
        conn.execute(
            """
            INSERT INTO courses (
                id, title, slug, description, cover_image, level,
                views, status, published, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                title=excluded.title,
                slug=excluded.slug,
                description=excluded.description,
                cover_image=excluded.cover_image,
                level=excluded.level,
                views=excluded.views,
                status=excluded.status,
                published=excluded.published
            """,
            (
                str(course.id),
                course.title,
                course.slug,
                course.description,
                course.cover_image,
                course.level,
                course.views,
                course.status,
                int(course.published),
                iso(course.created_at),
            ),
        )

    def _upsert_module(self, conn: sqlite3.Connection, module: CourseModule) -> None:
        conn.execute(
            """
            INSERT INTO course_modules (id, course_id, title, description, position)
            VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                title=excluded.title,
                description=excluded.description,
                position=excluded.position
            """,
            (
                str(module.id),
                str(module.course_id),
                module.title,
                module.description,
                module.position,
            ),
        )

    def _load_modules(self, course: Course) -> Course:
        module_rows = self._fetchall(
            "SELECT * FROM course_modules WHERE course_id = ? ORDER BY position ASC",
            (str(course.id),),
        )
        asset_rows = self._fetchall(
            """
            SELECT a.* FROM module_assets a
            JOIN course_modules m ON m.id = a.module_id
            WHERE m.course_id = ?
            ORDER BY a.position ASC
            """,
            (str(course.id),),
        )
        assets_by_module: dict[str, list[ModuleAsset]] = {}
        for a in asset_rows:
            assets_by_module.setdefault(a["module_id"], []).append(
                ModuleAsset(
                    id=UUID(a["id"]),
                    module_id=UUID(a["module_id"]),
                    title=a["title"],
                    url=a["url"],
                    position=a["position"],
                )
            )
        course.modules = []
        for m in module_rows:
            module = self._map_module(m)
            module.assets = assets_by_module.get(m["id"], [])
            course.modules.append(module)
        return course

    def _map_module(self, row: dict[str, Any]) -> CourseModule:
        return CourseModule(
            id=UUID(row["id"]),
            course_id=UUID(row["course_id"]),
            title=row["title"],
            description=row["description"],
            position=row["position"],
        )

    def _map_row(self, row: dict[str, Any]) -> Course:
        return Course(
            id=UUID(row["id"]),
            title=row["title"],
            slug=row["slug"],
            description=row["description"],
            cover_image=row["cover_image"],
            level=row["level"],
            views=row["views"],
            status=row["status"],
            published=bool(row["published"]),
            created_at=datetime.fromisoformat(row["created_at"]),
        )


# -----------------------------------------------------------------------------
# Articles
# -----------------------------------------------------------------------------


class SQLiteArticleRepo(SQLiteRepoBase):
    """Implements ArticleRepoPort."""

    def save(self, article: Article) -> Article:
        """Upsert an article and replace its tag links."""
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO articles (
                    id, title, slug, excerpt, content, author_id, published,
                    premium, featured, trending, read_time, cover_image, views,
                    published_at, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    title=excluded.title,
                    slug=excluded.slug,
                    excerpt=excluded.excerpt,
                    content=excluded.content,
                    author_id=excluded.author_id,
                    published=excluded.published,
                    premium=excluded.premium,
                    featured=excluded.featured,
                    trending=excluded.trending,
                    read_time=excluded.read_time,
                    cover_image=excluded.cover_image,
                    views=excluded.views,
                    published_at=excluded.published_at,
                    updated_at=excluded.updated_at
                """,
                (
                    str(article.id),
                    article.title,
                    article.slug,
                    article.excerpt,
                    article.content,
                    str(article.author_id) if article.author_id else None,
                    int(article.published),
                    int(article.premium),
                    int(article.featured),
                    int(article.trending),
                    article.read_time,
                    article.cover_image,
                    article.views,
                    iso(article.published_at),
                    iso(article.created_at),
                    iso(article.updated_at),
                ),
            )
            conn.execute("DELETE FROM article_tags WHERE article_id = ?", (str(article.id),))
            conn.executemany(
                "INSERT INTO article_tags (article_id, tag_id) VALUES (?, ?)",
                [(str(article.id), str(tag.id)) for tag in article.tags],
            )
            if self._should_close():
                conn.commit()
            return article
        except Exception:
            if self._should_close():
                conn.rollback()
            raise
        finally:
            if self._should_close():
                conn.close()

    def get_by_id(self, article_id: UUID) -> Article | None:
        return self._get_one("a.id = ?", str(article_id))

    def get_by_slug(self, slug: str) -> Article | None:
        return self._get_one("a.slug = ?", slug)

    def slug_exists(self, slug: str, exclude_id: UUID | None = None) -> bool:
        row = self._fetchone(
            "SELECT 1 FROM articles WHERE slug = ? AND id != ? LIMIT 1",
            (slug, str(exclude_id) if exclude_id else ""),
        )
        return row is not None

    def delete(self, article_id: UUID) -> bool:
        # Tag links go via ON DELETE CASCADE.
        return self._execute("DELETE FROM articles WHERE id = ?", (str(article_id),)) > 0

    def list_articles(
        self, filters: ArticleFilter, offset: int, limit: int
    ) -> tuple[list[Article], int]:
        """One page of matching articles, newest publishedAt first, and the total."""
        where = ["a.published = ?"]
        params: list[Any] = [int(filters.published)]
        if filters.author_id:
            where.append("a.author_id = ?")
            params.append(filters.author_id)
        if filters.author_role:
            where.append("u.role = ?")
            params.append(filters.author_role)
        if filters.tag_slug:
            where.append(
                """EXISTS (
                    SELECT 1 FROM article_tags at JOIN tags t ON t.id = at.tag_id
                    WHERE at.article_id = a.id AND t.slug = ?
                )"""
            )
            params.append(filters.tag_slug)
        if filters.search:
            # Case-sensitive containment.
            where.append(
                "(instr(a.title, ?) > 0 OR instr(a.excerpt, ?) > 0 OR instr(a.content, ?) > 0)"
            )
            params.extend([filters.search] * 3)
        if filters.exclude_slug:
            where.append("a.slug != ?")
            params.append(filters.exclude_slug)

        clause = " AND ".join(where)
        total_row = self._fetchone(
            f"""
            SELECT COUNT(*) AS n FROM articles a
            LEFT JOIN users u ON u.id = a.author_id
            WHERE {clause}
            """,
            tuple(params),
        )
        rows = self._fetchall(
            f"""
            SELECT a.*, u.name AS author_name FROM articles a
            LEFT JOIN users u ON u.id = a.author_id
            WHERE {clause}
            ORDER BY a.published_at DESC, a.created_at DESC
            LIMIT ? OFFSET ?
            """,
            (*params, limit, offset),
        )
        articles = [self._map_row(r) for r in rows]
        self._load_tags(articles)
        return articles, int(total_row["n"]) if total_row else 0

    def list_author_rows(self, published: bool | None = None) -> list[AuthorRow]:
        sql = """
            SELECT a.author_id AS author_id, u.name AS author_name
            FROM articles a
            LEFT JOIN users u ON u.id = a.author_id
        """
        params: tuple[Any, ...] = ()
        if published is not None:
            sql += " WHERE a.published = ?"
            params = (int(published),)
        rows = self._fetchall(sql, params)
        return [AuthorRow(parse_uuid(r["author_id"]), r["author_name"]) for r in rows]

    def count_published(self) -> int:
        row = self._fetchone("SELECT COUNT(*) AS n FROM articles WHERE published = 1")
        return int(row["n"]) if row else 0

    def sum_published_views(self) -> int:
        row = self._fetchone(
            "SELECT COALESCE(SUM(views), 0) AS total FROM articles WHERE published = 1"
        )
        return int(row["total"]) if row else 0

    def recent_published(self, limit: int) -> list[RecentArticle]:
        rows = self._fetchall(
            """
            SELECT id, title, views, published_at FROM articles
            WHERE published = 1
            ORDER BY published_at DESC
            LIMIT ?
            """,
            (limit,),
        )
        return [
            RecentArticle(
                id=UUID(r["id"]),
                title=r["title"],
                views=r["views"],
                published_at=parse_dt(r["published_at"]),
            )
            for r in rows
        ]

    def _get_one(self, condition: str, value: str) -> Article | None:
        row = self._fetchone(
            f"""
            SELECT a.*, u.name AS author_name FROM articles a
            LEFT JOIN users u ON u.id = a.author_id
            WHERE {condition}
            """,
            (value,),
        )
        if not row:
            return None
        article = self._map_row(row)
        self._load_tags([article])
        return article

    def _load_tags(self, articles: list[Article]) -> None:
        if not articles:
            return
        by_id = {str(a.id): a for a in articles}
        marks = ", ".join("?" for _ in by_id)
        rows = self._fetchall(
            f"""
            SELECT at.article_id, t.* FROM article_tags at
            JOIN tags t ON t.id = at.tag_id
            WHERE at.article_id IN ({marks})
            ORDER BY t.name ASC
            """,
            tuple(by_id),
        )
        for r in rows:
            by_id[r["article_id"]].tags.append(
                Tag(
                    id=UUID(r["id"]),
                    name=r["name"],
                    slug=r["slug"],
                    created_at=datetime.fromisoformat(r["created_at"]),
                )
            )

    def _map_row(self, row: dict[str, Any]) -> Article:
        return Article(
            id=UUID(row["id"]),
            title=row["title"],
            slug=row["slug"],
            excerpt=row["excerpt"],
            content=row["content"],
            author_id=parse_uuid(row["author_id"]),
            published=bool(row["published"]),
            premium=bool(row["premium"]),
            featured=bool(row["featured"]),
            trending=bool(row["trending"]),
            read_time=row["read_time"],
            cover_image=row["cover_image"],
            views=row["views"],
            published_at=parse_dt(row["published_at"]),
            created_at=parse_dt(row["created_at"]),
            updated_at=parse_dt(row["updated_at"]),
            author_name=row.get("author_name"),
        )


# -----------------------------------------------------------------------------
# Jobs
# -----------------------------------------------------------------------------


class SQLiteJobRepo(SQLiteRepoBase):
    """Implements JobRepoPort."""

    def save(self, job: Job) -> Job:
        self._execute(
            """
            INSERT INTO jobs (
                id, title, company, location, type, description,
                tags, source, apply_url, contact_email, active, posted_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                title=excluded.title,
                company=excluded.company,
                location=excluded.location,
                type=excluded.type,
                description=excluded.description,
                tags=excluded.tags,
                source=excluded.source,
                apply_url=excluded.apply_url,
                contact_email=excluded.contact_email,
                active=excluded.active,
                posted_at=excluded.posted_at
            """,
            (
                str(job.id),
                job.title,
                job.company,
                job.location,
                job.type,
                job.description,
                job.tags,
                job.source,
                job.apply_url,
                job.contact_email,
                int(job.active),
                iso(job.posted_at),
            ),
        )
        return job

    def get_by_id(self, job_id: UUID) -> Job | None:
        row = self._fetchone("SELECT * FROM jobs WHERE id = ?", (str(job_id),))
        return self._map_row(row) if row else None

    def delete(self, job_id: UUID) -> bool:
        return self._execute("DELETE FROM jobs WHERE id = ?", (str(job_id),)) > 0

    def list_all(self) -> list[Job]:
        rows = self._fetchall("SELECT * FROM jobs ORDER BY posted_at DESC")
        return [self._map_row(r) for r in rows]

    def list_active(self, type: str | None = None, location: str | None = None) -> list[Job]:
        sql = "SELECT * FROM jobs WHERE active = 1"
        params: list[Any] = []
        if type:
            sql += " AND type = ?"
            params.append(type)
        if location:
            sql += " AND LOWER(location) LIKE ? ESCAPE '\\'"
            params.append(f"%{escape_like(location.lower())}%")
        sql += " ORDER BY posted_at DESC"
        return [self._map_row(r) for r in self._fetchall(sql, tuple(params))]

    # --- Submissions ---

    def save_submission(self, submission: JobSubmission) -> JobSubmission:
        self._execute(
            """
            INSERT INTO job_submissions (
                id, title, company, location, type, description, apply_url,
                contact_email, tags, compensation_type, salary_min, salary_max,
                currency, remote_type, experience_level, status, reviewed_at,
                created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                status=excluded.status,
                reviewed_at=excluded.reviewed_at
            """,
            (
                str(submission.id),
                submission.title,
                submission.company,
                submission.location,
                submission.type,
                submission.description,
                submission.apply_url,
                submission.contact_email,
                submission.tags,
                submission.compensation_type,
                submission.salary_min,
                submission.salary_max,
                submission.currency,
                submission.remote_type,
                submission.experience_level,
                submission.status,
                iso(submission.reviewed_at),
                iso(submission.created_at),
            ),
        )
        return submission

    def get_submission(self, submission_id: UUID) -> JobSubmission | None:
        row = self._fetchone(
            "SELECT * FROM job_submissions WHERE id = ?", (str(submission_id),)
        )
        return self._map_submission(row) if row else None

    def list_submissions(self) -> list[JobSubmission]:
        rows = self._fetchall("SELECT * FROM job_submissions ORDER BY created_at DESC")
        return [self._map_submission(r) for r in rows]

    def delete_submission(self, submission_id: UUID) -> bool:
        count = self._execute(
            "DELETE FROM job_submissions WHERE id = ?", (str(submission_id),)
        )
        return count > 0

    # --- Applications ---

    def save_application(self, application: JobApplication) -> JobApplication:
        self._execute(
            """
            INSERT INTO job_applications (
                id, job_id, name, email, phone, linkedin, portfolio,
                resume_url, cover_letter, status, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                status=excluded.status
            """,
            (
                str(application.id),
                str(application.job_id),
                application.name,
                application.email,
                application.phone,
                application.linkedin,
                application.portfolio,
                application.resume_url,
                application.cover_letter,
                application.status,
                iso(application.created_at),
            ),
        )
        return application

    def get_application(self, application_id: UUID) -> JobApplication | None:
        row = self._fetchone(
            "SELECT * FROM job_applications WHERE id = ?", (str(application_id),)
        )
        return self._map_application(row) if row else None

    def list_applications(self, job_id: UUID | None = None) -> list[JobApplication]:
        sql = "SELECT * FROM job_applications"
        params: tuple[Any, ...] = ()
        if job_id is not None:
            sql += " WHERE job_id = ?"
            params = (str(job_id),)
        sql += " ORDER BY created_at DESC"
        return [self._map_application(r) for r in self._fetchall(sql, params)]

    def delete_application(self, application_id: UUID) -> bool:
        count = self._execute(
            "DELETE FROM job_applications WHERE id = ?", (str(application_id),)
        )
        return count > 0

    def _map_row(self, row: dict[str, Any]) -> Job:
        return Job(
            id=UUID(row["id"]),
            title=row["title"],
            company=row["company"],
            location=row["location"],
            type=row["type"],
            description=row["description"],
            tags=row["tags"],
            source=row["source"],
            apply_url=row["apply_url"],
            contact_email=row["contact_email"],
            active=bool(row["active"]),
            posted_at=datetime.fromisoformat(row["posted_at"]),
        )

    def _map_submission(self, row: dict[str, Any]) -> JobSubmission:
        return JobSubmission(
            id=UUID(row["id"]),
            title=row["title"],
            company=row["company"],
            location=row["location"],
            type=row["type"],
            description=row["description"],
            apply_url=row["apply_url"],
            contact_email=row["contact_email"],
            tags=row["tags"],
            compensation_type=row["compensation_type"],
            salary_min=row["salary_min"],
            salary_max=row["salary_max"],
            currency=row["currency"],
            remote_type=row["remote_type"],
            experience_level=row["experience_level"],
            status=row["status"],
            reviewed_at=parse_dt(row["reviewed_at"]),
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    def _map_application(self, row: dict[str, Any]) -> JobApplication:
        return JobApplication(
            id=UUID(row["id"]),
            job_id=UUID(row["job_id"]),
            name=row["name"],
            email=row["email"],
            phone=row["phone"],
            linkedin=row["linkedin"],
            portfolio=row["portfolio"],
            resume_url=row["resume_url"],
            cover_letter=row["cover_letter"],
            status=row["status"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )
