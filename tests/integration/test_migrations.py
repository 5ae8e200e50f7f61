import sqlite3

import pytest

from abtech.adapters.sqlite.migrator import SQLiteMigrator, parse_migration

TABLES = [
    "users",
    "email_tokens",
    "newsletter_subscriptions",
    "tags",
    "courses",
    "course_modules",
    "module_assets",
    "articles",
    "jobs",
    "job_submissions",
    "site_sections",
]

ADDED_TABLES = ["article_tags", "job_applications"]

MIGRATIONS = ["001_initial.sql", "002_content_admin.sql"]


def table_names(db_path: str) -> set[str]:
    conn = sqlite3.connect(db_path)
    try:
        rows = conn.execute("SELECT name FROM sqlite_master WHERE type='table'").fetchall()
        return {row[0] for row in rows}
    finally:
        conn.close()


def column_names(db_path: str, table: str) -> set[str]:
    conn = sqlite3.connect(db_path)
    try:
        return {row[1] for row in conn.execute(f"PRAGMA table_info({table})").fetchall()}
    finally:
        conn.close()


@pytest.fixture
def temp_db_path(tmp_path):
    return str(tmp_path / "test_db.sqlite")


@pytest.fixture
def migrator(temp_db_path):
    # Real migrations, so the SQL itself is exercised.
    return SQLiteMigrator(temp_db_path, "migrations")


def test_parse_migration_splits_down_section():
    migration = parse_migration(
        "002_x.sql", "-- Up\nCREATE TABLE a (id);\n-- Down\nDROP TABLE a;\n"
    )

    assert "CREATE TABLE a" in migration.up
    assert "DROP" not in migration.up
    assert migration.down == "DROP TABLE a;"


def test_parse_migration_without_down():
    assert parse_migration("003_y.sql", "CREATE TABLE b (id);").down == ""


def test_applies_all_in_order(migrator, temp_db_path):
    assert [m.filename for m in migrator.pending()] == MIGRATIONS

    applied = migrator.run_migrations()

    assert applied == MIGRATIONS
    assert migrator.applied() == MIGRATIONS
    assert migrator.pending() == []
    names = table_names(temp_db_path)
    assert "_migrations" in names
    for table in TABLES + ADDED_TABLES:
        assert table in names


def test_is_idempotent(migrator, temp_db_path):
    migrator.run_migrations()
    assert migrator.run_migrations() == []

    conn = sqlite3.connect(temp_db_path)
    count = conn.execute("SELECT COUNT(*) FROM _migrations").fetchone()[0]
    conn.close()
    assert count == len(MIGRATIONS)


def test_rollback_last_reverts_newest_only(migrator, temp_db_path):
    migrator.run_migrations()

    assert migrator.rollback_last() == "002_content_admin.sql"

    assert migrator.applied() == ["001_initial.sql"]
    names = table_names(temp_db_path)
    for table in ADDED_TABLES:
        assert table not in names
    assert "content" not in column_names(temp_db_path, "articles")
    assert "status" not in column_names(temp_db_path, "job_submissions")
    for table in TABLES:
        assert table in names


def test_rollback_all_drops_tables(migrator, temp_db_path):
    migrator.run_migrations()

    assert migrator.rollback_last() == "002_content_admin.sql"
    assert migrator.rollback_last() == "001_initial.sql"

    assert migrator.applied() == []
    names = table_names(temp_db_path)
    for table in TABLES:
        assert table not in names

    # Nothing left to roll back; re-applying works.
    assert migrator.rollback_last() is None
    assert migrator.run_migrations() == MIGRATIONS


def test_failed_migration_is_not_recorded(tmp_path):
    migrations = tmp_path / "migrations"
    migrations.mkdir()
    (migrations / "001_bad.sql").write_text("CREATE TABLE broken (;")
    migrator = SQLiteMigrator(str(tmp_path / "bad.db"), str(migrations))

    with pytest.raises(RuntimeError, match="001_bad.sql"):
        migrator.run_migrations()

    assert migrator.applied() == []
