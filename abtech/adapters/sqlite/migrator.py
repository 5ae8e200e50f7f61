"""
File-based schema migrations for the SQLite store.

Each `migrations/NNN_name.sql` holds an up script, optionally followed by a
`-- Down` marker and the script that reverses it. Applied files are recorded
in `_migrations` and never re-run.
"""

import logging
import os
import sqlite3
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DOWN_MARKER = "-- Down"


@dataclass(frozen=True)
class Migration:
    filename: str
    up: str
    down: str = ""


def parse_migration(filename: str, content: str) -> Migration:
    up, _, down = content.partition(DOWN_MARKER)
    return Migration(filename=filename, up=up, down=down.strip())


class SQLiteMigrator:
    def __init__(self, db_path: str, migrations_dir: str):
        self.db_path = db_path
        self.migrations_dir = migrations_dir

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.execute("PRAGMA foreign_keys = ON;")
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS _migrations (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                filename TEXT UNIQUE NOT NULL,
                applied_at DATETIME DEFAULT CURRENT_TIMESTAMP
            );
            """
        )
        return conn

    def load(self) -> list[Migration]:
        """All migrations on disk, in filename order."""
        migrations = []
        for filename in sorted(os.listdir(self.migrations_dir)):
            if not filename.endswith(".sql"):
                continue
            with open(os.path.join(self.migrations_dir, filename)) as f:
                migrations.append(parse_migration(filename, f.read()))
        return migrations

    def applied(self) -> list[str]:
        conn = self._connect()
        try:
            rows = conn.execute("SELECT filename FROM _migrations ORDER BY id").fetchall()
            return [row[0] for row in rows]
        finally:
            conn.close()

    def pending(self) -> list[Migration]:
        done = set(self.applied())
        return [m for m in self.load() if m.filename not in done]

    def run_migrations(self) -> list[str]:
        """Apply all pending migrations. Returns the filenames applied."""
        applied_now: list[str] = []
        conn = self._connect()
        try:
            for migration in self.pending():
                logger.info("Applying migration: %s", migration.filename)
                self._run(
                    conn,
                    migration.filename,
                    migration.up,
                    "INSERT INTO _migrations (filename) VALUES (?)",
                )
                applied_now.append(migration.filename)
        finally:
            conn.close()

        logger.debug("Migrations up to date (%d applied)", len(applied_now))
        return applied_now

    def rollback_last(self) -> str | None:
        """Run the down script of the newest applied migration."""
        done = self.applied()
        if not done:
            return None
        by_name = {m.filename: m for m in self.load()}
        last = by_name.get(done[-1])
        if last is None or not last.down:
            raise RuntimeError(f"Migration {done[-1]} has no down script")

        logger.info("Rolling back migration: %s", last.filename)
        conn = self._connect()
        try:
            self._run(conn, last.filename, last.down, "DELETE FROM _migrations WHERE filename = ?")
        finally:
            conn.close()
        return last.filename

    def _run(self, conn: sqlite3.Connection, filename: str, script: str, record_sql: str) -> None:
        try:
            conn.executescript(script)
            conn.execute(record_sql, (filename,))
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise RuntimeError(f"Migration {filename} failed: {e}") from e
