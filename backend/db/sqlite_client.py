"""SQLite connection handling and schema migrations for the local store."""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path


logger = logging.getLogger(__name__)


MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"


@dataclass(slots=True)
class SqliteSettings:
    path: str


class SqliteClient:
    def __init__(self, settings: SqliteSettings) -> None:
        self.settings = settings

    def connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.settings.path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection committed on success and rolled back on error."""

        conn = self.connect()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def migrate(self, migrations_dir: Path = MIGRATIONS_DIR) -> list[str]:
        """Apply pending `*.sql` files in name order and return their names.

        Each script runs in its own explicit transaction together with its
        `schema_migrations` row, so a failing script leaves nothing applied.
        """

        applied: list[str] = []
        conn = self.connect()
        conn.isolation_level = None
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS schema_migrations (
                    version    TEXT PRIMARY KEY,
                    applied_at TEXT NOT NULL DEFAULT (datetime('now'))
                )
                """
            )
            done = {row["version"] for row in conn.execute("SELECT version FROM schema_migrations")}
            for script in sorted(migrations_dir.glob("*.sql")):
                if script.name in done:
                    continue
                try:
                    conn.executescript("BEGIN;\n" + script.read_text(encoding="utf-8"))
                    conn.execute("INSERT INTO schema_migrations (version) VALUES (?)", (script.name,))
                    conn.execute("COMMIT")
                except sqlite3.Error:
                    if conn.in_transaction:
                        conn.execute("ROLLBACK")
                    logger.error("sqlite_migration_failed version=%s path=%s", script.name, self.settings.path)
                    raise
                applied.append(script.name)
                logger.info("sqlite_migration_applied version=%s path=%s", script.name, self.settings.path)
        finally:
            conn.close()
        return applied
