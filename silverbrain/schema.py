"""Database schema migrations for a store's SQLite database."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass

_TRACKING_TABLE = "seaql_migrations"


@dataclass(frozen=True)
class Migration:
    """One schema step that creates a table and can drop it again."""

    name: str
    table: str
    create_sql: str

    def up(self, conn: sqlite3.Connection) -> None:
        """Create the table if it does not exist."""
        conn.execute(self.create_sql)

    def down(self, conn: sqlite3.Connection) -> None:
        """Drop the table."""
        conn.execute(f'DROP TABLE "{self.table}"')


MIGRATIONS: tuple[Migration, ...] = (
    Migration(
        "m20230920_010000_create_entry_table",
        "entry",
        'CREATE TABLE IF NOT EXISTS "entry" ('
        '"id" TEXT NOT NULL PRIMARY KEY, '
        '"name" TEXT NOT NULL, '
        '"content_type" TEXT NOT NULL, '
        '"content" TEXT NOT NULL, '
        '"create_time" TEXT NOT NULL, '
        '"update_time" TEXT NOT NULL)',
    ),
    Migration(
        "m20230920_233000_create_attachment_table",
        "attachment",
        'CREATE TABLE IF NOT EXISTS "attachment" ('
        '"id" TEXT NOT NULL PRIMARY KEY, '
        '"entry_id" TEXT NOT NULL, '
        '"name" TEXT NOT NULL, '
        '"file_path" TEXT NOT NULL, '
        '"size" INTEGER NOT NULL, '
        '"create_time" TEXT NOT NULL, '
        '"update_time" TEXT NOT NULL, '
        'CONSTRAINT "fk_entry_id" FOREIGN KEY ("entry_id") REFERENCES "entry" ("id"))',
    ),
    Migration(
        "m20231023_000500_create_parent_link_table",
        "parent_link",
        'CREATE TABLE IF NOT EXISTS "parent_link" ('
        '"id" TEXT NOT NULL PRIMARY KEY, '
        '"source" TEXT NOT NULL, '
        '"target" TEXT NOT NULL, '
        '"label" TEXT NOT NULL, '
        '"create_time" TEXT NOT NULL, '
        '"update_time" TEXT NOT NULL, '
        'CONSTRAINT "fk_source" FOREIGN KEY ("source") REFERENCES "entry" ("id"), '
        'CONSTRAINT "fk_target" FOREIGN KEY ("target") REFERENCES "entry" ("id"))',
    ),
    Migration(
        "m20231023_000700_create_friend_link_table",
        "friend_link",
        'CREATE TABLE IF NOT EXISTS "friend_link" ('
        '"id" TEXT NOT NULL PRIMARY KEY, '
        '"source" TEXT NOT NULL, '
        '"target" TEXT NOT NULL, '
        '"label" TEXT NOT NULL, '
        '"is_mutual" BOOLEAN NOT NULL, '
        '"create_time" TEXT NOT NULL, '
        '"update_time" TEXT NOT NULL, '
        'CONSTRAINT "fk_source" FOREIGN KEY ("source") REFERENCES "entry" ("id"), '
        'CONSTRAINT "fk_target" FOREIGN KEY ("target") REFERENCES "entry" ("id"))',
    ),
)


def _ensure_tracking(conn: sqlite3.Connection) -> None:
    conn.execute(
        f'CREATE TABLE IF NOT EXISTS "{_TRACKING_TABLE}" '
        '("version" TEXT NOT NULL PRIMARY KEY, "applied_at" INTEGER NOT NULL)'
    )


def _applied(conn: sqlite3.Connection) -> set[str]:
    rows = conn.execute(f'SELECT "version" FROM "{_TRACKING_TABLE}"')
    return {version for (version,) in rows}


def drop_all(conn: sqlite3.Connection) -> None:
    """Roll back every applied migration, newest first."""
    _ensure_tracking(conn)
    applied = _applied(conn)
    for migration in reversed(MIGRATIONS):
        if migration.name in applied:
            migration.down(conn)
            conn.execute(
                f'DELETE FROM "{_TRACKING_TABLE}" WHERE "version" = ?', (migration.name,)
            )
    conn.commit()


def migrate(conn: sqlite3.Connection) -> None:
    """Refresh the schema: roll back applied migrations, then apply all of them."""
    drop_all(conn)
    for migration in MIGRATIONS:
        migration.up(conn)
        conn.execute(
            f'INSERT INTO "{_TRACKING_TABLE}" ("version", "applied_at") '
            "VALUES (?, CAST(strftime('%s', 'now') AS INTEGER))",
            (migration.name,),
        )
    conn.commit()