"""
Table definitions (SQLite dialect, shared by local SQLite and D1).
"""

from __future__ import annotations

from . import db
from .d1 import StatementRequest

TABLES: dict[str, str] = {
    "users": """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            email TEXT NOT NULL,
            created_at TEXT NOT NULL DEFAULT (CURRENT_TIMESTAMP),
            updated_at TEXT NOT NULL DEFAULT (CURRENT_TIMESTAMP)
        )
    """,
    "movies": """
        CREATE TABLE IF NOT EXISTS movies (
            id INTEGER PRIMARY KEY,
            title TEXT NOT NULL,
            director TEXT NOT NULL,
            release_date TEXT NOT NULL,
            created_at TEXT NOT NULL DEFAULT (CURRENT_TIMESTAMP),
            updated_at TEXT NOT NULL DEFAULT (CURRENT_TIMESTAMP)
        )
    """,
    "famous_geese": """
        CREATE TABLE IF NOT EXISTS famous_geese (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            movie_id INTEGER NOT NULL REFERENCES movies(id),
            character TEXT NOT NULL,
            description TEXT,
            created_at TEXT NOT NULL DEFAULT (CURRENT_TIMESTAMP),
            updated_at TEXT NOT NULL DEFAULT (CURRENT_TIMESTAMP)
        )
    """,
    "goose_quotes": """
        CREATE TABLE IF NOT EXISTS goose_quotes (
            id INTEGER PRIMARY KEY,
            goose_id INTEGER NOT NULL REFERENCES famous_geese(id),
            quote TEXT NOT NULL,
            context TEXT,
            timestamp TEXT,
            created_at TEXT NOT NULL DEFAULT (CURRENT_TIMESTAMP),
            updated_at TEXT NOT NULL DEFAULT (CURRENT_TIMESTAMP)
        )
    """,
}


async def ensure_schema() -> None:
    # Parents before children (foreign keys).
    await db.execute_batch(
        [StatementRequest(sql=ddl.strip(), params=(), method="run") for ddl in TABLES.values()]
    )
