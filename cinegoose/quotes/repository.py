"""
Goose-quote persistence (raw SQL).
"""

from __future__ import annotations

from cinegoose.core import db

QUOTE_COLUMNS = ("id", "goose_id", "quote", "context", "timestamp")


async def list_quotes() -> list[dict]:
    return await db.fetch_all(
        """
        SELECT id, goose_id, quote, context, timestamp
        FROM goose_quotes
        ORDER BY id
        """,
        columns=QUOTE_COLUMNS,
    )


async def get_quote(quote_id: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, goose_id, quote, context, timestamp
        FROM goose_quotes
        WHERE id = ?
        LIMIT 1
        """,
        quote_id,
        columns=QUOTE_COLUMNS,
    )


async def create_quote(
    *,
    goose_id: int,
    quote: str,
    context: str | None = None,
    timestamp: str | None = None,
) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO goose_quotes (goose_id, quote, context, timestamp)
        VALUES (?, ?, ?, ?)
        RETURNING id, goose_id, quote, context, timestamp
        """,
        goose_id,
        quote,
        context,
        timestamp,
        columns=QUOTE_COLUMNS,
    )
    if row is None:
        raise RuntimeError("Failed to insert goose quote.")
    return row
