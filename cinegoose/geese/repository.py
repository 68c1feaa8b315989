"""
Famous-goose persistence (raw SQL).
"""

from __future__ import annotations

from cinegoose.core import db

GOOSE_COLUMNS = ("id", "name", "movie_id", "character", "description")


async def list_geese() -> list[dict]:
    return await db.fetch_all(
        """
        SELECT id, name, movie_id, character, description
        FROM famous_geese
        ORDER BY id
        """,
        columns=GOOSE_COLUMNS,
    )


async def get_goose(goose_id: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, name, movie_id, character, description
        FROM famous_geese
        WHERE id = ?
        LIMIT 1
        """,
        goose_id,
        columns=GOOSE_COLUMNS,
    )


async def create_goose(
    *,
    name: str,
    movie_id: int,
    character: str,
    description: str | None = None,
) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO famous_geese (name, movie_id, character, description)
        VALUES (?, ?, ?, ?)
        RETURNING id, name, movie_id, character, description
        """,
        name,
        movie_id,
        character,
        description,
        columns=GOOSE_COLUMNS,
    )
    if row is None:
        raise RuntimeError("Failed to insert famous goose.")
    return row
