"""
Movie persistence (raw SQL).
"""

from __future__ import annotations

from cinegoose.core import db

MOVIE_COLUMNS = ("id", "title", "director", "release_date")


async def list_movies() -> list[dict]:
    return await db.fetch_all(
        """
        SELECT id, title, director, release_date
        FROM movies
        ORDER BY id
        """,
        columns=MOVIE_COLUMNS,
    )


async def get_movie(movie_id: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, title, director, release_date
        FROM movies
        WHERE id = ?
        LIMIT 1
        """,
        movie_id,
        columns=MOVIE_COLUMNS,
    )


async def create_movie(*, title: str, director: str, release_date: str) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO movies (title, director, release_date)
        VALUES (?, ?, ?)
        RETURNING id, title, director, release_date
        """,
        title,
        director,
        release_date,
        columns=MOVIE_COLUMNS,
    )
    if row is None:
        raise RuntimeError("Failed to insert movie.")
    return row
