"""
Movie business logic.
"""

from __future__ import annotations

from fastapi import HTTPException, status

from . import repository, schemas


def _to_movie(row: dict) -> schemas.Movie:
    return schemas.Movie(
        id=int(row["id"]),
        title=str(row["title"]),
        director=str(row["director"]),
        release_date=str(row["release_date"]),
    )


async def list_movies() -> list[schemas.Movie]:
    return [_to_movie(row) for row in await repository.list_movies()]


async def get_movie(movie_id: int) -> schemas.Movie:
    row = await repository.get_movie(movie_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movie not found.")
    return _to_movie(row)


async def create_movie(payload: schemas.NewMovie) -> schemas.Movie:
    row = await repository.create_movie(
        title=payload.title,
        director=payload.director,
        release_date=payload.release_date,
    )
    return _to_movie(row)
