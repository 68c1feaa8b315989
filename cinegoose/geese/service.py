"""
Famous-goose business logic.
"""

from __future__ import annotations

from fastapi import HTTPException, status

from cinegoose.movies import repository as movie_repository

from . import repository, schemas


def _to_goose(row: dict) -> schemas.FamousGoose:
    description = row.get("description")
    return schemas.FamousGoose(
        id=int(row["id"]),
        name=str(row["name"]),
        movie_id=int(row["movie_id"]),
        character=str(row["character"]),
        description=str(description) if description is not None else None,
    )


async def list_geese() -> list[schemas.FamousGoose]:
    return [_to_goose(row) for row in await repository.list_geese()]


async def get_goose(goose_id: int) -> schemas.FamousGoose:
    row = await repository.get_goose(goose_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Famous goose not found.")
    return _to_goose(row)


async def create_goose(payload: schemas.NewFamousGoose) -> schemas.FamousGoose:
    if await movie_repository.get_movie(payload.movie_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movie not found.")

    row = await repository.create_goose(
        name=payload.name,
        movie_id=payload.movie_id,
        character=payload.character,
        description=payload.description,
    )
    return _to_goose(row)
