"""
Movie API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from . import schemas, service

router = APIRouter()


@router.get(
    "/api/movies",
    response_model=list[schemas.Movie],
    response_description="Movies fetched successfully",
)
async def list_movies() -> list[schemas.Movie]:
    return await service.list_movies()


@router.get(
    "/api/movies/{movie_id}",
    response_model=schemas.Movie,
    response_description="Movie fetched successfully",
)
async def get_movie(movie_id: int) -> schemas.Movie:
    return await service.get_movie(movie_id)


# Singular path kept for existing clients.
@router.post(
    "/api/movie",
    response_model=schemas.Movie,
    status_code=status.HTTP_201_CREATED,
    response_description="Movie created successfully",
)
async def create_movie(request: schemas.NewMovie) -> schemas.Movie:
    return await service.create_movie(request)
