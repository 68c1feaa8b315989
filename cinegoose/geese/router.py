"""
Famous-goose API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from . import schemas, service

router = APIRouter()


@router.get(
    "/api/geese",
    response_model=list[schemas.FamousGoose],
    response_description="Famous geese fetched successfully",
)
async def list_geese() -> list[schemas.FamousGoose]:
    return await service.list_geese()


@router.get(
    "/api/geese/{goose_id}",
    response_model=schemas.FamousGoose,
    response_description="Famous goose fetched successfully",
)
async def get_goose(goose_id: int) -> schemas.FamousGoose:
    return await service.get_goose(goose_id)


@router.post(
    "/api/geese",
    response_model=schemas.FamousGoose,
    status_code=status.HTTP_201_CREATED,
    response_description="Famous goose created successfully",
)
async def create_goose(request: schemas.NewFamousGoose) -> schemas.FamousGoose:
    return await service.create_goose(request)
