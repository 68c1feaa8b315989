"""
Goose-quote API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from . import schemas, service

router = APIRouter()


@router.get(
    "/api/quotes",
    response_model=list[schemas.GooseQuote],
    response_description="Goose quotes fetched successfully",
)
async def list_quotes() -> list[schemas.GooseQuote]:
    return await service.list_quotes()


@router.get(
    "/api/quotes/{quote_id}",
    response_model=schemas.GooseQuote,
    response_description="Goose quote fetched successfully",
)
async def get_quote(quote_id: int) -> schemas.GooseQuote:
    return await service.get_quote(quote_id)


@router.post(
    "/api/quotes",
    response_model=schemas.GooseQuote,
    status_code=status.HTTP_201_CREATED,
    response_description="Goose quote created successfully",
)
async def create_quote(request: schemas.NewGooseQuote) -> schemas.GooseQuote:
    return await service.create_quote(request)
