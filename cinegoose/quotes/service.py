"""
Goose-quote business logic.
"""

from __future__ import annotations

from fastapi import HTTPException, status

from cinegoose.geese import repository as goose_repository

from . import repository, schemas


def _optional_str(value: object) -> str | None:
    return str(value) if value is not None else None


def _to_quote(row: dict) -> schemas.GooseQuote:
    return schemas.GooseQuote(
        id=int(row["id"]),
        goose_id=int(row["goose_id"]),
        quote=str(row["quote"]),
        context=_optional_str(row.get("context")),
        timestamp=_optional_str(row.get("timestamp")),
    )


async def list_quotes() -> list[schemas.GooseQuote]:
    return [_to_quote(row) for row in await repository.list_quotes()]


async def get_quote(quote_id: int) -> schemas.GooseQuote:
    row = await repository.get_quote(quote_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Goose quote not found.")
    return _to_quote(row)


async def create_quote(payload: schemas.NewGooseQuote) -> schemas.GooseQuote:
    if await goose_repository.get_goose(payload.goose_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Famous goose not found.")

    row = await repository.create_quote(
        goose_id=payload.goose_id,
        quote=payload.quote,
        context=payload.context,
        timestamp=payload.timestamp,
    )
    return _to_quote(row)
