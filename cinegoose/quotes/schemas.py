"""
Pydantic schemas for goose-quote endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class NewGooseQuote(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    goose_id: int = Field(..., alias="gooseId", examples=[1])
    quote: str = Field(..., min_length=1, examples=["I'm gonna make him a honk he can't refuse."])
    context: str | None = Field(
        default=None,
        examples=["Speaking to Tom Hagen about resolving a dispute"],
    )
    # Position in the movie, e.g. "00:45:30".
    timestamp: str | None = Field(default=None, examples=["00:45:30"])


class GooseQuote(NewGooseQuote):
    model_config = ConfigDict(populate_by_name=True, title="GooseQuote")

    id: int = Field(..., examples=[1])
