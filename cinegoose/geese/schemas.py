"""
Pydantic schemas for famous-goose endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class NewFamousGoose(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, examples=["Honkleone"])
    movie_id: int = Field(..., alias="movieId", examples=[1])
    character: str = Field(..., min_length=1, examples=["Don Vito Honkleone"])
    description: str | None = Field(
        default=None,
        examples=["The patriarch of the Honkleone crime family"],
    )


class FamousGoose(NewFamousGoose):
    model_config = ConfigDict(populate_by_name=True, title="FamousGoose")

    id: int = Field(..., examples=[1])
