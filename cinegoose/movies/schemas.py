"""
Pydantic schemas for movie endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class NewMovie(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1, examples=["The Goosefather"])
    director: str = Field(..., min_length=1, examples=["Goose Coppola"])
    release_date: str = Field(..., alias="releaseDate", examples=["1972-03-24"])


class Movie(NewMovie):
    model_config = ConfigDict(populate_by_name=True, title="Movie")

    id: int = Field(..., examples=[1])
