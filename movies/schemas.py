"""Request/response shapes exposed over HTTP."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """camelCase on the wire, snake_case accepted on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        serialize_by_alias=True,
        extra="ignore",
    )


class MovieRequest(WireModel):
    title: str = Field(..., min_length=1, max_length=200, description="Title of the movie")
    rating: int = Field(default=0, ge=0, le=10, description="Average rating, 0 to 10")
    synopsis: str = Field(default="", max_length=1000)
    year: int | None = Field(
        default=None,
        ge=1930,
        le=2030,
        validate_default=True,
        description="Release year, 1930 to 2030",
    )
    styles: list[str] = Field(default_factory=list)
    length: int = Field(default=0, description="Duration in minutes")
    trailer_link: str = ""
    realisators: list[str] = Field(default_factory=list)
    scenarists: list[str] = Field(default_factory=list)
    actors: list[str] = Field(default_factory=list)
    producers: list[str] = Field(default_factory=list)

    @field_validator("title")
    @classmethod
    def _title_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Title is required")
        return value

    @field_validator("year")
    @classmethod
    def _year_required(cls, value: int | None) -> int:
        if value is None:
            raise ValueError("Year is required")
        return value


class MovieResponse(WireModel):
    id: uuid.UUID
    title: str
    rating: int
    synopsis: str
    year: int
    styles: list[str]
    length: int
    trailer_link: str
    realisators: list[str]
    scenarists: list[str]
    actors: list[str]
    producers: list[str]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ErrorResponse(WireModel):
    status_code: int
    message: str
    timestamp: datetime = Field(default_factory=_utcnow)


class FieldViolation(BaseModel):
    field: str
    message: str


class ValidationErrorResponse(ErrorResponse):
    errors: list[FieldViolation] = Field(default_factory=list)


class TokenResponse(BaseModel):
    token: str
