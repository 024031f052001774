"""Field-by-field conversion between wire shapes, internal records and ORM rows."""

from __future__ import annotations

import uuid

from movies.models import Movie, lists_equal
from movies.schemas import MovieRequest, MovieResponse
from movies.services.models import MovieData

LIST_FIELDS = ("styles", "realisators", "scenarists", "actors", "producers")
SCALAR_FIELDS = ("title", "rating", "synopsis", "year", "length", "trailer_link")


def request_to_data(request: MovieRequest) -> MovieData:
    """Inbound payload to internal record. The id is always server-assigned."""

    return MovieData(
        title=request.title,
        year=request.year,
        rating=request.rating,
        synopsis=request.synopsis,
        styles=list(request.styles),
        length=request.length,
        trailer_link=request.trailer_link,
        realisators=list(request.realisators),
        scenarists=list(request.scenarists),
        actors=list(request.actors),
        producers=list(request.producers),
    )


def record_to_data(movie: Movie) -> MovieData:
    return MovieData(
        id=movie.id,
        title=movie.title,
        year=movie.year,
        rating=movie.rating,
        synopsis=movie.synopsis,
        styles=list(movie.styles or []),
        length=movie.length,
        trailer_link=movie.trailer_link,
        realisators=list(movie.realisators or []),
        scenarists=list(movie.scenarists or []),
        actors=list(movie.actors or []),
        producers=list(movie.producers or []),
    )


def data_to_record(data: MovieData, movie_id: uuid.UUID) -> Movie:
    return Movie(
        id=movie_id,
        title=data.title,
        year=data.year,
        rating=data.rating,
        synopsis=data.synopsis,
        styles=list(data.styles),
        length=data.length,
        trailer_link=data.trailer_link,
        realisators=list(data.realisators),
        scenarists=list(data.scenarists),
        actors=list(data.actors),
        producers=list(data.producers),
    )


def apply_to_record(data: MovieData, movie: Movie) -> list[str]:
    """Overwrite every mutable column of ``movie``; returns the changed names."""

    changed: list[str] = []
    for name in SCALAR_FIELDS:
        value = getattr(data, name)
        if getattr(movie, name) != value:
            setattr(movie, name, value)
            changed.append(name)
    for name in LIST_FIELDS:
        value = getattr(data, name)
        if not lists_equal(getattr(movie, name), value):
            setattr(movie, name, list(value))
            changed.append(name)
    return changed


def data_to_response(data: MovieData) -> MovieResponse:
    return MovieResponse(
        id=data.id,
        title=data.title,
        rating=data.rating,
        synopsis=data.synopsis,
        year=data.year,
        styles=list(data.styles),
        length=data.length,
        trailer_link=data.trailer_link,
        realisators=list(data.realisators),
        scenarists=list(data.scenarists),
        actors=list(data.actors),
        producers=list(data.producers),
    )
