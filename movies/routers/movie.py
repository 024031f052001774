"""CRUD endpoints for the movie catalog."""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse

from movies.core.auth import require_token
from movies.schemas import ErrorResponse, MovieRequest, MovieResponse, ValidationErrorResponse
from movies.services.catalog import MovieService, get_movie_service
from movies.services.mapping import data_to_response, request_to_data

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_token)])

_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}
_CONFLICT = {status.HTTP_409_CONFLICT: {"model": ErrorResponse}}
_INVALID = {status.HTTP_400_BAD_REQUEST: {"model": ValidationErrorResponse}}


@router.post(
    "",
    response_class=PlainTextResponse,
    summary="Create a movie",
    responses={**_INVALID, **_CONFLICT},
)
def create_movie(
    payload: MovieRequest,
    service: MovieService = Depends(get_movie_service),
) -> str:
    """Create a movie; (title, year) must not be taken yet."""

    movie = service.create(request_to_data(payload))
    logger.info("Movie created: %s (%s) id=%s", movie.title, movie.year, movie.id)
    return "Movie created successfully."


@router.get("", response_model=list[MovieResponse], summary="List all movies")
def list_movies(service: MovieService = Depends(get_movie_service)) -> list[MovieResponse]:
    return [data_to_response(movie) for movie in service.get_all()]


@router.get(
    "/{movie_id}",
    response_model=MovieResponse,
    summary="Get a movie by id",
    responses=_NOT_FOUND,
)
def get_movie(
    movie_id: uuid.UUID,
    service: MovieService = Depends(get_movie_service),
) -> MovieResponse:
    return data_to_response(service.get_by_id(movie_id))


@router.put(
    "/{movie_id}",
    response_class=PlainTextResponse,
    summary="Replace a movie",
    responses={**_INVALID, **_NOT_FOUND, **_CONFLICT},
)
def update_movie(
    movie_id: uuid.UUID,
    payload: MovieRequest,
    service: MovieService = Depends(get_movie_service),
) -> str:
    """Overwrite every field but the id; a (title, year) held by another movie is a conflict."""

    service.update(movie_id, request_to_data(payload))
    return "Movie updated successfully."


@router.delete(
    "/{movie_id}",
    response_class=PlainTextResponse,
    summary="Delete a movie",
    responses=_NOT_FOUND,
)
def delete_movie(
    movie_id: uuid.UUID,
    service: MovieService = Depends(get_movie_service),
) -> str:
    service.delete(movie_id)
    logger.info("Movie deleted: id=%s", movie_id)
    return "Movie deleted successfully."
