"""Business rules for the movie catalog."""

from __future__ import annotations

import logging
import uuid

from fastapi import Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from movies.core.exceptions import MovieAlreadyExists, MovieNotFound
from movies.db import MovieRepository, get_session
from movies.models import Movie
from movies.services.mapping import apply_to_record, data_to_record, record_to_data
from movies.services.models import MovieData

logger = logging.getLogger(__name__)


class MovieService:
    """Enforces (title, year) uniqueness and id existence around the repository.

    The uniqueness pre-check only produces a clean ``MovieAlreadyExists``; the
    store's unique constraint stays authoritative, and a violation reported at
    commit time is translated into the same failure.
    """

    def __init__(self, repository: MovieRepository) -> None:
        self.repository = repository

    def create(self, data: MovieData) -> MovieData:
        if self.repository.exists_by_title_year(data.title, data.year):
            raise MovieAlreadyExists.for_pair(data.title, data.year)

        movie = data_to_record(data, uuid.uuid4())
        self.repository.add(movie)
        self._commit(data.title, data.year)
        return record_to_data(movie)

    def get_all(self) -> list[MovieData]:
        return [record_to_data(movie) for movie in self.repository.get_all()]

    def get_by_id(self, movie_id: uuid.UUID) -> MovieData:
        return record_to_data(self._require(movie_id))

    def update(self, movie_id: uuid.UUID, data: MovieData) -> MovieData:
        movie = self._require(movie_id)

        if movie.title != data.title or movie.year != data.year:
            if self.repository.exists_by_title_year(data.title, data.year):
                raise MovieAlreadyExists.for_pair(data.title, data.year)

        changed = apply_to_record(data, movie)
        logger.debug("Updating movie %s, changed fields: %s", movie_id, changed)
        self._commit(data.title, data.year)
        return record_to_data(movie)

    def delete(self, movie_id: uuid.UUID) -> None:
        movie = self._require(movie_id)
        self.repository.delete(movie)
        self.repository.save_changes()

    def _require(self, movie_id: uuid.UUID) -> Movie:
        movie = self.repository.get_by_id(movie_id)
        if movie is None:
            raise MovieNotFound.for_id(movie_id)
        return movie

    def _commit(self, title: str, year: int) -> None:
        try:
            self.repository.save_changes()
        except IntegrityError as exc:
            # Lost the race against a concurrent writer between check and write.
            self.repository.rollback()
            logger.warning("Unique constraint rejected (%s, %s): %s", title, year, exc.orig)
            raise MovieAlreadyExists.for_pair(title, year) from exc


def get_movie_service(session: Session = Depends(get_session)) -> MovieService:
    """Provider building the service on top of the request's session."""

    return MovieService(MovieRepository(session))
