"""Database session management and repositories."""

from __future__ import annotations

import functools
import logging
import time
import uuid
from typing import Callable, Iterator, TypeVar

from sqlalchemy import create_engine, exists, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker

from movies.core.config import get_settings
from movies.models import Base, Movie

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _database_url() -> str:
    """Return the SQLAlchemy URL from settings (defaults to local SQLite for dev)."""
    return get_settings().database_url


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        # FastAPI runs sync endpoints in a threadpool.
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


engine = create_engine(_database_url(), future=True, **_engine_kwargs(_database_url()))
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def retry_on_disconnect(func: Callable[..., T]) -> Callable[..., T]:
    """Retry transient connection failures with capped exponential backoff."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> T:
        settings = get_settings()
        attempt = 0
        while True:
            try:
                return func(*args, **kwargs)
            except OperationalError as exc:
                if attempt >= settings.db_retry_attempts:
                    raise
                attempt += 1
                delay = min(settings.db_retry_max_delay, 0.5 * 2 ** (attempt - 1))
                logger.warning(
                    "Database unavailable (%s), retry %s/%s in %.1fs",
                    exc.orig,
                    attempt,
                    settings.db_retry_attempts,
                    delay,
                )
                time.sleep(delay)

    return wrapper


@retry_on_disconnect
def init_models(bind=None) -> None:
    """Create tables if they do not exist."""
    Base.metadata.create_all(bind=bind or engine)


def get_session() -> Iterator[Session]:
    """FastAPI-friendly dependency that rolls back on failure and always closes."""

    session = SessionLocal()
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


class MovieRepository:
    """Data access for movie rows. Absence is ``None``/``False``, never an error."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_all(self) -> list[Movie]:
        query = select(Movie).order_by(Movie.title, Movie.year)
        return list(self.session.execute(query).scalars())

    def get_by_id(self, movie_id: uuid.UUID) -> Movie | None:
        return self.session.get(Movie, movie_id)

    def exists_by_title_year(self, title: str, year: int) -> bool:
        query = select(exists().where(Movie.title == title, Movie.year == year))
        return bool(self.session.execute(query).scalar())

    def add(self, movie: Movie) -> None:
        self.session.add(movie)

    def delete(self, movie: Movie) -> None:
        self.session.delete(movie)

    def save_changes(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()
