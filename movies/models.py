"""SQLAlchemy ORM models.

This module defines the "movies" table. List-valued fields are stored as
JSON text arrays and compared by value so that change tracking notices a
new list with different contents and ignores an equal one.
"""

from __future__ import annotations

import json
import uuid
from typing import Any, Sequence

from sqlalchemy import Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.ext.mutable import MutableList
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


def lists_equal(left: Sequence[str] | None, right: Sequence[str] | None) -> bool:
    """Structural equality for list columns; ``None`` counts as empty."""

    return list(left or []) == list(right or [])


def serialize_list(values: Sequence[str] | None) -> str:
    return json.dumps(list(values or []), ensure_ascii=False)


def deserialize_list(raw: str | None) -> list[str]:
    if not raw:
        return []
    return list(json.loads(raw))


class JSONList(TypeDecorator):
    """``list[str]`` persisted as a JSON array in a text column."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Any) -> str:
        return serialize_list(value)

    def process_result_value(self, value: Any, dialect: Any) -> list[str]:
        return deserialize_list(value)

    def compare_values(self, x: Any, y: Any) -> bool:
        if isinstance(x, (list, tuple, type(None))) and isinstance(y, (list, tuple, type(None))):
            return lists_equal(x, y)
        return x == y


def _list_column() -> Mapped[list[str]]:
    return mapped_column(MutableList.as_mutable(JSONList()), default=list, nullable=False)


class Base(DeclarativeBase):
    pass


class Movie(Base):
    """A catalog entry; (title, year) is unique across the table."""

    __tablename__ = "movies"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    rating: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    synopsis: Mapped[str] = mapped_column(String(1000), default="", nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    styles: Mapped[list[str]] = _list_column()
    length: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    trailer_link: Mapped[str] = mapped_column(String(2048), default="", nullable=False)
    realisators: Mapped[list[str]] = _list_column()
    scenarists: Mapped[list[str]] = _list_column()
    actors: Mapped[list[str]] = _list_column()
    producers: Mapped[list[str]] = _list_column()

    __table_args__ = (
        UniqueConstraint("title", "year", name="uq_movies_title_year"),
    )

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"Movie(id={self.id}, title={self.title}, year={self.year})"
