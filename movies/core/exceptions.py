"""Domain failures raised by the movie catalog."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    ALREADY_EXISTS = "already_exists"
    NOT_FOUND = "not_found"
    UNEXPECTED = "unexpected"


class MovieError(Exception):
    """Base exception for catalog business-rule violations."""

    kind: ErrorKind = ErrorKind.UNEXPECTED
    default_message = "An unexpected catalog error occurred."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class MovieAlreadyExists(MovieError):
    """Raised when another movie already holds the same title and year."""

    kind = ErrorKind.ALREADY_EXISTS
    default_message = "A movie with the same title and year already exists."

    @classmethod
    def for_pair(cls, title: str, year: int) -> "MovieAlreadyExists":
        return cls(f"A movie with the title '{title}' and year {year} already exists.")


class MovieNotFound(MovieError):
    """Raised when no movie matches the requested id."""

    kind = ErrorKind.NOT_FOUND
    default_message = "The movie was not found."

    @classmethod
    def for_id(cls, movie_id: object) -> "MovieNotFound":
        return cls(f"The movie with ID '{movie_id}' was not found.")
