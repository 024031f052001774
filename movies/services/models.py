"""Shared dataclasses for service layer."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field


@dataclass(slots=True)
class MovieData:
    """Internal movie record passed between the API and the catalog service."""

    title: str
    year: int
    id: uuid.UUID | None = None
    rating: int = 0
    synopsis: str = ""
    styles: list[str] = field(default_factory=list)
    length: int = 0
    trailer_link: str = ""
    realisators: list[str] = field(default_factory=list)
    scenarists: list[str] = field(default_factory=list)
    actors: list[str] = field(default_factory=list)
    producers: list[str] = field(default_factory=list)
