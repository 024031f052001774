import dataclasses
import uuid

import pytest

from movies.core.exceptions import MovieAlreadyExists, MovieNotFound
from movies.db import MovieRepository
from movies.services.catalog import MovieService
from movies.services.models import MovieData


def test_create_assigns_id_and_is_retrievable(service, interstellar):
    created = service.create(interstellar)

    assert isinstance(created.id, uuid.UUID)
    fetched = service.get_by_id(created.id)
    assert fetched == created
    assert fetched.title == "Interstellar"
    assert fetched.year == 2014


def test_create_ignores_caller_supplied_id(service, interstellar):
    supplied = uuid.uuid4()
    created = service.create(dataclasses.replace(interstellar, id=supplied))
    assert created.id != supplied


def test_create_duplicate_title_year_raises(service, interstellar):
    service.create(interstellar)

    with pytest.raises(MovieAlreadyExists) as excinfo:
        service.create(dataclasses.replace(interstellar, rating=1))

    assert "Interstellar" in str(excinfo.value)
    assert "2014" in str(excinfo.value)
    assert len(service.get_all()) == 1


def test_create_same_title_other_year_succeeds(service, interstellar):
    service.create(interstellar)
    service.create(dataclasses.replace(interstellar, year=2015))
    assert [m.year for m in service.get_all()] == [2014, 2015]


def test_get_by_id_unknown_raises_not_found(service):
    missing = uuid.uuid4()
    with pytest.raises(MovieNotFound) as excinfo:
        service.get_by_id(missing)
    assert str(missing) in str(excinfo.value)


def test_get_all_is_ordered_and_empty_by_default(service, interstellar):
    assert service.get_all() == []
    service.create(dataclasses.replace(interstellar, title="Tenet", year=2020))
    service.create(interstellar)
    assert [m.title for m in service.get_all()] == ["Interstellar", "Tenet"]


def test_list_fields_round_trip_in_order(service, interstellar):
    created = service.create(interstellar)
    fetched = service.get_by_id(created.id)

    assert fetched.scenarists == ["Jonathan Nolan", "Christopher Nolan"]
    assert fetched.actors == ["Matthew McConaughey", "Anne Hathaway", "Jessica Chastain"]
    assert fetched.styles == ["Sci-Fi", "Drama"]


def test_update_unknown_raises_not_found(service, interstellar):
    with pytest.raises(MovieNotFound):
        service.update(uuid.uuid4(), interstellar)


def test_update_to_pair_of_other_movie_conflicts_and_keeps_original(service, interstellar):
    first = service.create(interstellar)
    service.create(dataclasses.replace(interstellar, title="Tenet", year=2020))

    with pytest.raises(MovieAlreadyExists):
        service.update(first.id, dataclasses.replace(interstellar, title="Tenet", year=2020, rating=2))

    unchanged = service.get_by_id(first.id)
    assert unchanged.title == "Interstellar"
    assert unchanged.year == 2014
    assert unchanged.rating == 9


def test_update_keeping_pair_succeeds(service, interstellar):
    created = service.create(interstellar)

    service.update(created.id, dataclasses.replace(interstellar, rating=10, actors=["Michael Caine"]))

    fetched = service.get_by_id(created.id)
    assert fetched.rating == 10
    assert fetched.actors == ["Michael Caine"]
    assert fetched.id == created.id


def test_update_to_free_pair_succeeds(service, interstellar):
    created = service.create(interstellar)

    service.update(created.id, dataclasses.replace(interstellar, year=2015))

    assert service.get_by_id(created.id).year == 2015


def test_delete_removes_movie(service, interstellar):
    created = service.create(interstellar)

    service.delete(created.id)

    with pytest.raises(MovieNotFound):
        service.get_by_id(created.id)


def test_delete_unknown_raises_not_found(service):
    with pytest.raises(MovieNotFound):
        service.delete(uuid.uuid4())


class _BlindRepository(MovieRepository):
    """Skips the pre-check, like a concurrent writer winning the race."""

    def exists_by_title_year(self, title: str, year: int) -> bool:
        return False


def test_store_constraint_violation_becomes_already_exists(session, interstellar):
    service = MovieService(_BlindRepository(session))
    service.create(interstellar)

    with pytest.raises(MovieAlreadyExists) as excinfo:
        service.create(dataclasses.replace(interstellar, rating=3))

    assert "Interstellar" in excinfo.value.message
    # session rolled back and still usable
    assert len(service.get_all()) == 1


def test_update_constraint_violation_becomes_already_exists(session, interstellar):
    service = MovieService(_BlindRepository(session))
    first = service.create(interstellar)
    service.create(MovieData(title="Tenet", year=2020))

    with pytest.raises(MovieAlreadyExists):
        service.update(first.id, MovieData(title="Tenet", year=2020))

    assert service.get_by_id(first.id).title == "Interstellar"
