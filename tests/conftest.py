import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from movies.core.config import get_settings
from movies.db import MovieRepository, get_session, init_models
from movies.main import app
from movies.services.catalog import MovieService
from movies.services.models import MovieData

TEST_SECRET = "unit-test-signing-secret-0123456789abcdef"


@pytest.fixture(autouse=True)
def reset_env(monkeypatch):
    # Keep tokens deterministic and independent of any local .env
    monkeypatch.setenv("JWT_SECRET", TEST_SECRET)
    monkeypatch.setenv("DB_RETRY_ATTEMPTS", "0")
    monkeypatch.delenv("JWT_ISSUER", raising=False)
    monkeypatch.delenv("JWT_AUDIENCE", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_models(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def repository(session):
    return MovieRepository(session)


@pytest.fixture
def service(repository):
    return MovieService(repository)


@pytest.fixture
def interstellar():
    return MovieData(
        title="Interstellar",
        year=2014,
        rating=9,
        synopsis="Explorers travel through a wormhole.",
        styles=["Sci-Fi", "Drama"],
        length=169,
        trailer_link="https://example.com/interstellar",
        realisators=["Christopher Nolan"],
        scenarists=["Jonathan Nolan", "Christopher Nolan"],
        actors=["Matthew McConaughey", "Anne Hathaway", "Jessica Chastain"],
        producers=["Emma Thomas", "Lynda Obst"],
    )


@pytest.fixture
def client(session_factory):
    def _override_session():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_session] = _override_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    token = client.get("/api/v2/Token").json()["token"]
    return {"Authorization": f"Bearer {token}"}
