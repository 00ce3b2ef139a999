import pytest
from fastapi.testclient import TestClient

from main import create_app
from stockroom.core import Base, Settings, make_engine, make_session_factory
from stockroom.services.seed_service import init_database


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite://",
        SEED_ON_STARTUP=True,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def engine(settings):
    engine = make_engine(settings)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seeded_db(engine, session_factory):
    init_database(engine, session_factory)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as client:
        yield client
