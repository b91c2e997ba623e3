# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from shopcenter.api import create_app
from shopcenter.data.database import create_db_engine, create_session_factory, init_db
from shopcenter.utils.settings import Settings
from tests.factories import FakeGenerator


@pytest.fixture
def settings():
    return Settings(database_url="sqlite://", gemini_api_key="test-key")


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def file_engine(tmp_path):
    """On-disk database, every session gets its own connection."""
    engine = create_db_engine(f"sqlite:///{tmp_path / 'shop.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = create_session_factory(engine)()
    yield session
    session.close()


@pytest.fixture
def generator():
    return FakeGenerator()


@pytest.fixture
def app(settings, generator):
    app = create_app(settings, generator=generator)
    yield app
    app.state.engine.dispose()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def app_db(app):
    session = app.state.session_factory()
    yield session
    session.close()
