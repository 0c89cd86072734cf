"""
Pytest configuration shared across the API and client tests.

The app runs against an in-memory SQLite database and a fake image host,
so no Postgres server or Cloudinary account is needed.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from cinelog.core.image_host import get_image_host
from cinelog.core.interfaces import ImageHostInterface, ImageHostError
from cinelog.db import Base, get_db
from cinelog.main import app


class FakeImageHost(ImageHostInterface):
    """Records uploads instead of talking to Cloudinary"""

    def __init__(self):
        self.uploads = []
        self.error = None

    def upload(self, file, filename=None):
        if self.error:
            raise ImageHostError(self.error)
        self.uploads.append((filename, file.read()))
        return f"https://res.cloudinary.com/demo/image/upload/movies/{filename}"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def image_host():
    return FakeImageHost()


@pytest.fixture
def client(engine, image_host):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_image_host] = lambda: image_host
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def movie_payload():
    return {
        "title": "Dune",
        "type": "Movie",
        "director": "Denis Villeneuve",
        "budget": "$165M",
        "location": "Jordan",
        "duration": "155 min",
        "yearTime": "2021",
    }


@pytest.fixture
def make_movie(client, movie_payload):
    """Create a movie through the API and return its JSON"""
    def _make_movie(**overrides):
        body = dict(movie_payload, **overrides)
        response = client.post("/movies", json=body)
        assert response.status_code == 200, response.text
        return response.json()
    return _make_movie
