import os

# Settings are read at import time, so point them at test values first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ALGORITHM"] = "HS256"
os.environ["OMDB_API_KEY"] = "test-omdb-key"
os.environ.pop("DB_SCHEMA", None)
os.environ.pop("API_PREFIX", None)

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import get_settings
from app.core.interfaces import OmdbClientInterface, OmdbResponse, OmdbError
from app.core.metrics import CreationCounter
from app.db import Base, get_db
from app.main import app
from app.routers.movies import get_movie_service
from app.services.movie_service import MovieService


SHAWSHANK = {
    "Title": "The Shawshank Redemption",
    "Year": "1994",
    "Rated": "R",
    "Released": "14 Oct 1994",
    "Runtime": "142 min",
    "Genre": "Drama",
    "Director": "Frank Darabont",
    "Writer": "Stephen King, Frank Darabont",
    "Actors": "Tim Robbins, Morgan Freeman, Bob Gunton",
    "Plot": "Over the course of several years, two convicts form a friendship.",
    "Poster": "https://m.media-amazon.com/images/M/shawshank.jpg",
    "imdbRating": "9.3",
    "imdbID": "tt0111161",
    "BoxOffice": "$28,767,189",
    "Response": "True",
}


class FakeOmdbClient(OmdbClientInterface):
    """In-memory OMDB stand-in that records every lookup"""

    def __init__(self):
        self.movies = {SHAWSHANK["imdbID"]: dict(SHAWSHANK)}
        self.calls = []
        self.unreachable = False

    def get_by_imdb_id(self, imdb_id):
        self.calls.append(imdb_id)
        if self.unreachable:
            raise OmdbError("Request failed: connection refused")
        if imdb_id not in self.movies:
            return OmdbResponse({"Response": "False", "Error": "Incorrect IMDb ID."}, 200, False, "Incorrect IMDb ID.")
        return OmdbResponse(self.movies[imdb_id], 200, True)


def make_token(role="admin", user_id="user-1", **claims):
    payload = {"userId": user_id, **claims}
    if role is not None:
        payload["role"] = role
    settings = get_settings()
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def omdb():
    return FakeOmdbClient()


@pytest.fixture
def settings():
    return get_settings().model_copy()


@pytest.fixture
def counter():
    return CreationCounter()


@pytest.fixture
def movie_service(db_session, omdb, settings, counter):
    return MovieService(db_session, omdb_client=omdb, settings=settings, counter=counter)


@pytest.fixture
def client(db_session, movie_service):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_movie_service] = lambda: movie_service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {make_token('admin')}"}


@pytest.fixture
def user_headers():
    return {"Authorization": f"Bearer {make_token('user', user_id='user-2')}"}


@pytest.fixture
def movie_payload():
    return {
        "imdbId": "tt0468569",
        "title": "The Dark Knight",
        "year": 2008,
        "rated": "PG-13",
        "released": "18 Jul 2008",
        "runtime": "152 min",
        "genre": "Action, Crime, Drama",
        "director": "Christopher Nolan",
        "writer": "Jonathan Nolan, Christopher Nolan",
        "actors": "Christian Bale, Heath Ledger",
        "plot": "Batman faces the Joker.",
        "poster": "https://m.media-amazon.com/images/M/darkknight.jpg",
        "imdbRating": 9.0,
        "boxOffice": "$534,987,076",
    }
