import pytest
import requests

from app.core.exceptions import (
    BadRequestException, ConfigurationException, MovieAlreadyExistsException,
    NotFoundException, ServiceUnavailableException
)
from app.models.movie import Movie
from app.routers.movies import get_movie_service
from app.services.movie_service import MovieService, map_omdb_movie, parse_rating, parse_year
from conftest import SHAWSHANK


def test_add_by_imdb_id_maps_omdb_fields(client, admin_headers, omdb, counter):
    response = client.post("/addByImdbId", json={"imdbId": "tt0111161"}, headers=admin_headers)

    assert response.status_code == 201
    body = response.json()
    assert body["imdbId"] == "tt0111161"
    assert body["title"] == "The Shawshank Redemption"
    assert body["year"] == 1994
    assert body["rated"] == "R"
    assert body["released"] == "14 Oct 1994"
    assert body["runtime"] == "142 min"
    assert body["genre"] == "Drama"
    assert body["director"] == "Frank Darabont"
    assert body["writer"] == "Stephen King, Frank Darabont"
    assert body["actors"] == "Tim Robbins, Morgan Freeman, Bob Gunton"
    assert body["plot"].startswith("Over the course")
    assert body["poster"].startswith("https://")
    assert body["imdbRating"] == 9.3
    assert isinstance(body["imdbRating"], float)
    assert body["boxOffice"] == "$28,767,189"
    assert omdb.calls == ["tt0111161"]
    assert counter.snapshot() == {"direct": 0, "imdb": 1}

    assert client.get(f"/getMovies/{body['id']}").status_code == 200


def test_add_by_imdb_id_rating_not_available_becomes_zero(client, admin_headers, omdb):
    omdb.movies["tt0000001"] = {**SHAWSHANK, "imdbID": "tt0000001", "imdbRating": "N/A"}
    del omdb.movies["tt0000001"]["BoxOffice"]

    response = client.post("/addByImdbId", json={"imdbId": "tt0000001"}, headers=admin_headers)

    assert response.status_code == 201
    assert response.json()["imdbRating"] == 0
    assert response.json()["boxOffice"] == "N/A"


@pytest.mark.parametrize("payload", [{}, {"imdbId": ""}, {"imdbId": "   "}])
def test_add_by_imdb_id_requires_id(client, admin_headers, omdb, payload):
    response = client.post("/addByImdbId", json=payload, headers=admin_headers)

    assert response.status_code == 400
    assert response.json() == {"error": {"code": "BAD_REQUEST", "message": "imdbId is required"}}
    assert omdb.calls == []


@pytest.mark.parametrize("imdb_id", ["abc123", "tt", "tt12a", "TT0111161", "0111161"])
def test_add_by_imdb_id_rejects_malformed_id_before_fetch(client, admin_headers, omdb, imdb_id):
    response = client.post("/addByImdbId", json={"imdbId": imdb_id}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "BAD_REQUEST"
    assert omdb.calls == []


def test_add_by_imdb_id_duplicate_conflicts_without_fetch(client, admin_headers, omdb, db_session):
    assert client.post("/addByImdbId", json={"imdbId": "tt0111161"}, headers=admin_headers).status_code == 201
    omdb.calls.clear()

    response = client.post("/addByImdbId", json={"imdbId": "tt0111161"}, headers=admin_headers)

    assert response.status_code == 409
    assert response.json() == {"error": {"code": "CONFLICT", "message": "Movie already exists in database"}}
    assert omdb.calls == []
    assert db_session.query(Movie).count() == 1


def test_add_by_imdb_id_upstream_not_found(client, admin_headers, db_session):
    response = client.post("/addByImdbId", json={"imdbId": "tt9999999"}, headers=admin_headers)

    assert response.status_code == 404
    assert response.json()["error"] == {"code": "NOT_FOUND", "message": "OMDB Error: Incorrect IMDb ID."}
    assert db_session.query(Movie).count() == 0


def test_add_by_imdb_id_upstream_unreachable(client, admin_headers, omdb, db_session):
    omdb.unreachable = True

    response = client.post("/addByImdbId", json={"imdbId": "tt0111161"}, headers=admin_headers)

    assert response.status_code == 503
    assert response.json()["error"]["code"] == "SERVICE_UNAVAILABLE"
    assert db_session.query(Movie).count() == 0


def test_add_by_imdb_id_without_api_key(client, admin_headers, omdb, settings):
    settings.OMDB_API_KEY = None

    response = client.post("/addByImdbId", json={"imdbId": "tt0111161"}, headers=admin_headers)

    assert response.status_code == 500
    assert response.json()["error"]["code"] == "INTERNAL_SERVER_ERROR"
    assert omdb.calls == []


def test_pipeline_stages_raise_typed_errors(movie_service, omdb):
    with pytest.raises(BadRequestException):
        movie_service.validate_imdb_id(None)
    assert movie_service.validate_imdb_id(" tt0111161 ") == "tt0111161"

    movie_service.create_movie_by_imdb_id("tt0111161")
    with pytest.raises(MovieAlreadyExistsException):
        movie_service.ensure_not_stored("tt0111161")

    with pytest.raises(NotFoundException):
        movie_service.fetch_from_omdb("tt0000404")

    omdb.unreachable = True
    with pytest.raises(ServiceUnavailableException):
        movie_service.fetch_from_omdb("tt0111161")

    movie_service.settings.OMDB_API_KEY = ""
    with pytest.raises(ConfigurationException):
        movie_service.fetch_from_omdb("tt0111161")


@pytest.mark.parametrize("raw, expected", [
    ("1994", 1994),
    ("2005–2007", 2005),
    ("2019–", 2019),
    ("N/A", 0),
    ("", 0),
    (None, 0),
])
def test_parse_year(raw, expected):
    assert parse_year(raw) == expected


@pytest.mark.parametrize("raw, expected", [
    ("9.3", 9.3),
    ("N/A", 0),
    (None, 0),
    ("not rated", 0),
])
def test_parse_rating(raw, expected):
    assert parse_rating(raw) == expected


def test_map_omdb_movie_uses_internal_field_names():
    mapped = map_omdb_movie(SHAWSHANK)

    assert mapped["imdb_id"] == "tt0111161"
    assert mapped["imdb_rating"] == 9.3
    assert mapped["box_office"] == "$28,767,189"
    assert set(mapped) == {c.key for c in Movie.__mapper__.column_attrs} - {"id", "created_at", "updated_at"}


def test_add_by_imdb_id_malformed_upstream_body_is_unavailable(client, admin_headers, monkeypatch, db_session, settings):
    def fake_get(self, url, params=None, timeout=None):
        response = requests.Response()
        response.status_code = 200
        response._content = b'["x"]'
        return response

    monkeypatch.setattr(requests.Session, "get", fake_get)
    client.app.dependency_overrides[get_movie_service] = lambda: MovieService(db_session, settings=settings)

    response = client.post("/addByImdbId", json={"imdbId": "tt0111161"}, headers=admin_headers)

    assert response.status_code == 503
    assert response.json()["error"]["code"] == "SERVICE_UNAVAILABLE"
    assert db_session.query(Movie).count() == 0
