"""Tests for the HTTP API against a local SQLite database."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from cinegoose.core.config import Settings
from cinegoose.core.d1 import D1Credentials, D1HttpDriver
from cinegoose.core.local import LocalSQLiteDriver
from cinegoose.main import ROOT_MESSAGE, create_app

MOVIE = {"title": "The Goosefather", "director": "Goose Coppola", "releaseDate": "1972-03-24"}


@pytest.fixture()
def client(local_settings: Settings) -> Iterator[TestClient]:
    app = create_app(local_settings)
    with TestClient(app) as test_client:
        yield test_client


def _create_movie(client: TestClient) -> dict:
    response = client.post("/api/movie", json=MOVIE)
    assert response.status_code == 201
    return response.json()


def _create_goose(client: TestClient, movie_id: int) -> dict:
    response = client.post(
        "/api/geese",
        json={"name": "Honkleone", "movieId": movie_id, "character": "Don Vito Honkleone"},
    )
    assert response.status_code == 201
    return response.json()


def test_root_and_health(client: TestClient) -> None:
    assert client.get("/").json() == {"message": ROOT_MESSAGE}
    assert client.get("/health").json() == {"status": "ok"}


def test_openapi_document(client: TestClient) -> None:
    doc = client.get("/openapi.json").json()

    assert doc["info"]["title"] == "Cinegoose API"
    assert doc["info"]["version"] == "1.0.0"
    assert "/api/movie" in doc["paths"]
    assert "/api/quotes/{quote_id}" in doc["paths"]
    assert "releaseDate" in doc["components"]["schemas"]["Movie"]["properties"]


def test_movies_crud(client: TestClient) -> None:
    assert client.get("/api/movies").json() == []

    created = _create_movie(client)
    assert created == {"id": 1, **MOVIE}

    assert client.get("/api/movies").json() == [created]
    assert client.get(f"/api/movies/{created['id']}").json() == created


def test_movie_not_found(client: TestClient) -> None:
    response = client.get("/api/movies/999")

    assert response.status_code == 404
    assert response.json() == {"detail": "Movie not found."}


def test_movie_id_must_be_numeric(client: TestClient) -> None:
    assert client.get("/api/movies/abc").status_code == 422


def test_create_movie_validates_body(client: TestClient) -> None:
    response = client.post("/api/movie", json={"title": "No Director"})

    assert response.status_code == 422


def test_geese_crud(client: TestClient) -> None:
    movie = _create_movie(client)

    goose = _create_goose(client, movie["id"])
    assert goose == {
        "id": 1,
        "name": "Honkleone",
        "movieId": movie["id"],
        "character": "Don Vito Honkleone",
        "description": None,
    }
    assert client.get("/api/geese").json() == [goose]
    assert client.get("/api/geese/1").json() == goose
    assert client.get("/api/geese/2").status_code == 404


def test_goose_requires_existing_movie(client: TestClient) -> None:
    response = client.post(
        "/api/geese",
        json={"name": "Stray", "movieId": 42, "character": "Nobody"},
    )

    assert response.status_code == 404
    assert response.json() == {"detail": "Movie not found."}


def test_quotes_crud(client: TestClient) -> None:
    goose = _create_goose(client, _create_movie(client)["id"])

    response = client.post(
        "/api/quotes",
        json={
            "gooseId": goose["id"],
            "quote": "I'm gonna make him a honk he can't refuse.",
            "context": "Speaking to Tom Hagen about resolving a dispute",
            "timestamp": "00:45:30",
        },
    )
    assert response.status_code == 201
    quote = response.json()
    assert quote["id"] == 1
    assert quote["gooseId"] == goose["id"]
    assert quote["timestamp"] == "00:45:30"

    assert client.get("/api/quotes").json() == [quote]
    assert client.get("/api/quotes/1").json() == quote
    assert client.get("/api/quotes/5").status_code == 404


def test_quote_requires_existing_goose(client: TestClient) -> None:
    response = client.post("/api/quotes", json={"gooseId": 3, "quote": "Honk."})

    assert response.status_code == 404


def test_injected_driver_is_used(tmp_path: Path) -> None:
    driver = LocalSQLiteDriver(tmp_path / "injected.sqlite")
    app = create_app(Settings(environment="development"), driver=driver)

    with TestClient(app) as test_client:
        _create_movie(test_client)

    assert (tmp_path / "injected.sqlite").exists()


def test_remote_failure_maps_to_bad_gateway() -> None:
    driver = D1HttpDriver(
        D1Credentials(account_id="a", database_id="d", api_token="t"),
        transport=httpx.MockTransport(lambda _: httpx.Response(503, text="unavailable")),
    )
    app = create_app(Settings(environment="production", create_schema=False), driver=driver)

    with TestClient(app) as test_client:
        response = test_client.get("/api/movies")

    assert response.status_code == 502
    assert response.json() == {"detail": "Database request failed (http_status)."}


def test_remote_rows_are_mapped_by_column_order() -> None:
    rows = [{"id": 7, "title": "Goose Wars", "director": "George Honkas", "release_date": "1977-05-25"}]
    body = {"success": True, "errors": [], "result": [{"success": True, "results": rows}]}
    driver = D1HttpDriver(
        D1Credentials(account_id="a", database_id="d", api_token="t"),
        transport=httpx.MockTransport(lambda _: httpx.Response(200, json=body)),
    )
    app = create_app(Settings(environment="production", create_schema=False), driver=driver)

    with TestClient(app) as test_client:
        response = test_client.get("/api/movies/7")

    assert response.json() == {
        "id": 7,
        "title": "Goose Wars",
        "director": "George Honkas",
        "releaseDate": "1977-05-25",
    }
