import httpx
import pytest
from fastapi.testclient import TestClient

from app import create_app
from config import Settings
from dependencies import get_http_client

GEOCODE_BODY = {
    "results": [
        {
            "formatted_address": "Tacoma, WA 98405, USA",
            "geometry": {"location": {"lat": 47.23, "lng": -122.46}},
        }
    ],
    "status": "OK",
}

FORECAST_BODY = {
    "daily": {
        "data": [
            {"time": 1514764800, "summary": "Clear throughout the day."},
            {"time": 1514851200, "summary": "Light rain in the morning."},
        ]
    }
}

MOVIES_BODY = {
    "results": [
        {
            "title": "Sleepless in Seattle",
            "overview": "A young boy who tries to set his dad up on a date.",
            "vote_average": 6.6,
            "poster_path": "/afkYP15OeUOD0tFEmj6VvejuOcz.jpg",
            "popularity": 8.2,
            "release_date": "1993-06-24",
        },
        {
            "title": "Seattle Superstorm",
            "overview": "",
            "vote_average": 4.1,
            "poster_path": None,
            "popularity": 1.5,
            "release_date": "",
        },
    ]
}

YELP_BODY = {
    "businesses": [
        {
            "name": "Pike Place Chowder",
            "image_url": "https://s3-media2.fl.yelpcdn.com/bphoto/ijju.jpg",
            "price": "$$",
            "rating": 4.5,
            "url": "https://www.yelp.com/biz/pike-place-chowder-seattle",
        },
        {
            "name": "Corner Cart",
            "image_url": "",
            "rating": 4.0,
            "url": "https://www.yelp.com/biz/corner-cart-seattle",
        },
    ]
}


class FakeUpstream:
    """Serves canned JSON for each third-party API host and records every request."""

    def __init__(self):
        self.responses = {
            "maps.googleapis.com": (200, GEOCODE_BODY),
            "api.darksky.net": (200, FORECAST_BODY),
            "api.themoviedb.org": (200, MOVIES_BODY),
            "api.yelp.com": (200, YELP_BODY),
        }
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status_code, body = self.responses[request.url.host]
        return httpx.Response(status_code, json=body)

    def calls(self, host: str) -> int:
        return sum(1 for r in self.requests if r.url.host == host)


@pytest.fixture
def settings(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    monkeypatch.setenv("GOOGLE_API_KEY", "test-google-key")
    monkeypatch.setenv("WEATHER_API_KEY", "test-weather-key")
    monkeypatch.setenv("YELP_API_KEY", "test-yelp-key")
    monkeypatch.setenv("THE_MOVIE_DB_API", "test-tmdb-key")
    monkeypatch.setenv("GIT_SHA", "abc123")
    return Settings()


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def client(settings, upstream):
    app = create_app(settings)
    mock_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler))
    app.dependency_overrides[get_http_client] = lambda: mock_client
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
