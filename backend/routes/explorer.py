"""City explorer routes: one proxied third-party API per endpoint.

/location → Google Geocoding    (cached forever by search query)
/weather  → Dark Sky forecast   (cached 30 minutes per location)
/yelp     → Yelp business search (not cached)
/movies   → TMDB movie search   (cached 30 days per location)

Nested parameters arrive in the jQuery encoding the front-end uses,
e.g. ?data[latitude]=47.2&data[longitude]=-122.4&data[id]=7.
"""

import logging

import httpx
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from config import Settings
from dependencies import get_http_client, get_session, get_settings
from services import locations, movies, weather, yelp

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/location")
async def location(
    data: str = Query(...),
    session: AsyncSession = Depends(get_session),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> dict:
    """Geocode a free-text query, serving the stored record when seen before."""
    saved = await locations.get_location(session, client, settings.google_api_key, data)
    return saved.to_dict()


@router.get("/weather")
async def weather_forecast(
    latitude: float = Query(..., alias="data[latitude]"),
    longitude: float = Query(..., alias="data[longitude]"),
    location_id: int = Query(..., alias="data[id]"),
    session: AsyncSession = Depends(get_session),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> list[dict]:
    records = await weather.get_weather(
        session, client, settings.weather_api_key, location_id, latitude, longitude
    )
    return [r.to_dict() for r in records]


@router.get("/yelp")
async def yelp_search(
    search_query: str = Query(..., alias="data[search_query]"),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> list[dict]:
    return await yelp.search_businesses(client, settings.yelp_api_key, search_query)


@router.get("/movies")
async def movie_search(
    search_query: str = Query(..., alias="data[search_query]"),
    location_id: int = Query(..., alias="data[id]"),
    session: AsyncSession = Depends(get_session),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> list[dict]:
    records = await movies.get_movies(
        session, client, settings.movie_api_key, location_id, search_query
    )
    return [r.to_dict() for r in records]
