"""Dark Sky forecast client with a 30-minute store cache per location."""

import logging
from datetime import datetime, timezone

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from db import WeatherRecord
from services import cache
from services.cache import Hit, Table

logger = logging.getLogger(__name__)

WEATHER_API_URL = "https://api.darksky.net/forecast"


def format_day(epoch_seconds: int) -> str:
    """Truncated date for a forecast day, e.g. 'Mon Jan 01 2018' (UTC)."""
    return datetime.fromtimestamp(epoch_seconds, tz=timezone.utc).strftime("%a %b %d %Y")


def weather_from_day(day: dict, location_id: int, created_at: int) -> WeatherRecord:
    return WeatherRecord(
        forecast=day["summary"],
        time=format_day(day["time"]),
        created_at=created_at,
        location_id=location_id,
    )


async def fetch_forecast(
    client: httpx.AsyncClient, api_key: str | None, latitude: float, longitude: float
) -> list[dict]:
    """Fetch the daily forecast entries for a coordinate pair."""
    resp = await client.get(f"{WEATHER_API_URL}/{api_key}/{latitude},{longitude}")
    resp.raise_for_status()
    return resp.json()["daily"]["data"]


async def get_weather(
    session: AsyncSession,
    client: httpx.AsyncClient,
    api_key: str | None,
    location_id: int,
    latitude: float,
    longitude: float,
) -> list[WeatherRecord]:
    """Serve cached forecast days for location_id, refetching once they are 30 minutes old."""
    result = await cache.lookup(session, Table.WEATHERS, location_id)
    if isinstance(result, Hit):
        if not cache.is_stale(result.records, cache.WEATHER_MAX_AGE_MS):
            return result.records
        logger.info("Weather cache stale for location_id=%s, refetching", location_id)
        await cache.delete_by_location_id(session, Table.WEATHERS, location_id)

    days = await fetch_forecast(client, api_key, latitude, longitude)
    created_at = cache.now_ms()
    records = [weather_from_day(day, location_id, created_at) for day in days]
    await cache.save_all(session, records)
    return records
