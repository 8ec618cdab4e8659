"""TMDB movie search with a 30-day store cache per location."""

import logging
from datetime import date

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from db import MovieRecord
from services import cache
from services.cache import Hit, Table

logger = logging.getLogger(__name__)

MOVIE_SEARCH_URL = "https://api.themoviedb.org/3/search/movie"
POSTER_BASE_URL = "https://image.tmdb.org/t/p/w500"


def _release_date(value: str | None) -> date | None:
    # TMDB sends "" for unreleased titles
    if not value:
        return None
    return date.fromisoformat(value)


def movie_from_result(movie: dict, location_id: int, created_at: int) -> MovieRecord:
    poster_path = movie.get("poster_path")
    return MovieRecord(
        title=movie["title"],
        overview=movie.get("overview"),
        average_votes=movie.get("vote_average"),
        image_url=f"{POSTER_BASE_URL}{poster_path}" if poster_path else None,
        popularity=movie.get("popularity"),
        released_on=_release_date(movie.get("release_date")),
        created_at=created_at,
        location_id=location_id,
    )


async def search_movies(client: httpx.AsyncClient, api_key: str | None, query: str) -> list[dict]:
    resp = await client.get(MOVIE_SEARCH_URL, params={"api_key": api_key, "query": query})
    resp.raise_for_status()
    return resp.json()["results"]


async def get_movies(
    session: AsyncSession,
    client: httpx.AsyncClient,
    api_key: str | None,
    location_id: int,
    search_query: str,
) -> list[MovieRecord]:
    """Serve cached movies for location_id, refetching once they are 30 days old."""
    result = await cache.lookup(session, Table.MOVIES, location_id)
    if isinstance(result, Hit):
        if not cache.is_stale(result.records, cache.MOVIE_MAX_AGE_MS):
            return result.records
        logger.info("Movie cache stale for location_id=%s, refetching", location_id)
        await cache.delete_by_location_id(session, Table.MOVIES, location_id)

    results = await search_movies(client, api_key, search_query)
    created_at = cache.now_ms()
    records = [movie_from_result(movie, location_id, created_at) for movie in results]
    await cache.save_all(session, records)
    return records
