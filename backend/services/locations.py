"""Google geocoding with a permanent store cache keyed by the raw search query.

Queries are matched exactly, with no normalization: "Seattle" and "seattle"
are separate rows.
"""

import logging

import httpx
from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from db import Location
from errors import CityExplorerError, EmptyResultError

logger = logging.getLogger(__name__)

GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"

# Dialect-specific INSERT constructs that support ON CONFLICT DO NOTHING
_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def location_from_geocode(search_query: str, body: dict) -> dict:
    """Map the first geocoding result to Location fields."""
    results = body.get("results") or []
    if not results:
        raise EmptyResultError("Geocoding API", search_query)
    first = results[0]
    return {
        "search_query": search_query,
        "formatted_query": first["formatted_address"],
        "latitude": first["geometry"]["location"]["lat"],
        "longitude": first["geometry"]["location"]["lng"],
    }


async def geocode(client: httpx.AsyncClient, api_key: str | None, search_query: str) -> dict:
    resp = await client.get(GEOCODE_URL, params={"address": search_query, "key": api_key})
    resp.raise_for_status()
    return location_from_geocode(search_query, resp.json())


async def find_location(session: AsyncSession, search_query: str) -> Location | None:
    return await session.scalar(select(Location).where(Location.search_query == search_query))


async def save_location(session: AsyncSession, fields: dict) -> Location:
    """Insert, ignoring a search_query conflict, then read back the stored row."""
    dialect = session.get_bind().dialect.name
    insert = _INSERTS.get(dialect)
    if insert is None:
        raise CityExplorerError(f"Unsupported database dialect: {dialect}")

    stmt = insert(Location).values(**fields).on_conflict_do_nothing(index_elements=["search_query"])
    await session.execute(stmt)
    await session.commit()

    # The row may belong to a concurrent request that won the insert
    return await find_location(session, fields["search_query"])


async def get_location(
    session: AsyncSession, client: httpx.AsyncClient, api_key: str | None, search_query: str
) -> Location:
    location = await find_location(session, search_query)
    if location is not None:
        logger.info("Location cache hit: %r (id=%s)", search_query, location.id)
        return location

    logger.info("Location cache miss: %r, geocoding", search_query)
    fields = await geocode(client, api_key, search_query)
    return await save_location(session, fields)
