"""Location-scoped cache lookup over the relational store.

Weather and movie rows are cached per location_id. `lookup` only reports
whether rows exist; the caller decides freshness with `is_stale`, since each
entity has its own window (30 minutes for weather, 30 days for movies).

Note: there is no locking. Two concurrent misses for the same location both
insert, and the weathers/movies tables have no unique constraint to absorb
the duplicates.
"""

import enum
import logging
import time
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from db import MovieRecord, WeatherRecord

logger = logging.getLogger(__name__)

MS_PER_MINUTE = 60 * 1000
MINUTES_PER_DAY = 1440

WEATHER_MAX_AGE_MS = 30 * MS_PER_MINUTE
MOVIE_MAX_AGE_MS = 30 * MINUTES_PER_DAY * MS_PER_MINUTE


class Table(str, enum.Enum):
    WEATHERS = "weathers"
    MOVIES = "movies"

    @property
    def model(self):
        return _MODELS[self]


_MODELS = {
    Table.WEATHERS: WeatherRecord,
    Table.MOVIES: MovieRecord,
}


@dataclass(frozen=True)
class Hit:
    records: list[Any] = field(default_factory=list)


@dataclass(frozen=True)
class Miss:
    pass


def now_ms() -> int:
    return int(time.time() * 1000)


async def lookup(session: AsyncSession, table: Table, location_id: int) -> Hit | Miss:
    """Return Hit with every row cached for location_id, in insertion order, or Miss."""
    model = table.model
    result = await session.scalars(
        select(model).where(model.location_id == location_id).order_by(model.id)
    )
    records = list(result.all())
    if not records:
        logger.info("Cache miss: %s location_id=%s", table.value, location_id)
        return Miss()
    logger.info("Cache hit: %s location_id=%s (%d rows)", table.value, location_id, len(records))
    return Hit(records)


async def delete_by_location_id(session: AsyncSession, table: Table, location_id: int) -> None:
    model = table.model
    await session.execute(delete(model).where(model.location_id == location_id))
    await session.commit()


def is_stale(records: list[Any], max_age_ms: int, now: int | None = None) -> bool:
    """True once the first record's age has reached max_age_ms."""
    if not records:
        return True
    if now is None:
        now = now_ms()
    return now - records[0].created_at >= max_age_ms


async def save_all(session: AsyncSession, records: list[Any]) -> None:
    session.add_all(records)
    await session.commit()
