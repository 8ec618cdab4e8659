"""Relational store: table models and async engine setup."""

import logging
from datetime import date

from sqlalchemy import BigInteger, Date, Float, ForeignKey, Integer, String, Text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class Location(Base):
    """Geocoded search query. Looked up by exact search_query, never expires."""

    __tablename__ = "locations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    search_query: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    formatted_query: Mapped[str] = mapped_column(String(255), nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "search_query": self.search_query,
            "formatted_query": self.formatted_query,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }


class WeatherRecord(Base):
    """One forecast day for a location. created_at is epoch milliseconds."""

    __tablename__ = "weathers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    forecast: Mapped[str] = mapped_column(Text, nullable=False)
    time: Mapped[str] = mapped_column(String(32), nullable=False)
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    location_id: Mapped[int] = mapped_column(ForeignKey("locations.id"), nullable=False, index=True)

    def to_dict(self) -> dict:
        return {
            "forecast": self.forecast,
            "time": self.time,
            "created_at": self.created_at,
        }


class MovieRecord(Base):
    __tablename__ = "movies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    overview: Mapped[str | None] = mapped_column(Text)
    average_votes: Mapped[float | None] = mapped_column(Float)
    image_url: Mapped[str | None] = mapped_column(String(255))
    popularity: Mapped[float | None] = mapped_column(Float)
    released_on: Mapped[date | None] = mapped_column(Date)
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    location_id: Mapped[int] = mapped_column(ForeignKey("locations.id"), nullable=False, index=True)

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "overview": self.overview,
            "average_votes": self.average_votes,
            "image_url": self.image_url,
            "popularity": self.popularity,
            "released_on": self.released_on.isoformat() if self.released_on else None,
        }


def create_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(database_url, future=True)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db(engine: AsyncEngine) -> None:
    """Create tables if they don't exist."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database initialized (%s)", engine.url.render_as_string(hide_password=True))
