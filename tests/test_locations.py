import pytest
import pytest_asyncio
from sqlalchemy import Text, func, select

from db import Location, create_engine, create_session_factory, init_db
from services.locations import find_location, save_location

TACOMA = {
    "search_query": "98405",
    "formatted_query": "Tacoma, WA 98405, USA",
    "latitude": 47.23,
    "longitude": -122.46,
}


@pytest_asyncio.fixture
async def session(tmp_path):
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'locations.db'}")
    await init_db(engine)
    factory = create_session_factory(engine)
    async with factory() as session:
        yield session
    await engine.dispose()


@pytest.mark.asyncio
async def test_save_location_assigns_id(session):
    saved = await save_location(session, TACOMA)

    assert saved.id is not None
    assert (await find_location(session, "98405")).id == saved.id


@pytest.mark.asyncio
async def test_save_location_twice_keeps_one_row(session):
    first = await save_location(session, TACOMA)
    second = await save_location(session, {**TACOMA, "formatted_query": "Somewhere else"})

    assert second.id == first.id
    assert second.formatted_query == "Tacoma, WA 98405, USA"
    assert await session.scalar(select(func.count()).select_from(Location)) == 1


@pytest.mark.asyncio
async def test_save_location_accepts_long_queries(session):
    long_query = "1600 Pennsylvania Avenue NW " * 20

    saved = await save_location(session, {**TACOMA, "search_query": long_query})

    assert saved.search_query == long_query


def test_search_query_column_is_unbounded_text():
    assert isinstance(Location.__table__.c.search_query.type, Text)
