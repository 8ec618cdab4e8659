"""FastAPI dependencies for the lifespan-scoped store and HTTP client."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from sqlalchemy.ext.asyncio import AsyncSession

from config import Settings
from db import create_engine, create_session_factory, init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan_handler(app: FastAPI):
    """Acquire the store engine and outbound HTTP client; release them on shutdown."""
    settings = app.state.settings

    missing = settings.validate()
    if missing:
        logger.warning("Missing env vars (API routes may fail): %s", ", ".join(missing))

    engine = create_engine(settings.database_url)
    await init_db(engine)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.http_client = httpx.AsyncClient(timeout=settings.http_timeout)

    try:
        yield
    finally:
        await app.state.http_client.aclose()
        await engine.dispose()
        logger.info("Store and HTTP client released")


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    async with request.app.state.session_factory() as session:
        yield session


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
