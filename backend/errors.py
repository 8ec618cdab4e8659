"""Custom exceptions and centralized FastAPI error handlers.

Every failure collapses into the same flat 500 response. Clients only ever
see the static message; details go to the log.
"""

import logging

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

ERROR_MESSAGE = "Sorry, something went wrong"


class CityExplorerError(Exception):
    """Base exception for failures raised by this service."""


class EmptyResultError(CityExplorerError):
    def __init__(self, source: str, query: str):
        super().__init__(f"{source} returned no results for {query!r}")
        self.source = source
        self.query = query


def _error_response() -> PlainTextResponse:
    return PlainTextResponse(ERROR_MESSAGE, status_code=500)


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(CityExplorerError)
    async def handle_city_explorer_error(_request: Request, exc: CityExplorerError):
        logger.error("Request failed: %s", exc)
        return _error_response()

    @app.exception_handler(httpx.HTTPError)
    async def handle_upstream_error(_request: Request, exc: httpx.HTTPError):
        logger.error("Upstream API call failed: %s", exc)
        return _error_response()

    @app.exception_handler(SQLAlchemyError)
    async def handle_store_error(_request: Request, exc: SQLAlchemyError):
        logger.error("Store query failed: %s", exc)
        return _error_response()

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_request: Request, exc: RequestValidationError):
        logger.error("Invalid request: %s", exc.errors())
        return _error_response()

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return _error_response()
