"""FastAPI application entry point for the city explorer API."""

import logging
import sys

import click
import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

import config
from config import Settings
from dependencies import lifespan_handler
from errors import register_error_handlers

# Structured logging: JSON for production, human-readable for local
if config.settings.is_production:
    logging.basicConfig(
        level=logging.INFO,
        format='{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
        stream=sys.stdout,
    )
else:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or config.settings

    app = FastAPI(title="City Explorer API", version="1.0.0", lifespan=lifespan_handler)
    app.state.settings = settings

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Security headers
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    # Centralized error handlers
    register_error_handlers(app)

    from routes.explorer import router as explorer_router
    from routes.health import router as health_router

    app.include_router(health_router)
    app.include_router(explorer_router)

    return app


app = create_app()


@click.command()
@click.option("--host", "host", default=config.settings.host, help="Server host")
@click.option("--port", "port", default=config.settings.port, type=int, help="Server port")
def main(host: str, port: int):
    """Starts the city explorer API server."""
    logger.info("Listening on %s:%d", host, port)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
