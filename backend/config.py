"""Centralized configuration — all env vars in one place."""

import os

from dotenv import load_dotenv

load_dotenv()

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./city_explorer.db"


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
        self.git_sha: str = os.getenv("GIT_SHA", "unknown")
        self.environment: str = os.getenv("ENVIRONMENT", "local")

        self.host: str = os.getenv("HOST", "0.0.0.0")
        self.port: int = int(os.getenv("PORT", "3000"))
        self.database_url: str = _async_database_url(os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL))
        self.http_timeout: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "10"))

        # Third-party API credentials
        self.google_api_key: str | None = os.getenv("GOOGLE_API_KEY")
        self.weather_api_key: str | None = os.getenv("WEATHER_API_KEY")
        self.yelp_api_key: str | None = os.getenv("YELP_API_KEY")
        self.movie_api_key: str | None = os.getenv("THE_MOVIE_DB_API")

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def validate(self) -> list[str]:
        """Return list of missing API credential env vars."""
        required = ["GOOGLE_API_KEY", "WEATHER_API_KEY", "YELP_API_KEY", "THE_MOVIE_DB_API"]
        return [var for var in required if not getattr(self, _attr_for(var))]


def _async_database_url(url: str) -> str:
    """Point bare Postgres URLs (as Heroku hands them out) at the asyncpg driver."""
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return "postgresql+asyncpg://" + url[len(prefix):]
    return url


def _attr_for(env_var: str) -> str:
    """Map env var name to Settings attribute name."""
    mapping = {
        "THE_MOVIE_DB_API": "movie_api_key",
    }
    return mapping.get(env_var, env_var.lower())


settings = Settings()
