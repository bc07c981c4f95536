from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (app.env):
      - DB_HOST, DB_PORT, DB_USER, DB_PASSWORD, DB_NAME
      - JWT_SECRET (HMAC secret used to sign session tokens)
      - MIDTRANS_SERVER_KEY

    Optional:
      - DATABASE_URL (overrides the URL built from DB_*)
      - MIDTRANS_ENVIRONMENT (sandbox | production)
      - COOKIE_HARDENED (adds HttpOnly; Secure; SameSite=Lax to the cookie)
    """

    PROJECT_NAME: str = "order-app-api"
    PORT: int = 8000

    # Postgres connection
    DB_HOST: str
    DB_PORT: int
    DB_USER: str
    DB_PASSWORD: str
    DB_NAME: str
    DATABASE_URL: str | None = None

    # Session tokens
    JWT_SECRET: str
    JWT_ALG: str = "HS256"
    SESSION_TTL_MINUTES: int = 10
    REFRESH_TTL_MINUTES: int = 5
    COOKIE_HARDENED: bool = False

    # Payment gateway
    MIDTRANS_SERVER_KEY: str
    MIDTRANS_ENVIRONMENT: Literal["sandbox", "production"] = "sandbox"
    MIDTRANS_TIMEOUT_SECONDS: float = 10.0

    model_config = SettingsConfigDict(env_file="app.env", extra="ignore")

    @property
    def database_url(self) -> str | URL:
        """
        Connection URL for SQLAlchemy.

        Built with URL.create so the password is escaped, not concatenated.
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return URL.create(
            "postgresql+psycopg2",
            username=self.DB_USER,
            password=self.DB_PASSWORD,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_NAME,
            query={"sslmode": "disable"},
        )


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse app.env on every import / request.
    """
    return Settings()
