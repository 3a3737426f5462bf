# File: app/core/config.py

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Process-wide configuration, read from the environment (and `.env`)
    once at startup and never mutated afterwards.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    PROJECT_NAME: str = "Places API"
    VERSION: str = "0.1.0"
    DEBUG: bool = False

    PORT: int = Field(default=5000, ge=1, le=65535)

    # Database
    DB_USER: str = ""
    DB_PASSWORD: str = ""
    DB_HOST: str = "localhost"
    DB_NAME: str = "places"
    DATABASE_URL: str | None = Field(
        default=None,
        description="Full SQLAlchemy URL; overrides the DB_* parts when set",
    )

    # Tokens / passwords
    JWT_KEY: str = Field(default="dev-secret-key-change-in-production", min_length=16)
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    BCRYPT_ROUNDS: int = Field(default=12, ge=4, le=31)

    # Geocoding
    GOOGLE_API_KEY: str = ""
    GEOCODING_URL: str = "https://maps.googleapis.com/maps/api/geocode/json"

    # Uploads
    UPLOAD_DIR: str = "uploads/images"
    MAX_UPLOAD_SIZE_BYTES: int = 500_000

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        credentials = self.DB_USER
        if self.DB_PASSWORD:
            credentials = f"{credentials}:{self.DB_PASSWORD}"
        if credentials:
            credentials = f"{credentials}@"
        return f"postgresql+psycopg://{credentials}{self.DB_HOST}/{self.DB_NAME}"


@lru_cache
def get_settings() -> Settings:
    return Settings()
