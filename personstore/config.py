"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - The document store URI comes from the environment (MONGO_URI), read once per process
    - get_settings() is cached (lru_cache): single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box against a local mongod
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Document store
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_database: str = "personstore"
    mongo_collection: str = "people"
    mongo_server_selection_timeout_ms: int = 5000

    @field_validator("mongo_uri", mode="before")
    @classmethod
    def strip_uri(cls, v: str) -> str:
        """Hosting dashboards often paste the URI with trailing whitespace."""
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("MONGO_URI cannot be empty")
        return v

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
