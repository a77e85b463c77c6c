from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process configuration, read once from the environment (and .env)."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Database
    database_url: str | None = None
    db_pool_size: int = 1
    db_connect_timeout: int = 5  # seconds
    db_connect_on_startup: bool = True

    # HTTP
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = ["*"]

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
