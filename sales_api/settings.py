"""Application settings module."""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    DATABASE_URL: str = "sqlite+aiosqlite:///./database.db"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    HOST: str = "0.0.0.0"
    PORT: int = 7575
    CORS_ORIGINS: list[str] = ["*"]

    # One-shot dataset import performed before the server accepts requests
    SEED_URL: str = "https://s3.amazonaws.com/roxiler.com/product_transaction.json"
    SEED_ON_STARTUP: bool = True
    SEED_TIMEOUT_SECONDS: float = 30.0
    SEED_SKIP_IF_POPULATED: bool = True

    DEFAULT_MONTH: str = "03"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )


settings = Settings()
