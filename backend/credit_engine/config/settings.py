"""Environment-driven settings for the credit engine."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


@dataclass(frozen=True)
class Settings:
    database_url: str
    auto_create_tables: bool
    cache_ttl_seconds: int
    quarter_window_weeks: int
    log_level: str


def load_settings() -> Settings:
    """Read settings from the environment, falling back to local defaults."""
    return Settings(
        database_url=os.getenv("DATABASE_URL", "sqlite:///./credit_engine.db"),
        auto_create_tables=os.getenv("AUTO_CREATE_TABLES", "1") == "1",
        cache_ttl_seconds=int(os.getenv("CREDIT_CACHE_TTL_SECONDS", "300")),
        quarter_window_weeks=int(os.getenv("QUARTER_WINDOW_WEEKS", "12")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


settings = load_settings()
