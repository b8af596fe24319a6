"""Application configuration loaded from environment variables."""

import os
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings loaded from environment."""

    def __init__(self):
        self.airtable_api_key: str = os.getenv("AIRTABLE_API_KEY", "")
        self.airtable_base_id: str = os.getenv("AIRTABLE_BASE_ID", "")
        self.officials_table: str = os.getenv("AIRTABLE_OFFICIALS_TABLE", "Officials")
        self.staff_table: str = os.getenv("AIRTABLE_STAFF_TABLE", "Staff")
        self.ratings_table: str = os.getenv("AIRTABLE_RATINGS_TABLE", "Ratings")
        self.record_store: str = os.getenv(
            "RECORD_STORE", "airtable" if self.airtable_api_key else "local"
        ).lower()
        self.database_url: str = os.getenv(
            "DATABASE_URL", "sqlite+aiosqlite:///./ratemyrep.db"
        )
        self.seed_sample_data: bool = _env_flag("SEED_SAMPLE_DATA", True)
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def airtable_api_base_url(self) -> str:
        return "https://api.airtable.com/v0"

    @property
    def uses_airtable(self) -> bool:
        return self.record_store == "airtable"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
