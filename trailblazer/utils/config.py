"""Configuration management using Pydantic Settings."""

import os
from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App Configuration
    environment: str = "development"
    log_level: str = "INFO"
    port: int = 3000
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "https://trailblazer-trip-planning.onrender.com",
    ]

    # Auth
    secret_key: str = "secret-dev"
    access_token_expire_minutes: int = 60 * 24
    bcrypt_work_factor: Optional[int] = None

    # Database
    database_url: str = ""
    database_url_test: str = ""
    db_pool_size: int = 5
    db_max_overflow: int = 10
    data_dir: str = "./data"

    # External APIs
    countries_api_url: str = "https://restcountries.com/v3.1"
    weather_api_url: str = (
        "https://weather.visualcrossing.com/VisualCrossingWebServices/rest/services/timeline"
    )
    weather_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"

    # Performance Settings
    request_timeout: int = 30

    class Config:
        """Pydantic configuration."""
        env_file = os.path.join(os.path.dirname(__file__), "..", "..", ".env")
        case_sensitive = False
        extra = "ignore"

    @property
    def is_test(self) -> bool:
        return self.environment.lower() == "test"

    @property
    def password_rounds(self) -> int:
        """bcrypt cost factor; lowered to bcrypt's minimum under test."""
        if self.bcrypt_work_factor:
            return self.bcrypt_work_factor
        return 4 if self.is_test else 12

    def get_database_uri(self) -> str:
        """
        Database URL for the current environment, rewritten for the async drivers.

        Hosted Postgres providers often hand out ``postgres://`` URLs; those are
        mapped onto asyncpg. With nothing configured a SQLite file under
        ``data_dir`` is used instead.
        """
        url = (self.database_url_test if self.is_test else self.database_url).strip()
        if not url:
            name = "trailblazer_test.db" if self.is_test else "trailblazer.db"
            path = Path(self.data_dir) / name
            path.parent.mkdir(parents=True, exist_ok=True)
            return f"sqlite+aiosqlite:///{path.resolve().as_posix()}"
        return normalize_db_url(url)


def normalize_db_url(url: str) -> str:
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url
