"""
config.py — TaxGenie application settings.

Usage:
    from taxgenie.config import settings
    print(settings.debug)

Only the app layer (main.py, routes) reads settings. The tax engine in
taxgenie.calculator takes everything it needs as arguments.
"""
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TAXGENIE_",
        case_sensitive=False,
        extra="ignore",
    )

    # --- CORS ---
    # Comma-separated list of allowed frontend origins
    cors_origins: str = "http://localhost:5173,http://localhost:8080"

    # --- Application ---
    debug: bool = False
    app_version: str = "0.1.0"

    @property
    def cors_origins_list(self) -> List[str]:
        """Split comma-separated CORS origins into a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


# Module-level singleton
settings = Settings()
