"""Centralized application configuration.

All settings are read from environment variables (or a .env.pieces file).
Every field has a default, so the app starts with no configuration at all.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env.pieces", env_file_encoding="utf-8", extra="ignore",
    )

    log_level: str = "INFO"

    # PGN import limits
    max_pgn_bytes: int = 100_000

    # In-memory game sessions; oldest evicted past this
    max_sessions: int = 1000

    # Optional frontend bundle mounted at /static
    static_dir: str | None = None
