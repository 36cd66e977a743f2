"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API starts against a local MongoDB without any setup.  In a production
deployment override these via environment variables.
"""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Pokedex API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Optional path of a log file.  When empty only the console handler
    # is attached.
    log_file: str = os.getenv("LOG_FILE", "")
    log_max_bytes: int = int(os.getenv("LOG_MAX_BYTES", str(10 * 1024 * 1024)))
    log_backup_count: int = int(os.getenv("LOG_BACKUP_COUNT", "5"))

    # MongoDB connection string and database holding the ``pokemons``
    # collection.
    mongodb_url: str = os.getenv("MONGODB_URL", "mongodb://localhost:27017")
    database_name: str = os.getenv("DATABASE_NAME", "pokedex")

    # Page size used by ``GET /pokemon`` when the client omits ``limit``.
    default_limit: int = int(os.getenv("DEFAULT_LIMIT", "7"))

    # Source of the seed data and how many entries to request from it.
    pokeapi_url: str = os.getenv("POKEAPI_URL", "https://pokeapi.co/api/v2")
    seed_limit: int = int(os.getenv("SEED_LIMIT", "650"))

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))

    def __post_init__(self) -> None:
        if self.default_limit < 1:
            raise ValueError(f"default_limit must be a positive integer, got {self.default_limit}")
        if self.seed_limit < 1:
            raise ValueError(f"seed_limit must be a positive integer, got {self.seed_limit}")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class creation time, environment variables should
# be set before importing this module.
settings = Settings()
