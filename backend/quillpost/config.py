"""
Quillpost Backend — Application Configuration
===============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the app factory; tests build their own `Settings`.

Environment surface:
    PORT                   Listening port (default 3000)
    HOST                   Bind address (default 0.0.0.0)
    DB_PATH                SQLite database file (default ./database.sqlite)
    DB_TIMEOUT             Seconds a statement waits on a locked database
    LOG_LEVEL              DEBUG, INFO, WARNING, ERROR, CRITICAL
    CORS_ORIGINS           Comma-separated origins, or "*"
    REQUIRE_EXISTING_POST  Reject comments whose post does not exist
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every field has a development default, so the server starts with no
    environment at all and writes `./database.sqlite` next to the CWD.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # What: Location of the SQLite file holding users, posts and comments
    # Format: filesystem path, relative to the process CWD
    db_path: str = Field(
        default="./database.sqlite",
        description="Path to the SQLite database file",
    )

    # What: sqlite3 busy timeout, applied to every connection
    # Why bounded: a writer holding the lock must not stall readers forever
    db_timeout: float = Field(default=5.0, gt=0, le=60)

    @property
    def database_url(self) -> str:
        """Async SQLAlchemy URL for the configured SQLite file."""
        return f"sqlite+aiosqlite:///{self.db_path}"

    # ── Comments ──────────────────────────────────────────────────────────
    # What: When true, POST /api/posts/{id}/comments looks the post up first
    # and answers 404 if it is missing. When false, orphan comments are stored.
    require_existing_post: bool = Field(default=False)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs (parsed by the property below), or "*"
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # DB_PATH and db_path both work
        "extra": "ignore",
    }


# Singleton instance used by `quillpost.main:app`
settings = Settings()
