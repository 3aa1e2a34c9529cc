"""
FileNotes: Application Configuration
=======================================

What:  Configuration management using Pydantic Settings.
Why:   Type-safe loading of host, port, and storage root with validation
       before the server starts.
How:   Pydantic Settings reads explicit keyword arguments first, then
       FILENOTES_* environment variables (or a .env file).
Who:   Built once by the CLI (or by the uvicorn factory) and handed to
       create_app(); the app keeps it on app.state.
When:  Constructed at startup; never mutated afterwards.

Design Decision:
    host, port and storage_root have no defaults. A server that silently
    binds somewhere or writes notes into an unexpected directory is worse
    than one that refuses to start.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings.

    Required (no defaults):
        host, port, storage_root

    Environment variables use the FILENOTES_ prefix, e.g.
    FILENOTES_STORAGE_ROOT=/var/lib/filenotes.
    """

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(description="Interface the HTTP server binds to")
    port: int = Field(ge=1, le=65535, description="TCP port the HTTP server listens on")

    # ── Note Storage ──────────────────────────────────────────────────────
    # What: Directory holding one file per note (created at startup if missing)
    storage_root: str = Field(description="Directory that holds one file per note")

    # ── Logging ───────────────────────────────────────────────────────────
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

    @field_validator("storage_root")
    @classmethod
    def validate_storage_root(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("storage_root must not be empty")
        return v

    @property
    def storage_path(self) -> Path:
        """Absolute storage root."""
        return Path(self.storage_root).expanduser().resolve()

    model_config = SettingsConfigDict(
        env_prefix="FILENOTES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
