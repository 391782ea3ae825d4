"""
Note Service — Application Configuration
=========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by bootstrap code (main.py) and the MongoDB client factory.
When:  Loaded once at module import time; validated before the app starts.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for a local MongoDB without auth.
    Attributes are grouped by concern.
    """

    # ── MongoDB ───────────────────────────────────────────────────────────
    mongodb_host: str = Field(default="localhost")
    mongodb_port: int = Field(default=27017, ge=1, le=65535)

    # Empty username disables authentication entirely
    mongodb_username: str = Field(default="")
    mongodb_password: str = Field(default="")
    mongodb_auth_db: str = Field(default="admin")

    mongodb_database: str = Field(default="notes_system")
    mongodb_notes_collection: str = Field(default="notes")
    mongodb_tags_collection: str = Field(default="tags")

    # Client-side deadline (seconds) applied to every storage operation
    mongodb_timeout: float = Field(default=5.0, gt=0, le=120)

    # ── Server ────────────────────────────────────────────────────────────
    # "port" binds backend_host:backend_port, "sock" binds a unix socket
    listen_type: str = Field(default="port")
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=10000, ge=1024, le=65535)
    socket_path: Optional[str] = Field(
        default=None,
        description="Unix socket path; defaults to ./app.sock when listen_type is 'sock'",
    )

    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

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

    @field_validator("listen_type")
    @classmethod
    def validate_listen_type(cls, v: str) -> str:
        lowered = v.lower()
        if lowered not in {"port", "sock"}:
            raise ValueError(f"Invalid listen_type '{v}'. Must be 'port' or 'sock'")
        return lowered

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # MONGODB_HOST and mongodb_host both work
        "extra": "ignore",
    }

    def mongo_client_kwargs(self) -> dict:
        """
        What:  Keyword arguments for AsyncMongoClient built from these settings.
        How:   Credentials are only passed when a username is configured.
        """
        kwargs = {
            "host": self.mongodb_host,
            "port": self.mongodb_port,
            "serverSelectionTimeoutMS": int(self.mongodb_timeout * 1000),
            "tz_aware": True,
        }
        if self.mongodb_username:
            kwargs.update(
                username=self.mongodb_username,
                password=self.mongodb_password,
                authSource=self.mongodb_auth_db,
            )
        return kwargs


# Singleton instance, imported by bootstrap code
settings = Settings()
