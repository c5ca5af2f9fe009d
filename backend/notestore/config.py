"""
NoteStore — Application Configuration
=======================================

What:  Typed configuration for one server process, built with Pydantic Settings.
Why:   Type coercion and validation happen once at startup, so a bad port or a
       missing storage directory stops the process before it binds a socket.
How:   The entry point (notestore.cli) passes the required command-line values
       as init arguments; optional knobs fall back to NOTESTORE_* environment
       variables or a .env file.
Who:   Constructed by notestore.cli.main(); handed to create_app(settings).
When:  Once, before serving begins. Never mutated afterwards.

Design Decision:
    There is deliberately no module-level `settings` singleton. The object is
    passed into the application factory and lives on `app.state.settings`,
    so tests can build as many independent apps as they like.
"""

from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Settings for a single NoteStore process.

    Required (no defaults; supplied on the command line):
        host, port, storage_dir

    Optional (defaults suit local development):
        log_level, cors_origins, enable_docs
    """

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(description="Address the HTTP server binds to")
    port: int = Field(ge=1, le=65535, description="TCP port the HTTP server binds to")

    # ── Storage ───────────────────────────────────────────────────────────
    # What: Flat directory holding one <name>.txt file per note
    storage_dir: Path = Field(description="Directory holding the note files")

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

    @field_validator("host")
    @classmethod
    def validate_host(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("host must not be empty")
        return v.strip()

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated origins, "*" allows any
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── API docs ──────────────────────────────────────────────────────────
    # Off by default: the interactive docs are a presentation extra only
    enable_docs: bool = Field(default=False)

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_prefix": "NOTESTORE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    def describe(self) -> str:
        """One-line summary used in the startup banner."""
        return f"http://{self.host}:{self.port} (storage: {self.storage_dir})"
