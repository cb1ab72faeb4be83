"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields.  Every
field is resolved when an instance is created, so tests can change the
environment and build a fresh ``Settings`` with ``Settings.from_env()``.
"""

import os
from dataclasses import dataclass, field


def _env(name: str, default: str):
    return field(default_factory=lambda: os.getenv(name, default))


def _env_flag(name: str, default: str = "false"):
    return field(
        default_factory=lambda: os.getenv(name, default).lower() in {"1", "true", "yes"}
    )


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = _env("PROJECT_NAME", "Franchise API")
    api_version: str = _env("API_VERSION", "1.0.0")
    debug: bool = _env_flag("DEBUG")
    log_level: str = _env("LOG_LEVEL", "INFO")
    # Optional path of a log file in addition to console output.
    log_file: str = _env("LOG_FILE", "")

    host: str = _env("HOST", "0.0.0.0")
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "5000")))

    # Location of the franchise store.  A plain path, ``:memory:`` or a
    # ``sqlite:///`` URI.  Relative paths are resolved against the
    # project root by the ``db`` module.
    database_url: str = _env("DATABASE_URL", "franchises.db")

    # When true, an unreachable store aborts application startup instead
    # of only being logged.
    store_fail_fast: bool = _env_flag("STORE_FAIL_FAST")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the current process environment."""
        return cls()


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.
settings = Settings()
