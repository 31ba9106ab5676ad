"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service can be started without any configuration at all against a
local SQLite file.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "DVD Rental API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Optional path of a log file in addition to console output.
    log_file: str = os.getenv("LOG_FILE", "")

    # Path to the SQLite database file.  Relative paths are resolved
    # against the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "dvdrental.db")

    # Upper bound, in seconds, a store call waits for a locked database
    # before failing with ``StoreUnavailable``.
    db_timeout: float = float(os.getenv("DB_TIMEOUT", "5"))

    # Listen address in ``host:port`` form.  An empty host (``:8080``)
    # binds all interfaces.
    listen_addr: str = os.getenv("ADDR", ":8080")

    def listen_host_port(self) -> tuple[str, int]:
        """Split ``listen_addr`` into a host and an integer port."""
        host, _, port = self.listen_addr.rpartition(":")
        return host or "0.0.0.0", int(port or "8080")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# must be set before importing this module.
settings = Settings()
