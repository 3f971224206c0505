"""Configuration module for the DNS tool server.

Reads configuration from environment variables with validation.
"""
import os
from dataclasses import dataclass
from typing import List, Optional


class ConfigurationError(Exception):
    """Raised when configuration is missing or invalid."""
    pass


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    """Application configuration loaded from environment variables."""

    # Web server
    host: str = "0.0.0.0"
    port: int = 8080
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    log_buffer_size: int = 100

    # Request body cap in bytes
    max_content_length: int = 1048576

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables.

        Optional environment variables:
        - HOST: Bind address (default: 0.0.0.0)
        - PORT: Web server port (default: 8080)
        - DEBUG: Enable debug mode (default: false)
        - LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL (default: INFO)
        - LOG_BUFFER_SIZE: In-memory log entries kept for /api/logs (default: 100)
        - MAX_CONTENT_LENGTH: Maximum request body size in bytes (default: 1048576)

        Returns:
            Config: Configuration object

        Raises:
            ConfigurationError: If any variable has an invalid value
        """
        invalid: List[str] = []

        port = cls._get_int("PORT", 8080, invalid)
        if port is not None and not 1 <= port <= 65535:
            invalid.append("PORT")

        log_buffer_size = cls._get_int("LOG_BUFFER_SIZE", 100, invalid)
        if log_buffer_size is not None and log_buffer_size < 1:
            invalid.append("LOG_BUFFER_SIZE")

        max_content_length = cls._get_int("MAX_CONTENT_LENGTH", 1048576, invalid)
        if max_content_length is not None and max_content_length < 1:
            invalid.append("MAX_CONTENT_LENGTH")

        log_level = os.environ.get("LOG_LEVEL", "INFO").strip().upper()
        if log_level not in LOG_LEVELS:
            invalid.append("LOG_LEVEL")

        if invalid:
            raise ConfigurationError(
                f"Invalid environment variables: {', '.join(invalid)}"
            )

        return cls(
            host=os.environ.get("HOST", "0.0.0.0"),
            port=port,
            debug=os.environ.get("DEBUG", "").lower() in ("true", "1", "yes"),
            log_level=log_level,
            log_buffer_size=log_buffer_size,
            max_content_length=max_content_length,
        )

    @staticmethod
    def _get_int(key: str, default: int, invalid: List[str]) -> Optional[int]:
        """Read an integer variable, noting the key in invalid on failure."""
        raw = os.environ.get(key)
        if raw is None or raw.strip() == "":
            return default
        try:
            return int(raw)
        except ValueError:
            invalid.append(key)
            return None
