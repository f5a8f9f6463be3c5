"""Configuration management using Pydantic Settings.

This module provides type-safe configuration management with automatic
environment variable loading and validation using Pydantic Settings.

The configuration is organized into logical groups:
- LoggingConfig: Logging levels, files, and debugging options
- CredentialsConfig: OAuth client credentials used for token refresh
- APIConfig: Platform base URLs, token endpoints and transport timeouts
- ExportConfig: Export behaviour (batching, retries, throttling, matching)
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingConfig(BaseModel):
    """Logging configuration for console and file output."""

    console_level: str = "INFO"
    file_level: str = "DEBUG"
    log_file: Path = Path("logs/playlist_exporter.log")
    real_time_debug: bool = True


class CredentialsConfig(BaseModel):
    """OAuth client credentials for each export platform."""

    spotify_client_id: str = ""
    spotify_client_secret: str = ""

    google_client_id: str = ""
    google_client_secret: str = ""

    soundcloud_client_id: str = ""
    soundcloud_client_secret: str = ""


class APIConfig(BaseModel):
    """Platform endpoints and HTTP transport configuration."""

    spotify_base_url: str = "https://api.spotify.com/v1"
    spotify_token_url: str = "https://accounts.spotify.com/api/token"

    youtube_base_url: str = "https://www.googleapis.com/youtube/v3"
    google_token_url: str = "https://oauth2.googleapis.com/token"

    soundcloud_base_url: str = "https://api.soundcloud.com"
    soundcloud_token_url: str = "https://api.soundcloud.com/oauth2/token"

    request_timeout: float = 30.0


class ExportConfig(BaseModel):
    """Playlist export behaviour."""

    default_playlist_name: str = "MixLink Playlist"
    playlist_description: str = "Created with MixLink"

    # Spotify accepts at most 100 URIs per add call
    spotify_batch_size: int = 100

    add_retry_attempts: int = 3
    add_retry_base_delay: float = 1.0
    youtube_track_delay: float = 0.5

    soundcloud_search_limit: int = 15
    match_min_score: int = 15


class Settings(BaseSettings):
    """Main application settings with environment variable support.

    Environment variables can be set using flat naming or nested naming:
    - Flat: SPOTIFY_CLIENT_ID, CONSOLE_LOG_LEVEL
    - Nested: CREDENTIALS__SPOTIFY_CLIENT_ID, EXPORT__ADD_RETRY_ATTEMPTS

    The .env file is automatically loaded for development convenience.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    logging: LoggingConfig = LoggingConfig()
    credentials: CredentialsConfig = CredentialsConfig()
    api: APIConfig = APIConfig()
    export: ExportConfig = ExportConfig()

    @model_validator(mode="before")
    @classmethod
    def transform_flat_env_vars(cls, data: Any) -> Any:
        """Map flat environment variables onto the nested structure.

        Handles flat env vars (SPOTIFY_CLIENT_ID) and maps them to the
        nested structure expected by the models (credentials.spotify_client_id).
        """
        if not isinstance(data, dict):
            return data

        transformed: dict[str, dict[str, Any]] = {}

        log_mapping = {
            "console_log_level": "console_level",
            "file_log_level": "file_level",
            "log_file": "log_file",
            "log_real_time_debug": "real_time_debug",
        }
        for env_key, field_key in log_mapping.items():
            if env_key in data:
                transformed.setdefault("logging", {})[field_key] = data.pop(env_key)

        cred_keys = [
            "spotify_client_id",
            "spotify_client_secret",
            "google_client_id",
            "google_client_secret",
            "soundcloud_client_id",
            "soundcloud_client_secret",
        ]
        for env_key in cred_keys:
            if env_key in data:
                transformed.setdefault("credentials", {})[env_key] = data.pop(env_key)

        for group, values in transformed.items():
            existing = data.get(group)
            if isinstance(existing, dict):
                data[group] = {**existing, **values}
            else:
                data[group] = values

        return data


# Singleton instance for application use
settings = Settings()


# =============================================================================
# FLAT KEY ACCESS
# =============================================================================

_FLAT_KEY_MAP = {
    # Logging settings
    "CONSOLE_LOG_LEVEL": lambda: settings.logging.console_level,
    "FILE_LOG_LEVEL": lambda: settings.logging.file_level,
    "LOG_FILE": lambda: settings.logging.log_file,
    "LOG_REAL_TIME_DEBUG": lambda: settings.logging.real_time_debug,
    # Credentials
    "SPOTIFY_CLIENT_ID": lambda: settings.credentials.spotify_client_id,
    "SPOTIFY_CLIENT_SECRET": lambda: settings.credentials.spotify_client_secret,
    "GOOGLE_CLIENT_ID": lambda: settings.credentials.google_client_id,
    "GOOGLE_CLIENT_SECRET": lambda: settings.credentials.google_client_secret,
    "SOUNDCLOUD_CLIENT_ID": lambda: settings.credentials.soundcloud_client_id,
    "SOUNDCLOUD_CLIENT_SECRET": lambda: settings.credentials.soundcloud_client_secret,
    # Transport
    "API_REQUEST_TIMEOUT": lambda: settings.api.request_timeout,
    # Export behaviour
    "EXPORT_DEFAULT_PLAYLIST_NAME": lambda: settings.export.default_playlist_name,
    "EXPORT_PLAYLIST_DESCRIPTION": lambda: settings.export.playlist_description,
    "EXPORT_SPOTIFY_BATCH_SIZE": lambda: settings.export.spotify_batch_size,
    "EXPORT_ADD_RETRY_ATTEMPTS": lambda: settings.export.add_retry_attempts,
    "EXPORT_ADD_RETRY_BASE_DELAY": lambda: settings.export.add_retry_base_delay,
    "EXPORT_YOUTUBE_TRACK_DELAY": lambda: settings.export.youtube_track_delay,
    "EXPORT_SOUNDCLOUD_SEARCH_LIMIT": lambda: settings.export.soundcloud_search_limit,
    "EXPORT_MATCH_MIN_SCORE": lambda: settings.export.match_min_score,
}


def get_config(key: str, default=None):
    """Get configuration value by flat key with optional default.

    Args:
        key: Configuration key to retrieve
        default: Default value if key not found

    Returns:
        Configuration value or default

    Example:
        >>> attempts = get_config("EXPORT_ADD_RETRY_ATTEMPTS", 3)
    """
    if key in _FLAT_KEY_MAP:
        return _FLAT_KEY_MAP[key]()

    return default
