"""Configuration module for the playlist exporter.

Public API:
----------
settings: Settings instance
    Pydantic settings object with nested configuration

get_config(key: str, default=None) -> Any
    Flat-key configuration access function

get_logger(name: str) -> Logger
    Get a context-aware logger for your module

setup_loguru_logger(verbose: bool = False) -> None
    Configure Loguru logger for the application

resilient_operation(operation_name: str)
    Decorator for handling errors in external API calls

configure_httpx_logging() -> None
    Route httpx logs through Loguru

Usage:
------
```python
from playlist_exporter.config import settings
batch_size = settings.export.spotify_batch_size

from playlist_exporter.config import get_logger
logger = get_logger(__name__)
logger.info("Starting export")
```
"""

from .logging import (
    configure_httpx_logging,
    get_logger,
    resilient_operation,
    setup_loguru_logger,
)
from .settings import get_config, settings

__all__ = [
    "configure_httpx_logging",
    "get_config",
    "get_logger",
    "resilient_operation",
    "settings",
    "setup_loguru_logger",
]
