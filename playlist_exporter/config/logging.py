"""Logging configuration and utilities using Loguru.

Key Components:
--------------
- Structured logging with Loguru
- Error handling decorator for external API calls
- Bridge for third-party libraries that log through the standard library

Public API:
----------
setup_loguru_logger(verbose: bool = False) -> None
    Configure Loguru logger for the application

get_logger(name: str) -> Logger
    Get a context-aware logger for your module
    Usage: logger = get_logger(__name__)

@resilient_operation(operation_name: str)
    Decorator for handling errors in external API calls
    Usage: @resilient_operation("spotify_export")

configure_httpx_logging() -> None
    Forward httpx/httpcore logs into Loguru

Quick Start:
-----------
```python
from playlist_exporter.config import get_logger
logger = get_logger(__name__)
logger.info("Starting export", platform="spotify")
```
"""

import functools
import logging
from pathlib import Path
import sys
from typing import Any

from loguru import logger

from .settings import settings

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================


def setup_loguru_logger(verbose: bool = False) -> None:
    """Configure Loguru logger for the application.

    Args:
        verbose: Enable verbose logging with debug level and detailed tracebacks

    Note:
        - Removes default logger and sets up console and file handlers
        - Console format is colorized and simplified
        - File format is JSON-serialized with full structured context
    """
    logger.remove()

    log_file_path = Path(settings.logging.log_file)
    log_file_path.parent.mkdir(parents=True, exist_ok=True)

    logger.configure(extra={"service": "playlist_exporter", "module": "root"})

    # -------------------------------------------------------------------------
    # Console Handler
    # -------------------------------------------------------------------------
    console_level = "DEBUG" if verbose else settings.logging.console_level
    logger.add(
        sink=sys.stdout,
        level=console_level,
        format=(
            "<green>{time:HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:"
            "<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
        backtrace=verbose,
        diagnose=verbose,
    )

    # -------------------------------------------------------------------------
    # File Handler
    # -------------------------------------------------------------------------
    logger.add(
        sink=str(log_file_path),
        level=settings.logging.file_level,
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {process}:{thread} | {extra[service]} | {extra[module]} | {name}:{function}:{line} | {message}",
        rotation="10 MB",
        retention="1 week",
        compression="zip",
        backtrace=True,
        diagnose=True,
        enqueue=not settings.logging.real_time_debug,
        catch=True,
        serialize=True,
    )


# =============================================================================
# LOGGER FACTORY
# =============================================================================


def get_logger(name: str) -> Any:  # Use Any for Loguru logger type
    """Get a pre-configured logger instance for the given module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Loguru logger bound with module and service context

    Example:
        ```python
        logger = get_logger(__name__).bind(service="soundcloud")
        logger.warning("No match found", title=title, artists=artists)
        ```
    """
    return logger.bind(
        module=name,
        service="playlist_exporter",
    )


# =============================================================================
# ERROR HANDLING DECORATORS
# =============================================================================


def resilient_operation(operation_name=None):
    """Decorator for service boundary coroutines with standardized error logging.

    The exception is logged with the operation name and re-raised unchanged.

    Args:
        operation_name: Optional name for the operation (defaults to function name)

    Example:
        >>> @resilient_operation("playlist_export")
        >>> async def run_export(self, strategy, playlist, account):
        >>>     ...
    """

    def decorator(func):
        op_name = operation_name or func.__name__

        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                logger.opt(exception=e).error(f"Error in {op_name}: {e!s}")
                raise

        return wrapper

    return decorator


# =============================================================================
# THIRD-PARTY LOGGING INTEGRATION
# =============================================================================


def configure_httpx_logging() -> None:
    """Forward httpx and httpcore standard-library logs to Loguru.

    Note:
        - Preserves the original logger name as module context
        - Disables propagation to prevent duplicate logs
    """

    class HttpxLoguruHandler(logging.Handler):
        def emit(self, record):
            try:
                level = logger.level(record.levelname).name
            except ValueError:
                level = record.levelno

            logger.bind(module=record.name).log(level, self.format(record))

    for name in ("httpx", "httpcore"):
        third_party_logger = logging.getLogger(name)
        third_party_logger.handlers = [HttpxLoguruHandler()]
        third_party_logger.propagate = False
