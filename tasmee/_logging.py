"""
Structured logging utilities for Tasmee library.

Provides a configured logger and helper functions for consistent logging.
"""

import logging
import sys
from typing import Optional

from tasmee.exceptions import ConfigurationError


# Default format for Tasmee logs
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str = "tasmee") -> logging.Logger:
    """
    Get a logger instance for the given name.

    Args:
        name: Logger name (default: "tasmee")

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


def configure_logging(
    level: int | str = logging.INFO,
    format_string: Optional[str] = None,
    date_format: Optional[str] = None,
    stream: Optional[object] = None,
) -> logging.Logger:
    """
    Configure logging for the Tasmee library.

    Args:
        level: Logging level, as an int or a name such as "DEBUG" (default: INFO)
        format_string: Log format string (default: DEFAULT_FORMAT)
        date_format: Date format string (default: DEFAULT_DATE_FORMAT)
        stream: Output stream (default: sys.stderr)

    Returns:
        Configured root logger for tasmee

    Raises:
        ConfigurationError: If a level name is not recognised
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ConfigurationError(f"Unknown log level: {level}", setting_name="log_level")
        level = resolved

    logger = logging.getLogger("tasmee")
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)

    formatter = logging.Formatter(
        format_string or DEFAULT_FORMAT,
        datefmt=date_format or DEFAULT_DATE_FORMAT,
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)

    return logger


def enable_debug_logging() -> None:
    """Enable debug-level logging for the Tasmee library."""
    configure_logging(level=logging.DEBUG)


def disable_logging() -> None:
    """Disable all Tasmee logging."""
    logger = logging.getLogger("tasmee")
    logger.handlers.clear()
    logger.addHandler(logging.NullHandler())


# Create default logger
_logger = get_logger()


def log_verification_start(verse_key: str, strategy: str, token_count: int) -> None:
    """Log verification start event."""
    _logger.debug(f"Verifying {verse_key} with {strategy} ({token_count} tokens)")


def log_verification_complete(
    verse_key: str,
    strategy: str,
    matched: int,
    total: int,
    confidence: float,
) -> None:
    """Log verification complete event."""
    _logger.info(
        f"Verified {verse_key} via {strategy}: {matched}/{total} words, "
        f"confidence={confidence:.2f}"
    )


def log_remote_fallback(verse_key: str, reason: str) -> None:
    """Log a downgrade from remote to local verification."""
    _logger.warning(f"Remote verification failed for {verse_key}, using local matcher: {reason}")


def log_verse_completed(verse_key: str, surah_id: int, percent: int) -> None:
    """Log a verse reaching the completed state."""
    _logger.info(f"Verse {verse_key} completed (surah {surah_id} progress {percent}%)")


def log_stale_result(verse_key: str, generation: int, current_generation: int) -> None:
    """Log a verification result dropped because a newer request superseded it."""
    _logger.debug(
        f"Dropping stale result for {verse_key} "
        f"(generation {generation}, current {current_generation})"
    )


def log_error(message: str, exc_info: bool = False, **context) -> None:
    """Log an error with optional context and exception info."""
    if context:
        ctx_str = ", ".join(f"{k}={v}" for k, v in context.items())
        _logger.error(f"{message} ({ctx_str})", exc_info=exc_info)
    else:
        _logger.error(message, exc_info=exc_info)
