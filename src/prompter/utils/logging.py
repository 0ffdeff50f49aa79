"""Structured logging setup for Prompter."""

import structlog
from pathlib import Path
from typing import Any, Optional, TextIO
import os


VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

# Stream the current configuration writes to; replaced on reconfigure
_log_stream: Optional[TextIO] = None


def default_log_file() -> Path:
    """Location of the JSON log: ~/.cache/prompter/logs/prompter.log."""
    return Path.home() / ".cache" / "prompter" / "logs" / "prompter.log"


def resolve_log_level() -> str:
    """Read PROMPTER_LOG_LEVEL, falling back to INFO for missing or unknown values."""
    log_level = os.environ.get("PROMPTER_LOG_LEVEL", "INFO").upper()
    if log_level not in VALID_LOG_LEVELS:
        log_level = "INFO"
    return log_level


def configure_logging(log_file: Optional[Path] = None) -> Path:
    """
    Configure structlog for JSON logging to ~/.cache/prompter/logs/prompter.log.

    Log level can be controlled via PROMPTER_LOG_LEVEL environment variable:
    - Set to "DEBUG" to see no-op edits and per-call details
    - Defaults to "INFO" if not set

    Log levels:
    - DEBUG: Edits that matched no section, parse statistics
    - INFO: User actions (parse, hide, delete, move, rename, insert, export)
    - WARNING: Config fallbacks
    - ERROR: Config validation failures

    Args:
        log_file: Override the log file location

    Returns:
        Path of the log file being written

    Example:
        # Enable debug logging
        export PROMPTER_LOG_LEVEL=DEBUG

        # View logs with jq for readability:
        tail -f ~/.cache/prompter/logs/prompter.log | jq .
    """
    global _log_stream

    log_file = log_file or default_log_file()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    close_log_stream()
    _log_stream = open(log_file, "a")

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(resolve_log_level()),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=_log_stream),
        cache_logger_on_first_use=True,
    )
    return log_file


def close_log_stream() -> None:
    """Close the file opened by the last configure_logging call, if any."""
    global _log_stream

    if _log_stream is not None:
        _log_stream.close()
        _log_stream = None


def get_logger(name: str) -> Any:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ of calling module)

    Returns:
        Structured logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("prompt_parsed", sections=4)
    """
    return structlog.get_logger(name)
