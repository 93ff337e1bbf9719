"""Loguru logging configuration.

Plain records go to a human-readable stderr sink. Records bound through
``event_logger`` carry ``json_output=True`` and are written as JSON lines
instead, so report-resolution events can be shipped to a log pipeline.
"""

import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

from loguru import logger

if TYPE_CHECKING:
    from loguru import Logger, Record

_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} | {message}"


def _is_event(record: "Record") -> bool:
    return bool(record["extra"].get("json_output", False))


def _is_plain(record: "Record") -> bool:
    return not _is_event(record)


def event_logger(**fields: Any) -> "Logger":
    """Return a logger whose records are emitted as JSON with ``fields`` attached."""
    return logger.bind(json_output=True, **fields)


def setup_logging(log_level: str = "INFO", log_dir: str | None = None) -> None:
    """Configure Loguru sinks.

    Args:
        log_level: Minimum log level to emit.
        log_dir: Optional directory for a ``ward-locator.log`` file that
            receives every record, rotated daily and kept for a week.
    """
    level = log_level.upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=_LOG_FORMAT, filter=_is_plain)
    logger.add(sys.stderr, level=level, serialize=True, filter=_is_event)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path / "ward-locator.log",
            level=level,
            format=_LOG_FORMAT,
            rotation="24h",
            retention="7 days",
        )
