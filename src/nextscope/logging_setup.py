# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Structured logging setup for NextScope."""

import itertools
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

DEFAULT_LOGGER_NAME = "nextscope"

_context_ids = itertools.count(1)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Add any extra fields
        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        return json.dumps(log_data)


def resolve_level(level: Union[int, str]) -> int:
    """Turn "DEBUG"/"info"/10 into a logging level number.

    Raises:
        ValueError: If level is not a known level name.
    """
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def setup_logging(
    log_dir: Optional[Path] = None,
    log_level: Union[int, str] = logging.INFO,
    console_output: bool = True,
) -> None:
    """Set up structured logging for the application.

    Args:
        log_dir: Directory for log files. If None, uses .nextscope_logs/
        log_level: Logging level (default: INFO)
        console_output: Whether to also output to console on stderr (default: True).
            stdout is left alone because the MCP stdio transport owns it.
    """
    if log_dir is None:
        log_dir = Path.cwd() / ".nextscope_logs"

    level = resolve_level(log_level)

    # Create log directory if it doesn't exist
    log_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    # File handler with structured JSON logging
    log_file = log_dir / f"nextscope_{datetime.now(timezone.utc).strftime('%Y%m%d')}.log"
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(StructuredFormatter())
    root_logger.addHandler(file_handler)

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    logging.info(f"Logging initialized. Log directory: {log_dir}")


def create_logger(
    name: str = DEFAULT_LOGGER_NAME, level: Union[int, str] = logging.INFO
) -> logging.Logger:
    """Create the logger instance carried by an ExecutionContext.

    Each call returns a new, uniquely named child of `name` with its own
    level, so two contexts never share verbosity. Records still propagate
    to the handlers installed by setup_logging(). Plugins derive children
    from it with logger.getChild(plugin_name).

    Args:
        name: Parent logger name (default: "nextscope").
        level: Logging level as number or name (default: INFO).

    Returns:
        Configured logger.
    """
    instance = logging.getLogger(f"{name}.context-{next(_context_ids)}")
    instance.setLevel(resolve_level(level))
    return instance
