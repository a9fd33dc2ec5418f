"""
CORS Scanner Logger Module
Logging setup with rich console output, file rotation and JSON lines.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler


class StructuredFormatter(logging.Formatter):
    """JSON structured log formatter"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Add extra fields if present
        if hasattr(record, "target"):
            log_data["target"] = record.target
        if hasattr(record, "strategy"):
            log_data["strategy"] = record.strategy
        if hasattr(record, "event"):
            log_data["event"] = record.event
        if hasattr(record, "extra_data"):
            log_data["data"] = record.extra_data

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    structured: bool = False,
    console: bool = True,
) -> None:
    """
    Set up logging configuration for the scanner.
    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        structured: Use JSON structured logging
        console: Enable console output
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    root_logger.handlers.clear()

    if console:
        if structured:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(StructuredFormatter())
        else:
            console_handler = RichHandler(
                console=Console(stderr=True),
                show_time=True,
                show_path=False,
                rich_tracebacks=True,
            )
            console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        )

        if structured:
            file_handler.setFormatter(StructuredFormatter())
        else:
            file_handler.setFormatter(logging.Formatter(
                "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
            ))
        root_logger.addHandler(file_handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(
    name: str,
    target: str = None,
    strategy: str = None,
) -> logging.Logger:
    """
    Get a logger instance with optional probe context.
    Args:
        name: Logger name (typically module name)
        target: Optional target URL for context
        strategy: Optional origin strategy name for context
    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if target or strategy:
        extra = {}
        if target:
            extra["target"] = target
        if strategy:
            extra["strategy"] = strategy
        return ScanLoggerAdapter(logger, extra)

    return logger


class ScanLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds probe context to log records"""

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple:
        extra = kwargs.get("extra", {})
        extra.update(self.extra)
        kwargs["extra"] = extra
        return msg, kwargs


def log_scan_start(
    logger: logging.Logger,
    target_count: int,
    threads: int,
) -> None:
    """Log scan start event"""
    logger.info(
        f"Starting scan: targets={target_count}, threads={threads}",
        extra={"event": "SCAN_START"}
    )


def log_scan_complete(
    logger: logging.Logger,
    duration: float,
    result_count: int,
    cancelled: bool = False,
) -> None:
    """Log scan completion event"""
    logger.info(
        f"Scan {'cancelled' if cancelled else 'complete'}: "
        f"duration={duration:.2f}s, results={result_count}",
        extra={"event": "SCAN_COMPLETE"}
    )
