"""
Centralized logging configuration for wavemap.

Provides debug logging to file for generation runs.
Log file: <log_dir>/debug.log (with rotation)

Usage:
    from wavemap.logging_config import setup_logging
    setup_logging(log_dir)  # Call once at startup

All wavemap.* loggers will write DEBUG to file, WARNING+ to console.
The library itself never calls setup_logging; only the CLI does.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from datetime import datetime


# Global configuration
LOG_FILE_NAME = "debug.log"
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB per file
BACKUP_COUNT = 5  # Keep 5 backup files

_logging_initialized = False


def setup_logging(
    log_dir: Path | str,
    log_level: int = logging.DEBUG,
    console_level: int = logging.WARNING,
) -> Path:
    """
    Configure the logging system for wavemap.

    Args:
        log_dir: Directory for the log file (created if missing)
        log_level: Level for file logging (default: DEBUG)
        console_level: Level for console output (default: WARNING)

    Returns:
        Path to the log file
    """
    global _logging_initialized

    log_path_dir = Path(log_dir)
    log_path_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_path_dir / LOG_FILE_NAME

    root_logger = logging.getLogger("wavemap")
    root_logger.setLevel(logging.DEBUG)  # Capture all levels

    # Clear any existing handlers (for re-initialization)
    for handler in list(root_logger.handlers):
        handler.close()
    root_logger.handlers.clear()

    file_formatter = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d | %(levelname)-8s | %(name)-30s | %(funcName)-20s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=MAX_LOG_SIZE,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(file_formatter)
    root_logger.addHandler(file_handler)

    # Console handler (less verbose)
    console_formatter = logging.Formatter(
        fmt="%(levelname)-8s | %(name)-25s | %(message)s"
    )
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    if not _logging_initialized:
        root_logger.info("=" * 80)
        root_logger.info(f"wavemap logging initialized at {datetime.now().isoformat()}")
        root_logger.info(f"Log file: {log_path.absolute()}")
        root_logger.info("=" * 80)
        _logging_initialized = True

    return log_path


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger configured as child of the wavemap logger
    """
    if name == "wavemap" or name.startswith("wavemap."):
        return logging.getLogger(name)
    return logging.getLogger(f"wavemap.{name}")


# =============================================================================
# Structured Logging Helpers
# =============================================================================


def log_collapse(
    logger: logging.Logger,
    step: int,
    x: int,
    y: int,
    terrain: str,
    details: str | None = None,
) -> None:
    """Log a single collapse decision."""
    details_str = f" | {details}" if details else ""
    logger.debug(f"STEP {step:05d} | COLLAPSE | ({x}, {y}) -> {terrain}{details_str}")


def log_backtrack(
    logger: logging.Logger,
    step: int,
    depth: int,
    reason: str,
    details: str | None = None,
) -> None:
    """Log a backtrack to an earlier snapshot."""
    details_str = f" | {details}" if details else ""
    logger.debug(f"STEP {step:05d} | BACKTRACK | depth={depth} | {reason}{details_str}")


def log_generation(
    logger: logging.Logger,
    status: str,
    width: int,
    height: int,
    seed: int | None = None,
    duration_ms: int | None = None,
    details: str | None = None,
) -> None:
    """Log the outcome of a whole generation run."""
    seed_str = f" | seed={seed}" if seed is not None else ""
    duration_str = f" | {duration_ms}ms" if duration_ms is not None else ""
    details_str = f" | {details}" if details else ""
    message = f"GENERATE | {width}x{height} | {status}{seed_str}{duration_str}{details_str}"
    if status == "FAILED":
        logger.warning(message)
    else:
        logger.info(message)
