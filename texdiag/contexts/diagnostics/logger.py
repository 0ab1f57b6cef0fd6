"""
Diagnostics context logger.

Provides logging interface for diagnostics context with automatic [diag] prefix.
All diagnostics modules should import from this module, not from utils.logger directly.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from texdiag.contexts.diagnostics.severity import LogLevel
from texdiag.utils.logger import setup_logger as _setup_logger

load_dotenv()

CONTEXT_PREFIX = "[diag]"


def setup_diagnostics_logger(log_dir: Path, log_file: Path, quiet: bool = False) -> Path:
    """
    Setup logger for diagnostics context.

    Args:
        log_dir: Directory for this diagnostics session
        log_file: TeX log file being analyzed (recorded in the provenance header)
        quiet: Log to the session file only, nothing on the console

    Returns:
        Path to session log file
    """
    return _setup_logger(
        context_name="diag",
        log_dir=log_dir,
        extra_provenance={
            "TeX log": log_file,
            "Minimum level": os.getenv("TEXDIAG_MIN_LEVEL", "info"),
        },
        console_level=None if quiet else "INFO",
    )


# Wrapper functions with automatic [diag] prefix


def _log_info(message: str) -> None:
    """Log info message with [diag] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [diag] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [diag] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [diag] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [diag] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level diagnostics-specific logging helpers


def log_parse_start(log_path: Path, min_level: LogLevel, encoding: str) -> None:
    """Log start of a log-file parse with context."""
    _log_info(f"Parsing TeX log: {log_path}")
    _log_debug(f"  Minimum level: {min_level.value}")
    _log_debug(f"  Encoding: {encoding}")


def log_parse_result(log_path: Path, items: list, total: int, elapsed_time: float) -> None:
    """
    Log outcome of a log-file parse.

    Args:
        log_path: Parsed log file
        items: Diagnostics kept after filtering
        total: Number of diagnostics before filtering
        elapsed_time: Time taken to read and parse
    """
    errors = [item for item in items if item.level is LogLevel.ERROR]
    message = f"{log_path.name}: {len(items)} of {total} diagnostics kept ({elapsed_time:.3f}s)"
    if errors:
        _log_warning(message)
        for i, item in enumerate(errors[:5], 1):
            _log_debug(f"  Error {i}: {item.message}")
        if len(errors) > 5:
            _log_debug(f"  ... and {len(errors) - 5} more errors")
    else:
        _log_success(message)
