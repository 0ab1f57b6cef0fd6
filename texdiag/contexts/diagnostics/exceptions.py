"""Custom exceptions for the diagnostics context."""

from pathlib import Path
from typing import Optional


class LogInputError(ValueError):
    """
    Exception raised when log text cannot be parsed at all.

    Only raised before parsing begins: absent, unreadable or non-text input. Anything the
    parser encounters inside a readable log degrades to partial records instead.

    Attributes:
        message: Error description
        log_path: Log file the text was supposed to come from, if any
    """

    def __init__(self, message: str, log_path: Optional[Path] = None):
        self.message = message
        self.log_path = log_path

        parts = [message]
        if log_path is not None:
            parts.append(f"Log file: {log_path}")

        super().__init__("\n".join(parts))


class LogFileNotFoundError(LogInputError):
    """Exception raised when the TeX log file does not exist or is not a file."""

    pass
