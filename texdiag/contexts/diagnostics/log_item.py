"""
Diagnostic record data structure.
"""

from dataclasses import dataclass
from typing import Optional

from texdiag.contexts.diagnostics.severity import LogLevel


@dataclass
class LogItem:
    """
    One diagnostic parsed from a TeX log.

    Attributes:
        level: Severity (always set)
        message: Human-readable summary
        raw: Log text the record was built from, ending in a newline
        line: 1-based source line number, if the log names one
        file: Source file active when the event occurred, if known
        content: Context lines TeX printed after an error
    """

    level: LogLevel
    message: str
    raw: str
    line: Optional[int] = None
    file: Optional[str] = None
    content: Optional[str] = None

    @property
    def location(self) -> str:
        """'file:line' with whichever parts are known (empty if neither)."""
        if self.file and self.line is not None:
            return f"{self.file}:{self.line}"
        if self.file:
            return self.file
        if self.line is not None:
            return f"line {self.line}"
        return ""

    def to_dict(self) -> dict:
        """JSON-serializable representation (level as its string value)."""
        return {
            "level": self.level.value,
            "message": self.message,
            "file": self.file,
            "line": self.line,
            "content": self.content,
            "raw": self.raw,
        }
