"""
Severity model for TeX diagnostics.

Levels are ordered by declaration position, not by their string values:

    DEBUG < INFO < TYPESETTING < WARNING < ERROR

The string values do not sort in severity order ("error" < "info"), so all
comparisons go through `index`.
"""

from enum import Enum
from typing import Iterable, List, Optional, Union


class LogLevel(Enum):
    """Severity of a parsed diagnostic."""

    DEBUG = "debug"
    INFO = "info"
    TYPESETTING = "typesetting"
    WARNING = "warning"
    ERROR = "error"

    @property
    def index(self) -> int:
        """0-based position of this level in the severity order."""
        return list(LogLevel).index(self)

    @classmethod
    def from_name(cls, name: Union[str, "LogLevel"]) -> "LogLevel":
        """
        Resolve a level from its value or member name, case-insensitively.

        Args:
            name: e.g. "warning", "WARNING" or LogLevel.WARNING

        Returns:
            Matching LogLevel

        Raises:
            ValueError: If name is not a known level
        """
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower()
        for level in cls:
            if level.value == key:
                return level
        valid = ", ".join(level.value for level in cls)
        raise ValueError(f"Unknown log level '{name}' (expected one of: {valid})")

    def __lt__(self, other):
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.index < other.index

    def __le__(self, other):
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.index <= other.index

    def __gt__(self, other):
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.index > other.index

    def __ge__(self, other):
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.index >= other.index


def filter_by_level(
    items: Iterable, min_level: Optional[Union[LogLevel, str]] = None
) -> List:
    """
    Keep diagnostics whose level is at least min_level, preserving order.

    Args:
        items: Parsed diagnostics (anything with a `level` attribute)
        min_level: Threshold, as a LogLevel or level name; None keeps everything

    Returns:
        New list of the kept diagnostics
    """
    if min_level is None:
        return list(items)
    min_level = LogLevel.from_name(min_level)
    return [item for item in items if item.level >= min_level]
