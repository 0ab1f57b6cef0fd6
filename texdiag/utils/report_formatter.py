"""
Utility functions for formatting text-based reports and tables.

Provides consistent table formatting for diagnostic summaries.
"""

from typing import Any, List


class Column:
    """Column definition for table formatting."""

    def __init__(self, name: str, width: int, align: str = "<"):
        """
        Args:
            name: Column header name
            width: Column width in characters (longer values are truncated)
            align: Alignment ('<' left, '>' right, '^' center)
        """
        self.name = name
        self.width = width
        self.align = align

    def format_header(self) -> str:
        """Format column header with alignment."""
        return f"{self.name:{self.align}{self.width}}"

    def format_value(self, value: Any) -> str:
        """Format column value with alignment, truncating with '...' if too wide."""
        text = "" if value is None else str(value)
        if len(text) > self.width:
            text = text[: max(self.width - 3, 0)] + "..."
        return f"{text:{self.align}{self.width}}"


class TableFormatter:
    """Builder for formatted text tables with aligned columns."""

    def __init__(self, columns: List[Column], total_width: int = 100):
        """
        Args:
            columns: List of Column definitions
            total_width: Total report width for separators
        """
        self.columns = columns
        self.total_width = total_width
        self.lines: List[str] = []

    def add_section_header(self, title: str) -> "TableFormatter":
        """Add section header with top/bottom separator lines."""
        self.lines.append("=" * self.total_width)
        self.lines.append(title)
        self.lines.append("=" * self.total_width)
        return self

    def add_table_header(self) -> "TableFormatter":
        """Add table header row with column names."""
        header_parts = [col.format_header() for col in self.columns]
        self.lines.append(" ".join(header_parts).rstrip())
        return self

    def add_separator(self, char: str = "-") -> "TableFormatter":
        """Add horizontal separator line."""
        self.lines.append(char * self.total_width)
        return self

    def add_row(self, values: List[Any]) -> "TableFormatter":
        """
        Add data row with column values.

        Args:
            values: List of values (one per column)

        Returns:
            Self for method chaining

        Raises:
            ValueError: If number of values doesn't match columns
        """
        if len(values) != len(self.columns):
            raise ValueError(f"Expected {len(self.columns)} values, got {len(values)}")

        row_parts = [col.format_value(val) for col, val in zip(self.columns, values)]
        self.lines.append(" ".join(row_parts).rstrip())
        return self

    def add_summary(self, text: str) -> "TableFormatter":
        """Add summary line (typically after table data)."""
        self.lines.append(f"\n{text}")
        return self

    def render(self) -> str:
        """Render accumulated lines to string."""
        return "\n".join(self.lines)


def format_percentage(count: int, total: int, decimal_places: int = 1) -> str:
    """
    Format count as percentage of total.

    Args:
        count: Count value
        total: Total value
        decimal_places: Number of decimal places

    Returns:
        Formatted percentage string (e.g., "75.0%")
    """
    if total == 0:
        return "0.0%"
    percent = (count / total) * 100
    return f"{percent:.{decimal_places}f}%"
