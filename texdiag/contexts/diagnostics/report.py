"""
Summaries and text reports over parsed diagnostics.
"""

from typing import Dict, Iterable, List

from texdiag.contexts.diagnostics.log_item import LogItem
from texdiag.contexts.diagnostics.severity import LogLevel
from texdiag.utils.report_formatter import Column, TableFormatter, format_percentage

REPORT_WIDTH = 100

DIAGNOSTIC_COLUMNS = [
    Column("Level", 12),
    Column("Location", 30),
    Column("Message", 56),
]

SUMMARY_COLUMNS = [
    Column("Level", 12),
    Column("Count", 8, align=">"),
    Column("Share", 8, align=">"),
]


def summarize(items: Iterable[LogItem]) -> Dict[LogLevel, int]:
    """
    Count diagnostics per level.

    Returns:
        Every LogLevel in severity order, mapped to its count (zero included)
    """
    counts = {level: 0 for level in LogLevel}
    for item in items:
        counts[item.level] += 1
    return counts


def has_errors(items: Iterable[LogItem]) -> bool:
    return any(item.level is LogLevel.ERROR for item in items)


def format_diagnostic_line(item: LogItem) -> str:
    """One-line rendering: "[warning] ./ch1.tex:42: message"."""
    location = f" {item.location}:" if item.location else ""
    return f"[{item.level.value}]{location} {item.message}"


def format_diagnostics_report(items: List[LogItem], title: str = "TeX diagnostics") -> str:
    """
    Render diagnostics as a table followed by per-level counts.

    Args:
        items: Diagnostics to report, already filtered
        title: Section title

    Returns:
        Multi-line report string
    """
    counts = summarize(items)
    total = len(items)

    table = TableFormatter(DIAGNOSTIC_COLUMNS, total_width=REPORT_WIDTH)
    table.add_section_header(title).add_table_header().add_separator()
    for item in items:
        table.add_row([item.level.value, item.location, item.message])

    table.add_summary("Counts by level:")
    summary = TableFormatter(SUMMARY_COLUMNS, total_width=REPORT_WIDTH)
    summary.add_table_header()
    # Highest severity first
    for level in reversed(list(LogLevel)):
        summary.add_row([level.value, counts[level], format_percentage(counts[level], total)])
    summary.add_summary(f"Total: {total}")

    return table.render() + "\n" + summary.render()
