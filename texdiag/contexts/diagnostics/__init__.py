"""
Diagnostics Context

Responsibilities:
- Reconstructs logical lines from wrapped TeX log output
- Tracks which source file is active at each point of the log
- Classifies errors, warnings and typesetting notices
- Filters diagnostics by minimum severity

Owns: log parsing, severity ordering, diagnostic reports
Never: Runs the TeX compiler or touches its output files
"""

from texdiag.contexts.diagnostics.exceptions import LogFileNotFoundError, LogInputError
from texdiag.contexts.diagnostics.log_item import LogItem
from texdiag.contexts.diagnostics.parser import parse_log, parse_log_file
from texdiag.contexts.diagnostics.report import format_diagnostics_report, summarize
from texdiag.contexts.diagnostics.severity import LogLevel, filter_by_level

__all__ = [
    "LogFileNotFoundError",
    "LogInputError",
    "LogItem",
    "LogLevel",
    "filter_by_level",
    "format_diagnostics_report",
    "parse_log",
    "parse_log_file",
    "summarize",
]
