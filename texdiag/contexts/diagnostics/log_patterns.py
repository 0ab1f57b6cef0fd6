"""
TeX Log Pattern Constants

Centralized regular expressions used to classify lines of a TeX .log file.
Organized into frozen dataclasses by category for immutability and clear grouping.
"""

import re
from dataclasses import dataclass

# TeX hard-wraps terminal and log output at this many characters
LOG_WRAP_LIMIT = 79


@dataclass(frozen=True)
class ErrorPatterns:
    """
    Error-class patterns.

    Used to open a new error record and to stop context collection at the
    start of the next one.
    """
    FATAL_ERROR: re.Pattern = re.compile(r"^! ")
    FATAL_BANNER: str = "!  ==> Fatal error occurred, no output PDF file produced!"
    # -file-line-error style: ./chapter.tex:12: Undefined control sequence.
    FILE_LINE_ERROR: re.Pattern = re.compile(r"^([./].*):(\d+): (.*)")
    RUNAWAY_ARGUMENT: re.Pattern = re.compile(r"^Runaway argument")


@dataclass(frozen=True)
class WarningPatterns:
    """
    Warning and typesetting-notice patterns.
    """
    LATEX_WARNING: re.Pattern = re.compile(r"^LaTeX(?:3| Font)? Warning: (.*)$")
    BOX_WARNING: re.Pattern = re.compile(r"^(Over|Under)full \\(v|h)box")
    PACKAGE_WARNING: re.Pattern = re.compile(r"^((?:Package|Class|Module) \b.+\b Warning:.*)$")
    PACKAGE_NAME: re.Pattern = re.compile(r"^(?:Package|Class|Module) (\b.+?\b) Warning")


@dataclass(frozen=True)
class LocationPatterns:
    """
    Patterns that recover source line numbers and block boundaries.
    """
    # "on input line 42", "at lines 10--15"
    LINES: re.Pattern = re.compile(r"lines? ([0-9]+)")
    # TeX echoes the offending input as "l.42 \foo"
    CONTEXT_LINE: re.Pattern = re.compile(r"^l\.[0-9]+")
    LINE_MARKER: re.Pattern = re.compile(r"l\.([0-9]+)")
    BLANK_LINE: re.Pattern = re.compile(r"^\s*$")


@dataclass(frozen=True)
class FilePatterns:
    """
    Patterns for the parenthesis-delimited file open/close markers.
    """
    PAREN: re.Pattern = re.compile(r"(?<!\\)[()]")
    PATH_START: re.Pattern = re.compile(r"^/?([^ ()\\]+/)+")
    PATH_END: re.Pattern = re.compile(r"[ ()\\]")
    PATH_CONTINUATION_END: re.Pattern = re.compile(r"[ \"()\[\]]")
    FILE_EXTENSION: re.Pattern = re.compile(r"\.\w+$")
    BRACKETED_TOKEN: re.Pattern = re.compile(r"^\s*[\"()\[\]]")


def package_continuation_pattern(package_name: str) -> re.Pattern:
    """
    Build the continuation-line pattern for a package/class/module warning.

    TeX indents continuation lines with the package name in parentheses:

        Package hyperref Warning: Token not allowed in a PDF string (Unicode):
        (hyperref)                removing `\\@ifnextchar' on input line 37.

    Args:
        package_name: Name captured from the triggering line

    Returns:
        Compiled pattern whose group 1 is the continuation text
    """
    return re.compile(r"^\(" + re.escape(package_name) + r"\)\s*(.*)$", re.IGNORECASE)


ERRORS = ErrorPatterns()
WARNINGS = WarningPatterns()
LOCATIONS = LocationPatterns()
FILES = FilePatterns()
