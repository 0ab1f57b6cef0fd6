"""
Diagnostic classifiers.

One classifier per kind of TeX diagnostic. Each knows how to recognize its
triggering line and how much of the following log belongs to it. The parser
tries them in CLASSIFIERS order and the first match wins.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from texdiag.contexts.diagnostics.log_item import LogItem
from texdiag.contexts.diagnostics.log_patterns import (
    ERRORS,
    LOCATIONS,
    WARNINGS,
    package_continuation_pattern,
)
from texdiag.contexts.diagnostics.log_text import LogCursor
from texdiag.contexts.diagnostics.severity import LogLevel


def find_line_number(text: str) -> Optional[int]:
    """Line number from a "line 42" / "lines 10--15" phrase, if present."""
    match = LOCATIONS.LINES.search(text)
    return int(match.group(1)) if match else None


def find_context_line_number(text: str) -> Optional[int]:
    """Line number from TeX's "l.42" context marker, if present."""
    match = LOCATIONS.LINE_MARKER.search(text)
    return int(match.group(1)) if match else None


# =============================================================================
# Matchers
# =============================================================================


def is_fatal_error(line: str) -> bool:
    return line.startswith("!") and line != ERRORS.FATAL_BANNER


def is_file_line_error(line: str) -> bool:
    return ERRORS.FILE_LINE_ERROR.match(line) is not None


def is_runaway_argument(line: str) -> bool:
    return ERRORS.RUNAWAY_ARGUMENT.match(line) is not None


def is_latex_warning(line: str) -> bool:
    return WARNINGS.LATEX_WARNING.match(line) is not None


def is_box_warning(line: str) -> bool:
    return WARNINGS.BOX_WARNING.match(line) is not None


def is_package_warning(line: str) -> bool:
    return WARNINGS.PACKAGE_WARNING.match(line) is not None


# =============================================================================
# Parsers
# =============================================================================


def parse_fatal_error(line: str, cursor: LogCursor, current_file: Optional[str]) -> LogItem:
    """
    "! Undefined control sequence." opens an error; context follows separately.
    """
    return LogItem(
        level=LogLevel.ERROR,
        message=line[2:],
        raw=line + "\n",
        file=current_file,
        content="",
    )


def parse_file_line_error(
    line: str, cursor: LogCursor, current_file: Optional[str]
) -> LogItem:
    """
    "./ch1.tex:12: Undefined control sequence." carries its own file and line.

    The file named on the line is used instead of the tracked file.
    """
    match = ERRORS.FILE_LINE_ERROR.match(line)
    return LogItem(
        level=LogLevel.ERROR,
        message=match.group(3),
        raw=line + "\n",
        line=int(match.group(2)),
        file=match.group(1),
        content="",
    )


def parse_runaway_argument(
    line: str, cursor: LogCursor, current_file: Optional[str]
) -> LogItem:
    """
    "Runaway argument?" is followed by the runaway text and then the error
    that stopped it; both blocks are consumed, only the line number is kept.
    """
    context = cursor.collect_until_blank() + cursor.collect_until_blank()
    return LogItem(
        level=LogLevel.ERROR,
        message=line,
        raw=line + "\n",
        line=find_context_line_number("\n".join(context)),
        file=current_file,
        content="",
    )


def parse_latex_warning(line: str, cursor: LogCursor, current_file: Optional[str]) -> LogItem:
    warning = WARNINGS.LATEX_WARNING.match(line).group(1)
    return LogItem(
        level=LogLevel.WARNING,
        message=warning,
        raw=line + "\n",
        line=find_line_number(warning),
        file=current_file,
    )


def parse_box_warning(line: str, cursor: LogCursor, current_file: Optional[str]) -> LogItem:
    return LogItem(
        level=LogLevel.TYPESETTING,
        message=line,
        raw=line + "\n",
        line=find_line_number(line),
        file=current_file,
    )


def parse_package_warning(
    line: str, cursor: LogCursor, current_file: Optional[str]
) -> LogItem:
    """
    Package/Class/Module warnings continue on lines prefixed "(<name>)".

    Continuation lines are consumed until one does not carry the prefix;
    that line is rewound so it is dispatched normally. A line number on a
    later continuation line replaces an earlier one.
    """
    fragments = [WARNINGS.PACKAGE_WARNING.match(line).group(1)]
    raw_lines = [line]
    line_number = find_line_number(line)
    continuation = package_continuation_pattern(WARNINGS.PACKAGE_NAME.match(line).group(1))

    while True:
        next_line = cursor.advance()
        if next_line is None:
            break
        match = continuation.match(next_line)
        if match is None:
            cursor.rewind()
            break
        raw_lines.append(next_line)
        fragments.append(match.group(1))
        continued_number = find_line_number(next_line)
        if continued_number is not None:
            line_number = continued_number

    return LogItem(
        level=LogLevel.WARNING,
        message=" ".join(fragments),
        raw="\n".join(raw_lines) + "\n",
        line=line_number,
        file=current_file,
    )


# =============================================================================
# Registry
# =============================================================================


@dataclass(frozen=True)
class Classifier:
    """
    A diagnostic category.

    Attributes:
        name: Category identifier
        matches: Predicate on the triggering line
        parse: Builds the record, consuming any extra lines it owns
        opens_error: Whether TeX prints error context after this line
    """

    name: str
    matches: Callable[[str], bool]
    parse: Callable[[str, LogCursor, Optional[str]], LogItem]
    opens_error: bool = False


CLASSIFIERS: Tuple[Classifier, ...] = (
    Classifier("fatal_error", is_fatal_error, parse_fatal_error, opens_error=True),
    Classifier("file_line_error", is_file_line_error, parse_file_line_error, opens_error=True),
    Classifier("runaway_argument", is_runaway_argument, parse_runaway_argument),
    Classifier("latex_warning", is_latex_warning, parse_latex_warning),
    Classifier("box_warning", is_box_warning, parse_box_warning),
    Classifier("package_warning", is_package_warning, parse_package_warning),
)


def classify(line: str) -> Optional[Classifier]:
    """First classifier matching the line, or None for ordinary log text."""
    for classifier in CLASSIFIERS:
        if classifier.matches(line):
            return classifier
    return None
