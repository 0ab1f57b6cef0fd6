"""
TeX Log Parser

Turns the complete .log output of one TeX run into an ordered list of
LogItem records.

Pipeline:
    raw text -> reconstruct_lines() -> LogCursor -> LogParser
    LogParser dispatches each line to the first matching classifier; lines no
    classifier claims are scanned for file open/close markers instead.

After a fatal error or file:line:error, TeX prints where it was in the input
("l.42 \\foo") followed by a couple of context blocks. The parser switches to
the ERROR state after such a record; the next step captures those blocks into
it and returns to NORMAL.
"""

import os
import time
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from dotenv import load_dotenv

from texdiag.contexts.diagnostics.classifiers import classify, find_context_line_number
from texdiag.contexts.diagnostics.exceptions import LogFileNotFoundError, LogInputError
from texdiag.contexts.diagnostics.file_tracker import FileContextTracker
from texdiag.contexts.diagnostics.log_item import LogItem
from texdiag.contexts.diagnostics.log_patterns import LOCATIONS
from texdiag.contexts.diagnostics.log_text import LogCursor, reconstruct_lines
from texdiag.contexts.diagnostics.logger import (
    _log_debug,
    log_parse_result,
    log_parse_start,
)
from texdiag.contexts.diagnostics.severity import LogLevel, filter_by_level

load_dotenv()

# Level name, resolved when parse_log_file runs
DEFAULT_MIN_LEVEL = os.getenv("TEXDIAG_MIN_LEVEL", "info")
# TeX writes font metadata that is not valid UTF-8
LOG_ENCODING = os.getenv("TEXDIAG_LOG_ENCODING", "latin-1")


class ParserState(Enum):
    NORMAL = 0
    ERROR = 1


class LogParser:
    """
    Single-use parser over one log text.

    All state (cursor, file stack, results) lives on the instance, so
    separate logs can be parsed concurrently with separate parsers.

    Example:
        items = LogParser(log_text).parse()
    """

    def __init__(self, text: str):
        self.cursor = LogCursor(reconstruct_lines(text))
        self.files = FileContextTracker()
        self.state = ParserState.NORMAL
        self.items: List[LogItem] = []

    def parse(self) -> List[LogItem]:
        """Run through the whole log once and return the records in log order."""
        while True:
            if self.state is ParserState.ERROR:
                self._capture_error_context(self.items[-1])
                self.state = ParserState.NORMAL
                continue

            line = self.cursor.advance()
            if line is None:
                break

            classifier = classify(line)
            if classifier is None:
                self.files.scan(line)
                continue

            item = classifier.parse(line, self.cursor, self.files.current_file)
            self.items.append(item)
            if classifier.opens_error:
                self.state = ParserState.ERROR

        _log_debug(
            f"Parsed {len(self.cursor.lines)} logical lines into {len(self.items)} diagnostics"
        )
        return self.items

    def _capture_error_context(self, item: LogItem) -> None:
        """
        Append TeX's post-error context to an error record.

        Three blocks: up to the "l.<N>" line, then up to a blank line, then up
        to the next blank line. Every block stops early at the start of a new
        error so consecutive errors never merge.
        """
        blocks = [
            self.cursor.collect_until_match(LOCATIONS.CONTEXT_LINE, stop_at_error=True),
            self.cursor.collect_until_blank(stop_at_error=True),
            self.cursor.collect_until_blank(stop_at_error=True),
        ]
        context = "\n".join("\n".join(block) for block in blocks)

        item.content = (item.content or "") + context
        item.raw += context

        if item.line is None:
            item.line = find_context_line_number(item.raw)


def parse_log(text: str, min_level: Optional[Union[LogLevel, str]] = None) -> List[LogItem]:
    """
    Parse TeX log text into diagnostics.

    Args:
        text: Complete log of one TeX run
        min_level: Keep only records at or above this level (default: keep all)

    Returns:
        Records in the order they appear in the log

    Raises:
        LogInputError: If text is None or not a string
    """
    if not isinstance(text, str):
        raise LogInputError(f"Log text must be a string, got {type(text).__name__}")

    if not text:
        return []

    return filter_by_level(LogParser(text).parse(), min_level)


def parse_log_file(
    log_path: Union[Path, str],
    min_level: Optional[Union[LogLevel, str]] = DEFAULT_MIN_LEVEL,
    encoding: str = LOG_ENCODING,
) -> List[LogItem]:
    """
    Read a TeX .log file and parse it into diagnostics.

    Args:
        log_path: Path to the .log file
        min_level: Keep only records at or above this level
            (default: TEXDIAG_MIN_LEVEL from the environment, else INFO)
        encoding: Encoding used to read the file (default: TEXDIAG_LOG_ENCODING, else latin-1)

    Returns:
        Filtered records in log order

    Raises:
        LogFileNotFoundError: If log_path does not exist or is not a file
        LogInputError: If the file cannot be read or decoded
        ValueError: If min_level (or TEXDIAG_MIN_LEVEL) is not a known level
    """
    log_path = Path(log_path)
    if not log_path.is_file():
        raise LogFileNotFoundError("TeX log file not found", log_path=log_path)

    min_level = LogLevel.from_name(min_level) if min_level is not None else None
    log_parse_start(log_path, min_level or LogLevel.DEBUG, encoding)
    start_time = time.time()

    try:
        text = log_path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise LogInputError(f"Could not read TeX log file ({e})", log_path=log_path) from e

    items = parse_log(text)
    kept = filter_by_level(items, min_level)

    log_parse_result(log_path, kept, total=len(items), elapsed_time=time.time() - start_time)
    return kept
