"""
Logical lines of a TeX log.

TeX hard-wraps every line it writes at LOG_WRAP_LIMIT characters, which splits
long messages (and file paths) across physical lines. reconstruct_lines()
undoes the wrapping; LogCursor then walks the logical lines with one line of
rewind, which is all the classifiers need to capture multi-line events.
"""

import re
from typing import List, Optional

from texdiag.contexts.diagnostics.log_patterns import ERRORS, LOCATIONS, LOG_WRAP_LIMIT


def reconstruct_lines(text: str) -> List[str]:
    """
    Normalize line endings and rejoin lines wrapped at LOG_WRAP_LIMIT.

    A physical line is a continuation of the previous one when the previous
    physical line is exactly LOG_WRAP_LIMIT characters long, does not end in
    an ellipsis, and the current line does not start a fatal error ("!").

    Args:
        text: Raw log text

    Returns:
        Logical lines, in order
    """
    physical_lines = re.sub(r"\r\n|\r", "\n", text).split("\n")
    lines = [physical_lines[0]]

    for previous, current in zip(physical_lines, physical_lines[1:]):
        if (
            len(previous) == LOG_WRAP_LIMIT
            and not previous.endswith("...")
            and not current.startswith("!")
        ):
            lines[-1] += current
        else:
            lines.append(current)

    return lines


def starts_new_error(line: str) -> bool:
    """True if the line opens a new error event (fatal "! " or file:line:error)."""
    return bool(ERRORS.FATAL_ERROR.match(line) or ERRORS.FILE_LINE_ERROR.match(line))


class LogCursor:
    """
    Forward-only reader over logical lines with a single-step rewind.

    The cursor starts one position before the first line, so the first
    advance() returns line 0.
    """

    def __init__(self, lines: List[str]):
        self.lines = lines
        self.row = -1

    def advance(self) -> Optional[str]:
        """Move to the next line and return it, or None when input is exhausted."""
        if self.row + 1 >= len(self.lines):
            self.row = len(self.lines)
            return None
        self.row += 1
        return self.lines[self.row]

    def rewind(self) -> None:
        """Step back one line so the next advance() returns the current line again."""
        if self.row >= 0:
            self.row -= 1

    def collect_until_match(self, pattern: re.Pattern, stop_at_error: bool = False) -> List[str]:
        """
        Consume lines up to and including the first one matching pattern.

        Args:
            pattern: Terminating pattern (matched with re.match)
            stop_at_error: Leave a line that starts a new error unconsumed and stop

        Returns:
            Consumed lines; may be empty
        """
        collected = []

        while True:
            line = self.advance()
            if line is None:
                break

            if stop_at_error and starts_new_error(line):
                self.rewind()
                break

            collected.append(line)

            if pattern.match(line):
                break

        return collected

    def collect_until_blank(self, stop_at_error: bool = False) -> List[str]:
        """Consume lines up to and including the next empty or whitespace-only line."""
        return self.collect_until_match(LOCATIONS.BLANK_LINE, stop_at_error=stop_at_error)
