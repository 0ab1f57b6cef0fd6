"""
File-context tracking for TeX logs.

TeX announces every file it reads by printing "(" followed by the file path,
and prints the matching ")" when it is done with the file. Everything in
between (including diagnostics) belongs to that file. Ordinary parentheses
in messages use the same characters, so an open paren only counts as a file
when a path token follows it.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from texdiag.contexts.diagnostics.log_patterns import FILES


@dataclass
class FileEntry:
    """A file opened in the log, with the files opened while it was innermost."""

    path: str
    files: List["FileEntry"] = field(default_factory=list)


def consume_file_path(text: str) -> Tuple[Optional[str], str]:
    """
    Read a file path from the start of text.

    A path needs at least one "/"-terminated segment without spaces, parens
    or backslashes. TeX does not escape spaces in paths, so a space is
    accepted inside the path as long as the part before it does not already
    end in a file extension and the part after it does not open a bracketed
    or quoted token.

    Args:
        text: Text immediately following an open paren

    Returns:
        (path, remaining) or (None, text) when no path starts here

    Examples:
        >>> consume_file_path("./main.aux) [1]")
        ('./main.aux', ') [1]')
        >>> consume_file_path("/home/me/My Thesis/ch1.tex")
        ('/home/me/My Thesis/ch1.tex', '')
        >>> consume_file_path("see page 3)")
        (None, 'see page 3)')
    """
    if not FILES.PATH_START.match(text):
        return None, text

    end_match = FILES.PATH_END.search(text)
    end = end_match.start() if end_match else -1

    while end != -1 and text[end] == " ":
        if FILES.FILE_EXTENSION.search(text[:end]):
            break
        rest = text[end + 1 :]
        if FILES.BRACKETED_TOKEN.match(rest):
            break
        next_end = FILES.PATH_CONTINUATION_END.search(rest)
        end = -1 if next_end is None else end + next_end.start() + 1

    if end == -1:
        return text, ""
    return text[:end], text[end:]


class FileContextTracker:
    """
    Stack of files currently open according to the log's paren markers.

    The innermost file is the one diagnostics are attributed to. The
    outermost entry (the job's main file) is never popped, so once a file
    has been seen there is always a current file.
    """

    def __init__(self):
        self.stack: List[FileEntry] = []
        self.roots: List[FileEntry] = []

    @property
    def current_file(self) -> Optional[str]:
        """Path of the innermost open file, or None before any file is seen."""
        return self.stack[-1].path if self.stack else None

    @property
    def depth(self) -> int:
        """Number of files currently open."""
        return len(self.stack)

    def scan(self, line: str) -> None:
        """
        Apply every file open/close marker on a line, left to right.

        Args:
            line: One logical log line
        """
        # Parens without a path are ordinary text; their ")" must not close a file
        unattributed_opens = 0
        remaining = line

        while True:
            marker = FILES.PAREN.search(remaining)
            if marker is None:
                break
            remaining = remaining[marker.end() :]

            if marker.group() == "(":
                path, rest = consume_file_path(remaining)
                if path:
                    self._open(path)
                    remaining = rest
                else:
                    unattributed_opens += 1
            elif unattributed_opens > 0:
                unattributed_opens -= 1
            elif len(self.stack) > 1:
                self.stack.pop()

    def _open(self, path: str) -> None:
        entry = FileEntry(path=path)
        if self.stack:
            self.stack[-1].files.append(entry)
        else:
            self.roots.append(entry)
        self.stack.append(entry)
