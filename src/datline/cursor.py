"""
Line cursor: the mutable view over one input line being read.

Components do not advance a monotonic read pointer. Each one either
searches the whole line for its own label (separators, selections) or reads
"the next token from the current anchor". Whatever is consumed is excised
from the line, so later label searches never see it and several components
reading from the same anchor read successive tokens.

Example:
    cursor = LineCursor("NUMDOF 2 ONOFF 1 0")
    cursor.consume_label("ONOFF")      # line: "NUMDOF 2  1 0", anchor at 9
    cursor.read_token()                # "1", line: "NUMDOF 2   0"
    cursor.read_token()                # "0", line: "NUMDOF 2   "
"""

import re
from typing import Optional

from datline.errors import RequiredFieldMissing

_TOKEN_RE = re.compile(r"\s*(\S+)")


def _label_pattern(label: str) -> "re.Pattern[str]":
    return re.compile(r"(?<!\S)" + re.escape(label) + r"(?!\S)")


class LineCursor:
    """
    Remaining text of one line plus a read position.

    INVARIANT:
        0 <= position <= len(line)

    A cursor belongs to exactly one in-flight read. Never share it between
    lines.
    """

    def __init__(self, line: str):
        self.line = line
        self._position = 0

    @property
    def position(self) -> int:
        return self._position

    @position.setter
    def position(self, value: int) -> None:
        if not 0 <= value <= len(self.line):
            raise ValueError(f"Cursor position {value} outside line of length {len(self.line)}")
        self._position = value

    def __repr__(self) -> str:
        return f"LineCursor(line={self.line!r}, position={self._position})"

    def at_end(self) -> bool:
        """True once the anchor sits at the very end of the line."""
        return self._position >= len(self.line)

    def seek_end(self) -> None:
        self._position = len(self.line)

    def find_label(self, label: str) -> Optional[int]:
        """Offset of the first whitespace-delimited occurrence of `label`, or None."""
        match = _label_pattern(label).search(self.line)
        return match.start() if match else None

    def has_label(self, label: str) -> bool:
        return self.find_label(label) is not None

    def remove_at(self, start: int, length: int) -> None:
        """Excise `length` characters at `start` and anchor the cursor there."""
        self.line = self.line[:start] + self.line[start + length:]
        self.position = start

    def consume_label(self, label: str, optional: bool = False, field: str = "", section: str = "") -> bool:
        """
        Remove `label` from the line and anchor the cursor where it was.

        If the label is absent, an optional field moves the cursor to the end
        of the line so that the values that would follow it are read as
        absent as well.

        Returns:
            True if the label was found

        Raises:
            RequiredFieldMissing: Label absent and not optional
        """
        start = self.find_label(label)
        if start is None:
            if optional:
                self.seek_end()
                return False
            raise RequiredFieldMissing(
                f"Required parameter '{label}' for section '{section}' not specified in input file!",
                field=field or label, section=section,
            )

        self.remove_at(start, len(label))
        return True

    def peek_token(self) -> Optional[str]:
        """Next whitespace-delimited token after the anchor, without consuming it."""
        match = _TOKEN_RE.match(self.line, self._position)
        return match.group(1) if match else None

    def read_token(self) -> Optional[str]:
        """
        Extract the next token after the anchor.

        The token is removed from the line and the anchor stays where it was,
        so the following read returns the token after it.

        Returns:
            The token, or None if only whitespace remains
        """
        match = _TOKEN_RE.match(self.line, self._position)
        if match is None:
            return None

        anchor = self._position
        token = match.group(1)
        self.line = self.line[:match.start(1)] + self.line[match.end(1):]
        self._position = anchor
        return token


__all__ = ["LineCursor"]
