"""Single editable line of text."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(slots=True)
class Line:
    """Character-indexed row of text.

    Content is kept as a list of one-character strings so inserts and
    deletes work on character columns rather than bytes. Out-of-range
    columns degrade to appends, no-ops, or clamped windows; nothing here
    raises for non-negative arguments.

    ``newline`` is the terminator that followed the line when it was read;
    ``None`` means the owning buffer's default style applies.
    """

    _chars: List[str] = field(default_factory=list)
    newline: Optional[str] = None

    @classmethod
    def from_text(cls, text: str, newline: Optional[str] = None) -> "Line":
        return cls(_chars=list(text), newline=newline)

    @property
    def text(self) -> str:
        return "".join(self._chars)

    def length(self) -> int:
        return len(self._chars)

    def __len__(self) -> int:
        return len(self._chars)

    def render(self, start: int, end: int) -> str:
        """Return the characters whose column lies in ``[start, end)``."""

        end = min(end, len(self._chars))
        if start >= end:
            return ""
        return "".join(self._chars[start:end])

    def insert(self, at: int, character: str) -> None:
        if at >= len(self._chars):
            self._chars.append(character)
        else:
            self._chars.insert(at, character)

    def delete(self, at: int) -> None:
        if at < len(self._chars):
            del self._chars[at]

    def split(self, at: int) -> "Line":
        """Truncate this line to ``[0, at)`` and return the remainder.

        The remainder keeps the original terminator; the new break takes the
        buffer default.
        """

        remainder = Line(_chars=self._chars[at:], newline=self.newline)
        del self._chars[at:]
        self.newline = None
        return remainder

    def append(self, other: "Line") -> None:
        self._chars.extend(other._chars)
        self.newline = other.newline
        other._chars.clear()
