"""Document buffer: ordered lines plus file identity and dirty state."""

from __future__ import annotations

import re
from contextlib import AbstractContextManager
from typing import ContextManager, Iterator, List, Optional, Tuple

from bolt_editor.runtime import telemetry

from .line import Line
from .state import Position
from .storage import FileStorage, Storage, StorageError

LINE_BREAKS = frozenset({"\n", "\r"})

_LINE_BREAK = re.compile(r"(\r\n|\r|\n)")


def _split_lines(text: str) -> Tuple[List[Line], bool]:
    """Split on ``\\n``, ``\\r\\n`` or ``\\r``, keeping each line's terminator.

    Returns the lines and whether the text ended with a line break.
    """

    if not text:
        return [], False
    parts = _LINE_BREAK.split(text)
    bodies, breaks = parts[0::2], parts[1::2]
    trailing = bodies[-1] == "" and bool(breaks)
    if trailing:
        bodies.pop()
    breaks.extend([None] * (len(bodies) - len(breaks)))
    lines = [Line.from_text(body, newline) for body, newline in zip(bodies, breaks)]
    return lines, trailing


class Buffer:
    """Editable document addressed in ``(column, line)`` coordinates.

    Cross-line edits (split on a line break, join on delete at end of line)
    live here rather than in the caller. Every mutating call marks the buffer
    dirty as a post-condition of the call itself.
    """

    def __init__(
        self,
        lines: Optional[List[Line]] = None,
        *,
        source_identity: Optional[str] = None,
        newline: str = "\n",
        trailing_newline: bool = False,
        storage: Optional[Storage] = None,
    ) -> None:
        self.lines: List[Line] = list(lines or [])
        self.source_identity = source_identity
        self.newline = newline
        self.trailing_newline = trailing_newline
        self.storage: Storage = storage or FileStorage()
        self.dirty = False

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        source_identity: Optional[str] = None,
        storage: Optional[Storage] = None,
    ) -> "Buffer":
        lines, trailing = _split_lines(text)
        first_break = _LINE_BREAK.search(text)
        return cls(
            lines,
            source_identity=source_identity,
            newline=first_break.group() if first_break else "\n",
            trailing_newline=trailing,
            storage=storage,
        )

    @classmethod
    def open(cls, source: str, *, storage: Optional[Storage] = None) -> "Buffer":
        """Load ``source`` through ``storage``; raises ``StorageError``."""

        backend = storage or FileStorage()
        with telemetry.span(
            "buffer::open", component="buffer", metadata={"source": source}
        ):
            text = backend.read(source)
        buffer = cls.from_text(text, source_identity=source, storage=backend)
        telemetry.record_event(
            "buffer.open", data={"source": source, "lines": len(buffer)}
        )
        return buffer

    def row(self, index: int) -> Optional[Line]:
        if 0 <= index < len(self.lines):
            return self.lines[index]
        return None

    def len(self) -> int:
        return len(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[Line]:
        return iter(self.lines)

    def is_empty(self) -> bool:
        return not self.lines

    def is_dirty(self) -> bool:
        return self.dirty

    def row_length(self, index: int) -> int:
        line = self.row(index)
        return len(line) if line is not None else 0

    def text(self) -> str:
        """Join the lines, each with its own terminator or the buffer default."""

        parts: List[str] = []
        last = len(self.lines) - 1
        for index, line in enumerate(self.lines):
            parts.append(line.text)
            if index < last or self.trailing_newline:
                parts.append(line.newline or self.newline)
        return "".join(parts)

    def insert(self, position: Position, character: str) -> None:
        if position.line > len(self.lines):
            return
        with Transaction(self, "insert", position) as tx:
            if character in LINE_BREAKS:
                self._insert_line_break(position)
            else:
                if position.line == len(self.lines):
                    self.lines.append(Line())
                self.lines[position.line].insert(position.column, character)
            tx.commit()

    def _insert_line_break(self, position: Position) -> None:
        if position.line == len(self.lines):
            self.lines.append(Line())
            self.lines.append(Line())
            return
        remainder = self.lines[position.line].split(position.column)
        self.lines.insert(position.line + 1, remainder)

    def delete(self, position: Position) -> None:
        if position.line >= len(self.lines):
            return
        current = self.lines[position.line]
        if position.column < len(current):
            with Transaction(self, "delete", position) as tx:
                current.delete(position.column)
                tx.commit()
        elif position.line + 1 < len(self.lines):
            with Transaction(self, "join", position) as tx:
                current.append(self.lines.pop(position.line + 1))
                tx.commit()

    def save(self, *, storage: Optional[Storage] = None) -> None:
        """Write every line to ``source_identity``; raises ``StorageError``."""

        if self.source_identity is None:
            raise StorageError("Buffer has no file name")
        backend = storage or self.storage
        with telemetry.span(
            "buffer::save",
            component="buffer",
            metadata={"source": self.source_identity},
        ):
            backend.write(self.source_identity, self.text())
        self.dirty = False
        telemetry.record_event(
            "buffer.save", data={"source": self.source_identity, "lines": len(self)}
        )


class Transaction(AbstractContextManager["Transaction"]):
    """Wraps one buffer mutation in a telemetry span.

    ``commit`` applies the dirty-flag post-condition; a mutation that raises
    before committing leaves the flag untouched.
    """

    def __init__(self, buffer: Buffer, label: str, position: Position) -> None:
        self.buffer = buffer
        self.label = label
        self.position = position
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component="buffer",
            metadata={
                "buffer": self.buffer.source_identity or "[No Name]",
                "line": self.position.line,
                "column": self.position.column,
            },
        )
        self._span_cm.__enter__()
        return self

    def commit(self) -> None:
        self.buffer.dirty = True

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["Buffer", "LINE_BREAKS", "Transaction"]
