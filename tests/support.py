"""Shared test doubles and factories."""

from __future__ import annotations

from typing import Dict, List

from bolt_editor.buffer import Buffer, Line, StorageError


class MemoryStorage:
    """In-memory storage double; names listed in ``failing`` raise on access."""

    def __init__(self, files: Dict[str, str] | None = None) -> None:
        self.files: Dict[str, str] = dict(files or {})
        self.failing: set[str] = set()
        self.writes: List[str] = []

    def read(self, name: str) -> str:
        if name in self.failing or name not in self.files:
            raise StorageError(f"Cannot read '{name}'", name=name)
        return self.files[name]

    def write(self, name: str, text: str) -> None:
        if name in self.failing:
            raise StorageError(f"Cannot write '{name}'", name=name)
        self.files[name] = text
        self.writes.append(name)

def make_buffer(*rows: str, storage: MemoryStorage | None = None) -> Buffer:
    return Buffer(
        [Line.from_text(row) for row in rows], storage=storage or MemoryStorage()
    )

def row_texts(buffer: Buffer) -> List[str]:
    return [line.text for line in buffer]

