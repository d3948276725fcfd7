"""Document coordinates shared by the buffer and the viewport controller."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Position:
    """Zero-based ``(column, line)`` pair in document coordinates."""

    column: int = 0
    line: int = 0
