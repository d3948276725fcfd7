"""Compose one redraw's worth of text from the buffer and viewport."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from bolt_editor import __version__
from bolt_editor.buffer import Buffer, Position

from .controller import CursorController, Size

NO_NAME = "[No Name]"
FILENAME_WIDTH = 20
EMPTY_ROW = "~"


@dataclass(frozen=True, slots=True)
class Frame:
    """Already-windowed text handed to the renderer.

    ``cursor`` is in screen coordinates relative to the text area.
    """

    rows: Tuple[str, ...]
    status_bar: str
    message: str
    cursor: Position


def compose_frame(
    buffer: Buffer,
    controller: CursorController,
    size: Size,
    *,
    message: str = "",
) -> Frame:
    return Frame(
        rows=tuple(_draw_rows(buffer, controller.offset, size)),
        status_bar=status_bar(buffer, controller.cursor, size.width),
        message=message[: max(size.width, 0)],
        cursor=controller.screen_position(),
    )


def _draw_rows(buffer: Buffer, offset: Position, size: Size) -> List[str]:
    rows: List[str] = []
    start = offset.column
    end = offset.column + size.width
    for screen_row in range(size.height):
        line = buffer.row(offset.line + screen_row)
        if line is not None:
            rows.append(line.render(start, end))
        elif buffer.is_empty() and screen_row == size.height // 3:
            rows.append(welcome_message(size.width))
        else:
            rows.append(EMPTY_ROW)
    return rows


def welcome_message(width: int) -> str:
    text = f"Bolt editor -- version {__version__}"
    padding = max(width - len(text), 0) // 2
    spaces = " " * max(padding - 1, 0)
    return f"{EMPTY_ROW}{spaces}{text}"[:width]


def status_bar(buffer: Buffer, cursor: Position, width: int) -> str:
    filename = (buffer.source_identity or NO_NAME)[:FILENAME_WIDTH]
    modified = "(modified)" if buffer.is_dirty() else ""
    status = f"{filename} - {len(buffer)} lines {modified}"
    line_indicator = f"{cursor.line + 1}/{len(buffer)}"
    used = len(status) + len(line_indicator)
    if width > used:
        status += " " * (width - used)
    return f"{status}{line_indicator}"[: max(width, 0)]


__all__ = ["Frame", "compose_frame", "status_bar", "welcome_message"]
