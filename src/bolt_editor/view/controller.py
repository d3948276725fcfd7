"""Cursor movement and viewport scrolling."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from bolt_editor.buffer import Buffer, Position


@dataclass(frozen=True, slots=True)
class Size:
    """Visible text area in character cells."""

    width: int
    height: int


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    HOME = "home"
    END = "end"


class PageDownPolicy(str, Enum):
    """What PAGE_DOWN does when a full page would run past the last line.

    ``WRAP`` jumps back to the first line. ``CLAMP`` stops on the last line.
    """

    WRAP = "wrap"
    CLAMP = "clamp"


class CursorController:
    """Owns the logical cursor and the top-left viewport offset.

    Pure coordinate arithmetic: the buffer and the viewport size are read,
    never modified. The size may change between calls.
    """

    def __init__(
        self,
        *,
        cursor: Position | None = None,
        offset: Position | None = None,
        page_down: PageDownPolicy = PageDownPolicy.WRAP,
    ) -> None:
        self.cursor = cursor or Position()
        self.offset = offset or Position()
        self.page_down = page_down

    def move(self, direction: Direction, buffer: Buffer, size: Size) -> Position:
        column, line = self.cursor.column, self.cursor.line
        document_height = len(buffer)
        row_width = buffer.row_length(line)
        height = max(size.height, 1)

        if direction is Direction.UP:
            line = max(line - 1, 0)
        elif direction is Direction.DOWN:
            if line < document_height:
                line += 1
        elif direction is Direction.LEFT:
            if column > 0:
                column -= 1
            elif line > 0:
                line -= 1
                column = buffer.row_length(line)
        elif direction is Direction.RIGHT:
            if column < row_width:
                column += 1
            elif line < document_height:
                line += 1
                column = 0
        elif direction is Direction.PAGE_UP:
            line = max(line - height, 0)
        elif direction is Direction.PAGE_DOWN:
            line = self._page_down(line, height, document_height)
        elif direction is Direction.HOME:
            column = 0
        elif direction is Direction.END:
            column = row_width

        # The target row may be shorter than the one we left.
        column = min(column, buffer.row_length(line))
        self.cursor = Position(column=column, line=line)
        return self.cursor

    def _page_down(self, line: int, height: int, document_height: int) -> int:
        if line + height < document_height:
            return line + height
        if self.page_down is PageDownPolicy.CLAMP:
            return max(document_height - 1, 0)
        return 0

    def reconcile(self, size: Size) -> Position:
        """Scroll just enough to bring the cursor inside the viewport."""

        width = max(size.width, 1)
        height = max(size.height, 1)
        column, line = self.offset.column, self.offset.line

        if self.cursor.line < line:
            line = self.cursor.line
        elif self.cursor.line >= line + height:
            line = self.cursor.line - height + 1

        if self.cursor.column < column:
            column = self.cursor.column
        elif self.cursor.column >= column + width:
            column = self.cursor.column - width + 1

        self.offset = Position(column=column, line=line)
        return self.offset

    def screen_position(self) -> Position:
        """Cursor translated into viewport coordinates."""

        return Position(
            column=max(self.cursor.column - self.offset.column, 0),
            line=max(self.cursor.line - self.offset.line, 0),
        )


__all__ = ["CursorController", "Direction", "PageDownPolicy", "Size"]
