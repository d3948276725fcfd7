"""Editing session: routes key events to the buffer and the cursor controller."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from bolt_editor.buffer import Buffer, Position, Storage, StorageError
from bolt_editor.config import EditorConfig
from bolt_editor.runtime import telemetry
from bolt_editor.view import CursorController, Direction, Frame, Size, compose_frame

from .keys import CharKey, ControlKey, KeyEvent, KeyName, NamedKey
from .status import Prompt, QuitState, StatusMessage

HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-Q = quit"
UNSAVED_WARNING = "Warning: File has unsaved changes. Press Ctrl-Q again to quit."
SAVE_PROMPT = "Save as:"

_MOVES: Dict[KeyName, Direction] = {
    KeyName.UP: Direction.UP,
    KeyName.DOWN: Direction.DOWN,
    KeyName.LEFT: Direction.LEFT,
    KeyName.RIGHT: Direction.RIGHT,
    KeyName.PAGE_UP: Direction.PAGE_UP,
    KeyName.PAGE_DOWN: Direction.PAGE_DOWN,
    KeyName.HOME: Direction.HOME,
    KeyName.END: Direction.END,
}


@dataclass(slots=True)
class KeyResult:
    """Outcome of ``EditorSession.handle_key``."""

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None


class EditorSession:
    """Owns the buffer, cursor, viewport offset, and status UI state."""

    def __init__(
        self,
        buffer: Optional[Buffer] = None,
        *,
        config: Optional[EditorConfig] = None,
        initial_status: str = HELP_MESSAGE,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.buffer = buffer if buffer is not None else Buffer()
        self.config = config or EditorConfig()
        self.controller = CursorController(page_down=self.config.page_down_policy)
        self.quit_state = QuitState.NORMAL
        self.prompt: Optional[Prompt] = None
        self._clock = clock
        self.status = StatusMessage(initial_status, clock())

    @classmethod
    def from_path(
        cls,
        path: Optional[str],
        *,
        config: Optional[EditorConfig] = None,
        storage: Optional[Storage] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> "EditorSession":
        """Open ``path``, falling back to an untitled buffer when it cannot be read."""

        if path is None:
            return cls(Buffer(storage=storage), config=config, clock=clock)
        try:
            buffer = Buffer.open(path, storage=storage)
        except StorageError as exc:
            telemetry.record_event(
                "session.open_failed",
                level="error",
                data={"source": path, "error": str(exc)},
            )
            return cls(
                Buffer(storage=storage),
                config=config,
                initial_status=f"ERR: Could not open file: {path}",
                clock=clock,
            )
        return cls(buffer, config=config, clock=clock)

    @property
    def cursor(self) -> Position:
        return self.controller.cursor

    @property
    def offset(self) -> Position:
        return self.controller.offset

    @property
    def should_quit(self) -> bool:
        return self.quit_state is QuitState.QUITTING

    def set_status(self, text: str) -> None:
        self.status = StatusMessage(text, self._clock())

    def handle_key(self, event: KeyEvent, size: Size) -> KeyResult:
        with telemetry.span(
            "session::key",
            component="session",
            metadata={"key": event, "quit_state": self.quit_state.value},
        ):
            if self.prompt is not None:
                result = self._handle_prompt_key(event)
            else:
                result = self._dispatch(event, size)
            self.controller.reconcile(size)
        return result

    def frame(self, size: Size) -> Frame:
        self.controller.reconcile(size)
        if self.prompt is not None:
            message = self.prompt.render()
        else:
            message = self.status.visible_text(
                self._clock(), self.config.status_message_timeout
            )
        return compose_frame(self.buffer, self.controller, size, message=message)

    def _dispatch(self, event: KeyEvent, size: Size) -> KeyResult:
        if event != ControlKey("q") and self.quit_state is QuitState.AWAITING_CONFIRM:
            self.quit_state = QuitState.NORMAL

        if isinstance(event, ControlKey):
            handler = _CONTROL_HANDLERS.get(event.letter)
            if handler is None:
                return KeyResult(consumed=False, status="unbound")
            return handler(self)

        if isinstance(event, CharKey):
            self.buffer.insert(self.cursor, event.char)
            self.controller.move(Direction.RIGHT, self.buffer, size)
            return KeyResult(consumed=True, status="insert")

        if isinstance(event, NamedKey):
            return self._handle_named(event.name, size)

        raise TypeError(f"Unsupported key event {event!r}")

    def _handle_named(self, name: KeyName, size: Size) -> KeyResult:
        direction = _MOVES.get(name)
        if direction is not None:
            self.controller.move(direction, self.buffer, size)
            return KeyResult(consumed=True, status="move")

        if name is KeyName.ENTER:
            self.buffer.insert(self.cursor, "\n")
            self.controller.move(Direction.RIGHT, self.buffer, size)
            return KeyResult(consumed=True, status="newline")

        if name is KeyName.DELETE:
            self.buffer.delete(self.cursor)
            return KeyResult(consumed=True, status="delete")

        if name is KeyName.BACKSPACE:
            if self.cursor.column > 0 or self.cursor.line > 0:
                self.controller.move(Direction.LEFT, self.buffer, size)
                self.buffer.delete(self.cursor)
            return KeyResult(consumed=True, status="backspace")

        return KeyResult(consumed=False, status="ignored")

    def request_quit(self) -> KeyResult:
        if self.buffer.is_dirty() and self.quit_state is QuitState.NORMAL:
            self.quit_state = QuitState.AWAITING_CONFIRM
            self.set_status(UNSAVED_WARNING)
            return KeyResult(
                consumed=True, status="confirm_quit", message=UNSAVED_WARNING
            )
        self.quit_state = QuitState.QUITTING
        telemetry.record_event("session.quit", data={"dirty": self.buffer.is_dirty()})
        return KeyResult(consumed=True, status="quit")

    def save(self) -> KeyResult:
        if self.buffer.source_identity is None:
            self.prompt = Prompt(SAVE_PROMPT)
            return KeyResult(consumed=True, status="prompt", message=SAVE_PROMPT)
        return self._write()

    def _write(self) -> KeyResult:
        try:
            self.buffer.save()
        except StorageError as exc:
            telemetry.record_event(
                "session.save_failed",
                level="error",
                data={"source": self.buffer.source_identity, "error": str(exc)},
            )
            self.set_status("Error saving file!")
            return KeyResult(consumed=True, status="save_error", message=str(exc))
        self.set_status("File saved successfully")
        return KeyResult(consumed=True, status="saved")

    def _handle_prompt_key(self, event: KeyEvent) -> KeyResult:
        assert self.prompt is not None
        if isinstance(event, CharKey):
            self.prompt.push(event.char)
            return KeyResult(consumed=True, status="editing")
        if event == NamedKey(KeyName.BACKSPACE):
            self.prompt.pop()
            return KeyResult(consumed=True, status="editing")
        if event == NamedKey(KeyName.ENTER):
            name = self.prompt.value
            self.prompt = None
            if not name:
                return self._abort_save()
            self.buffer.source_identity = name
            return self._write()
        if event == NamedKey(KeyName.ESCAPE):
            self.prompt = None
            return self._abort_save()
        return KeyResult(consumed=False, status="editing")

    def _abort_save(self) -> KeyResult:
        self.set_status("Save aborted")
        return KeyResult(consumed=True, status="save_aborted")


_CONTROL_HANDLERS: Dict[str, Callable[[EditorSession], KeyResult]] = {
    "q": EditorSession.request_quit,
    "s": EditorSession.save,
}


__all__ = ["EditorSession", "HELP_MESSAGE", "KeyResult", "UNSAVED_WARNING"]
