"""Bridges Textual key events and widgets to an ``EditorSession``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from bolt_editor.session import (
    CharKey,
    ControlKey,
    EditorSession,
    KeyEvent,
    KeyName,
    KeyResult,
    NamedKey,
)
from bolt_editor.view import Frame, Size

TEXTUAL_KEYS: Dict[str, KeyName] = {
    "up": KeyName.UP,
    "down": KeyName.DOWN,
    "left": KeyName.LEFT,
    "right": KeyName.RIGHT,
    "pageup": KeyName.PAGE_UP,
    "pagedown": KeyName.PAGE_DOWN,
    "home": KeyName.HOME,
    "end": KeyName.END,
    "backspace": KeyName.BACKSPACE,
    "ctrl+h": KeyName.BACKSPACE,
    "delete": KeyName.DELETE,
    "escape": KeyName.ESCAPE,
    "enter": KeyName.ENTER,
    "ctrl+m": KeyName.ENTER,
}


def normalize_key(
    key: str, character: Optional[str] = None, *, is_printable: bool = False
) -> Optional[KeyEvent]:
    """Translate a Textual key name (plus its character) into a ``KeyEvent``.

    Returns ``None`` for keys the editor has no use for.
    """

    if key == "tab":
        return CharKey("\t")
    named = TEXTUAL_KEYS.get(key)
    if named is not None:
        return NamedKey(named)
    if key.startswith("ctrl+"):
        letter = key[len("ctrl+") :]
        if len(letter) == 1 and letter.isalpha():
            return ControlKey(letter)
        return None
    if is_printable and character and len(character) == 1:
        return CharKey(character)
    return None


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    draw: Callable[[Frame], None]
    viewport_size: Callable[[], Size]
    quit: Callable[[], None] = _noop
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Feeds normalized keys to the session and redraws after each one."""

    def __init__(self, session: EditorSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks

    def handle_textual_key(
        self,
        key: str,
        *,
        character: Optional[str] = None,
        is_printable: bool = False,
    ) -> Optional[KeyResult]:
        event = normalize_key(key, character, is_printable=is_printable)
        if event is None:
            return None
        self._log_state("key ->", key=key, event=event)
        result = self.session.handle_key(event, self.hooks.viewport_size())
        self._log_state("result <-", status=result.status, message=result.message)
        if self.session.should_quit:
            self.hooks.quit()
        else:
            self.refresh()
        return result

    def refresh(self) -> Frame:
        frame = self.session.frame(self.hooks.viewport_size())
        self.hooks.draw(frame)
        return frame

    def _log_state(self, prefix: str, **fields: object) -> None:
        try:
            snapshot: Dict[str, object] = {
                "cursor": self.session.cursor,
                "offset": self.session.offset,
                "lines": len(self.session.buffer),
                "dirty": self.session.buffer.is_dirty(),
                "quit_state": self.session.quit_state.value,
            }
            snapshot.update({k: v for k, v in fields.items() if v is not None})
            parts = [prefix]
            for key, value in snapshot.items():
                parts.append(f"{key}={value!r}")
            self.hooks.log(" ".join(parts))
        except Exception:
            pass


__all__ = ["TEXTUAL_KEYS", "TextualEditorAdapter", "TextualUIHooks", "normalize_key"]
