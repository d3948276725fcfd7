"""Editing session, key events, and status UI state."""

from .keys import CharKey, ControlKey, KeyEvent, KeyName, NamedKey
from .session import HELP_MESSAGE, UNSAVED_WARNING, EditorSession, KeyResult
from .status import Prompt, QuitState, StatusMessage

__all__ = [
    "CharKey",
    "ControlKey",
    "EditorSession",
    "HELP_MESSAGE",
    "KeyEvent",
    "KeyName",
    "KeyResult",
    "NamedKey",
    "Prompt",
    "QuitState",
    "StatusMessage",
    "UNSAVED_WARNING",
]
