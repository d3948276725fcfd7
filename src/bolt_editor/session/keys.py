"""Key events delivered to the editing session.

A key event is exactly one of three variants: a plain character, a
control combination, or a named navigation/editing key.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class KeyName(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    HOME = "home"
    END = "end"
    BACKSPACE = "backspace"
    DELETE = "delete"
    ESCAPE = "escape"
    ENTER = "enter"


@dataclass(frozen=True, slots=True)
class CharKey:
    """Single printable character."""

    char: str

    def __post_init__(self) -> None:
        if len(self.char) != 1:
            raise ValueError("CharKey requires exactly one character")


@dataclass(frozen=True, slots=True)
class ControlKey:
    """Ctrl + letter, stored lower-case (``ControlKey("q")`` is Ctrl-Q)."""

    letter: str

    def __post_init__(self) -> None:
        if len(self.letter) != 1:
            raise ValueError("ControlKey requires exactly one letter")
        object.__setattr__(self, "letter", self.letter.lower())


@dataclass(frozen=True, slots=True)
class NamedKey:
    name: KeyName


KeyEvent = Union[CharKey, ControlKey, NamedKey]


__all__ = ["CharKey", "ControlKey", "KeyEvent", "KeyName", "NamedKey"]
