"""Status line message, quit confirmation, and prompt state."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import List


class QuitState(str, Enum):
    """``NORMAL -> AWAITING_CONFIRM -> QUITTING`` when the buffer is dirty."""

    NORMAL = "normal"
    AWAITING_CONFIRM = "awaiting_confirm"
    QUITTING = "quitting"


@dataclass(slots=True)
class StatusMessage:
    """Transient message; expiry is checked when a frame is drawn."""

    text: str = ""
    time: float = field(default_factory=time.monotonic)

    def visible_text(self, now: float, timeout: float) -> str:
        if now - self.time < timeout:
            return self.text
        return ""


@dataclass(slots=True)
class Prompt:
    """Single-line input collected in the message bar."""

    label: str
    _typed: List[str] = field(default_factory=list)

    @property
    def value(self) -> str:
        return "".join(self._typed)

    def push(self, char: str) -> None:
        self._typed.append(char)

    def pop(self) -> None:
        if self._typed:
            self._typed.pop()

    def render(self) -> str:
        return f"{self.label} {self.value}"


__all__ = ["Prompt", "QuitState", "StatusMessage"]
