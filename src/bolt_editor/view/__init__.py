"""Cursor/viewport engine and frame composition."""

from .controller import CursorController, Direction, PageDownPolicy, Size
from .frame import Frame, compose_frame

__all__ = [
    "CursorController",
    "Direction",
    "Frame",
    "PageDownPolicy",
    "Size",
    "compose_frame",
]
