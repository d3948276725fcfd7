"""Textual front end: renderer and input collaborators for the editor."""

from .controller import TextualEditorAdapter, TextualUIHooks, normalize_key

__all__ = ["TextualEditorAdapter", "TextualUIHooks", "normalize_key"]
