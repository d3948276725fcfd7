"""Storage boundary used to load and persist buffers."""

from __future__ import annotations

from typing import Protocol


class StorageError(OSError):
    """Raised when a resource cannot be read or written."""

    def __init__(self, message: str, *, name: str | None = None) -> None:
        super().__init__(message)
        self.name = name


class Storage(Protocol):
    """Protocol describing how buffers exchange full text with a backing store."""

    def read(self, name: str) -> str:
        """Return the complete text of ``name`` or raise ``StorageError``."""
        ...

    def write(self, name: str, text: str) -> None:
        """Replace the content of ``name`` with ``text`` or raise ``StorageError``."""
        ...


class FileStorage:
    """Local filesystem storage.

    Newline translation is disabled in both directions so that the buffer
    sees, and writes back, the exact line endings of the file.
    """

    def __init__(self, *, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def read(self, name: str) -> str:
        try:
            with open(name, "r", encoding=self.encoding, newline="") as handle:
                return handle.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageError(f"Cannot read '{name}': {exc}", name=name) from exc

    def write(self, name: str, text: str) -> None:
        try:
            with open(name, "w", encoding=self.encoding, newline="") as handle:
                handle.write(text)
        except (OSError, UnicodeEncodeError) as exc:
            raise StorageError(f"Cannot write '{name}': {exc}", name=name) from exc


__all__ = ["FileStorage", "Storage", "StorageError"]
