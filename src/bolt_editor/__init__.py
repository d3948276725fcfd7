"""Minimal terminal text editor built around a line buffer and viewport engine."""

__all__ = [
    "adapters",
    "buffer",
    "config",
    "runtime",
    "session",
    "view",
]

__version__ = "0.1.0"
