"""Line buffer, document coordinates, and the storage boundary."""

from .buffer import LINE_BREAKS, Buffer, Transaction
from .line import Line
from .state import Position
from .storage import FileStorage, Storage, StorageError

__all__ = [
    "Buffer",
    "FileStorage",
    "LINE_BREAKS",
    "Line",
    "Position",
    "Storage",
    "StorageError",
    "Transaction",
]
