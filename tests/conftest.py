from __future__ import annotations

import pytest

from support import MemoryStorage


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()
