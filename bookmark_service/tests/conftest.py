from __future__ import annotations

import pytest

from fakes import FakeClock, FlakyKVStore


@pytest.fixture
def store() -> FlakyKVStore:
    return FlakyKVStore()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
