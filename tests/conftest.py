from typing import Any, List

import pytest

from providers.base import BaseProvider
from services.cache import ShortcutCache


class FakeProvider(BaseProvider):
    def __init__(self, rows: List[List[Any]] = None):
        self.rows = rows or []
        self.calls = 0
        self.error: Exception = None

    @property
    def name(self) -> str:
        return "fake"

    async def query(self) -> List[List[Any]]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.rows


class Clock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def clock() -> Clock:
    return Clock()


@pytest.fixture
def make_cache(provider, clock):
    def _make(rows=None, ttl: float = 5.0) -> ShortcutCache:
        if rows is not None:
            provider.rows = rows
        cache = ShortcutCache(provider, ttl_seconds=ttl, timeout_seconds=1.0)
        cache._now = clock
        return cache

    return _make
