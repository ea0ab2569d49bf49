import asyncio
import logging
import time
from typing import Optional
from urllib.parse import SplitResult

from providers.base import BaseProvider
from .errors import ProviderError
from .mapping import ShortcutMap, build_shortcut_map


class ShortcutCache:
    """Shortcut mapping that refreshes from a provider once its TTL lapses.

    The refresh lock is held across the provider round-trip, so at most one
    query is in flight and readers never observe a half-built mapping. A
    failed refresh keeps the previous mapping and leaves the refresh time
    untouched, so the next ``get`` tries again. Until then ``get`` serves the
    stale mapping, and only raises when no refresh has ever succeeded.
    """

    def __init__(self, provider: BaseProvider, ttl_seconds: float = 5.0, timeout_seconds: Optional[float] = 10.0):
        self._provider = provider
        self._ttl = ttl_seconds
        self._timeout = timeout_seconds
        self._mapping: ShortcutMap = {}
        self._last_refresh: Optional[float] = None
        self._loaded = False
        self._lock = asyncio.Lock()
        self._log = logging.getLogger(__name__)

    def _now(self) -> float:
        return time.monotonic()

    @property
    def size(self) -> int:
        return len(self._mapping)

    @property
    def last_refresh_age(self) -> Optional[float]:
        if self._last_refresh is None:
            return None
        return self._now() - self._last_refresh

    def snapshot(self) -> ShortcutMap:
        return dict(self._mapping)

    def invalidate(self) -> None:
        self._last_refresh = None

    def _is_fresh(self) -> bool:
        return self._last_refresh is not None and self._now() - self._last_refresh <= self._ttl

    async def refresh(self) -> None:
        async with self._lock:
            if self._is_fresh():
                return
            try:
                if self._timeout:
                    rows = await asyncio.wait_for(self._provider.query(), timeout=self._timeout)
                else:
                    rows = await self._provider.query()
            except asyncio.TimeoutError:
                self._log.error("Provider %s timed out after %ss", self._provider.name, self._timeout)
                raise ProviderError(self._provider.name, f"query timed out after {self._timeout}s")
            except ProviderError as e:
                self._log.error("Refresh from %s failed: %s", self._provider.name, e)
                raise
            except Exception as e:
                self._log.exception("Unexpected error refreshing from %s", self._provider.name)
                raise ProviderError(self._provider.name, f"unexpected error: {e}") from e
            self._mapping = build_shortcut_map(rows)
            self._last_refresh = self._now()
            self._loaded = True
            self._log.info("Refreshed %d shortcuts from %s", len(self._mapping), self._provider.name)

    async def current(self) -> ShortcutMap:
        """Refresh if due and return the mapping to read from.

        The returned dict is replaced, never mutated, by later refreshes.
        """
        try:
            await self.refresh()
        except ProviderError:
            if not self._loaded:
                raise
            self._log.warning("Serving stale mapping (%d shortcuts) after failed refresh", len(self._mapping))
        return self._mapping

    async def get(self, key: str) -> Optional[SplitResult]:
        mapping = await self.current()
        return mapping.get(key)
