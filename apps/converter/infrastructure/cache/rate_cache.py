"""
In-process cache for the upstream rate table.

The cached snapshot is an immutable CachedRateTable held in a single
attribute and replaced wholesale on refresh, so readers on the fresh path
never lock and never see a half-updated table. Refreshes are single-flight:
callers arriving during a refresh wait for it and reuse its result.
"""

import logging
import threading
import time
from typing import Callable

from apps.converter.domain.config import RateConfig
from apps.converter.domain.exceptions import UpstreamError
from apps.converter.domain.interfaces import BaseRateProvider, BaseRateSource
from apps.converter.domain.models import CachedRateTable, RateTable
from apps.converter.infrastructure.providers.registry import get_configured_provider

logger = logging.getLogger(__name__)


class RateCache(BaseRateSource):

    def __init__(
        self,
        provider: BaseRateProvider,
        freshness_window_seconds: float = 3600,
        serve_stale_on_error: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.provider = provider
        self.freshness_window_seconds = freshness_window_seconds
        self.serve_stale_on_error = serve_stale_on_error
        self._clock = clock
        self._snapshot: CachedRateTable | None = None
        self._refresh_lock = threading.Lock()
        self._attempts = 0
        self._last_error: UpstreamError | None = None

    @classmethod
    def from_config(cls, config: RateConfig, provider: BaseRateProvider | None = None) -> "RateCache":
        return cls(
            provider or get_configured_provider(config),
            freshness_window_seconds=config.freshness_window_seconds,
            serve_stale_on_error=config.serve_stale_on_error,
        )

    @property
    def snapshot(self) -> CachedRateTable | None:
        return self._snapshot

    def get_rates(self) -> RateTable:
        """
        Return the cached table, fetching a new one if it is missing or stale.

        Raises:
            UpstreamError: the refresh failed and no table can be served.
        """
        seen_attempts = self._attempts
        snapshot = self._snapshot
        if snapshot is not None and snapshot.is_fresh(self._clock(), self.freshness_window_seconds):
            logger.debug("Rate cache hit (age %.1fs)", snapshot.age(self._clock()))
            return snapshot.table

        with self._refresh_lock:
            # Another caller may have refreshed while we waited for the lock.
            snapshot = self._snapshot
            if snapshot is not None and snapshot.is_fresh(self._clock(), self.freshness_window_seconds):
                return snapshot.table

            # A refresh failed while we waited: reuse its outcome.
            if self._attempts != seen_attempts and self._last_error is not None:
                return self._serve_stale_or_raise(snapshot, self._last_error)

            try:
                return self._fetch_and_store()
            except UpstreamError as e:
                return self._serve_stale_or_raise(snapshot, e)

    def refresh(self) -> RateTable:
        """Fetch a new table regardless of the current snapshot's age."""
        with self._refresh_lock:
            return self._fetch_and_store()

    def invalidate(self) -> None:
        self._snapshot = None

    def _fetch_and_store(self) -> RateTable:
        logger.info("Rate cache miss, fetching from %s", self.provider.__class__.__name__)
        self._last_error = None
        try:
            table = self.provider.fetch()
        except UpstreamError as e:
            self._last_error = e
            raise
        finally:
            # Counts completed attempts, so waiters can tell one finished.
            self._attempts += 1
        self._snapshot = CachedRateTable(table=table, fetched_at=self._clock())
        return table

    def _serve_stale_or_raise(self, snapshot: CachedRateTable | None, error: UpstreamError) -> RateTable:
        if snapshot is not None and self.serve_stale_on_error:
            logger.warning(
                "Rate refresh failed (%s); serving stale table aged %.1fs",
                error, snapshot.age(self._clock()),
            )
            return snapshot.table
        raise error


_rate_cache: RateCache | None = None
_rate_cache_lock = threading.Lock()


def get_rate_cache() -> RateCache:
    """Process-wide rate cache built from Django settings on first use."""
    global _rate_cache
    if _rate_cache is None:
        with _rate_cache_lock:
            if _rate_cache is None:
                _rate_cache = RateCache.from_config(RateConfig.from_settings())
    return _rate_cache


def reset_rate_cache() -> None:
    global _rate_cache
    with _rate_cache_lock:
        _rate_cache = None
