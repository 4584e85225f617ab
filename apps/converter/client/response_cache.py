"""
Caller-side memoization of API responses.

Entries live in durable storage keyed by request identity and expire after a
fixed TTL. Payloads are opaque to the cache and returned exactly as saved.
"""

import json
import logging
from datetime import datetime, timedelta
from typing import Any, Callable, Optional

from django.utils import timezone

from apps.converter.infrastructure.persistence.repositories import CachedResponseRepository

logger = logging.getLogger(__name__)

DEFAULT_RESPONSE_TTL_SECONDS = 6 * 60 * 60
IDENTITY_SEPARATOR = "::"


def canonical_params(params: Any) -> str:
    """Stable serialization: key order never changes the result."""
    return json.dumps(params, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def make_identity(url: str, params: Any = None) -> str:
    """
    Build the cache identity for a request.

    A parameterless call is identified by its URL alone; a parameterized
    call appends the canonical serialization of its parameters.
    """
    if params is None:
        return url
    return f"{url}{IDENTITY_SEPARATOR}{canonical_params(params)}"


class ResponseCache:

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_RESPONSE_TTL_SECONDS,
        clock: Callable[[], datetime] = timezone.now,
    ):
        self.ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock

    @classmethod
    def from_settings(cls) -> "ResponseCache":
        from django.conf import settings

        return cls(ttl_seconds=settings.RESPONSE_CACHE_TTL_SECONDS)

    def get(self, identity: str) -> Optional[Any]:
        """Return the stored payload, or None if absent or expired (expired entries are deleted)."""
        entry = CachedResponseRepository.get(identity)
        if entry is None:
            return None

        if self.is_expired(entry):
            CachedResponseRepository.delete_if_saved_at(identity, entry.saved_at)
            logger.debug("[Cache Expired] Evicted %s", identity)
            return None

        logger.debug("[Cache Hit] %s", identity)
        return entry.response_payload

    def is_expired(self, entry) -> bool:
        return self._clock() - entry.saved_at > self.ttl

    def put(self, identity: str, payload: Any, request_body: Any = None, url: str = "") -> None:
        CachedResponseRepository.save(
            identity,
            payload,
            saved_at=self._clock(),
            url=url or identity.split(IDENTITY_SEPARATOR, 1)[0],
            request_body=request_body,
        )
        logger.debug("[Cache Saved] %s", identity)

    def clear(self) -> int:
        return CachedResponseRepository.delete_all()

    def purge_expired(self) -> int:
        return CachedResponseRepository.delete_saved_before(self._clock() - self.ttl)
