"""
HTTP client for the converter API, with a response cache in front of the
network.
"""

import logging
import time
from typing import Any, Callable, Optional

import requests

from apps.converter.client.response_cache import ResponseCache, make_identity

logger = logging.getLogger(__name__)


class ConverterApiError(Exception):

    def __init__(self, status: Optional[int], payload: Any = None):
        self.status = status
        self.payload = payload
        message = payload.get("message") if isinstance(payload, dict) else None
        super().__init__(message or f"Converter API request failed: {status if status is not None else 'no response'}")


class ConverterApiClient:
    """
    Calls the /currencies and /convert endpoints.

    Successful responses are memoized in the ResponseCache by request
    identity; error responses are never cached. `min_interval` spaces out
    successive network conversions (cache hits are not throttled).
    """

    def __init__(
        self,
        base_url: str,
        cache: Optional[ResponseCache] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 10,
        min_interval: float = 0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.base_url = base_url.rstrip("/")
        self.cache = cache
        self.session = session or requests.Session()
        self.timeout = timeout
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_conversion_at: Optional[float] = None

    def get_currencies(self) -> dict:
        url = f"{self.base_url}/currencies/"
        identity = make_identity(url)

        cached = self._cache_get(identity)
        if cached is not None:
            return cached

        payload = self._request("GET", url)
        self._cache_put(identity, payload, url=url)
        return payload

    def convert(self, source: str, target: str, amount: float) -> dict:
        url = f"{self.base_url}/convert/"
        body = {"from": source, "to": target, "amount": amount}
        identity = make_identity(url, body)

        cached = self._cache_get(identity)
        if cached is not None:
            return cached

        self._throttle()
        payload = self._request("POST", url, json=body)
        self._cache_put(identity, payload, url=url, request_body=body)
        return payload

    def _throttle(self) -> None:
        if self.min_interval > 0 and self._last_conversion_at is not None:
            wait = self.min_interval - (self._clock() - self._last_conversion_at)
            if wait > 0:
                self._sleep(wait)
        self._last_conversion_at = self._clock()

    def _request(self, method: str, url: str, **kwargs) -> Any:
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.error("Converter API unreachable at %s: %s", url, e)
            raise ConverterApiError(None, {"message": str(e)}) from e

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if not 200 <= response.status_code < 300:
            raise ConverterApiError(response.status_code, payload)
        return payload

    def _cache_get(self, identity: str) -> Any:
        if self.cache is None:
            return None
        return self.cache.get(identity)

    def _cache_put(self, identity: str, payload: Any, url: str, request_body: Any = None) -> None:
        if self.cache is not None and payload is not None:
            self.cache.put(identity, payload, request_body=request_body, url=url)
