"""
Explicit configuration for the rate-acquisition-and-conversion core.
Built once from Django settings and handed to providers, caches and engines.
"""

from dataclasses import dataclass

DEFAULT_FRESHNESS_WINDOW_SECONDS = 60 * 60
DEFAULT_MAX_AMOUNT = 1_000_000_000_000.0


@dataclass(frozen=True)
class RateConfig:

    api_url: str = "https://api.freecurrencyapi.com/v1/latest"
    api_key: str = ""
    provider_name: str = "freecurrency"
    base_currency: str = "USD"
    timeout_seconds: float = 10.0
    freshness_window_seconds: float = DEFAULT_FRESHNESS_WINDOW_SECONDS
    serve_stale_on_error: bool = True
    max_amount: float = DEFAULT_MAX_AMOUNT

    def __post_init__(self):
        if self.freshness_window_seconds < 0:
            raise ValueError(
                f"freshness_window_seconds must not be negative, got {self.freshness_window_seconds}"
            )
        if self.max_amount <= 0:
            raise ValueError(f"max_amount must be positive, got {self.max_amount}")

    @classmethod
    def from_settings(cls) -> "RateConfig":
        from django.conf import settings

        return cls(
            api_url=settings.FREECURRENCY_API_URL,
            api_key=settings.FREECURRENCY_API_KEY,
            provider_name=settings.RATE_PROVIDER,
            base_currency=settings.BASE_CURRENCY,
            timeout_seconds=settings.UPSTREAM_TIMEOUT_SECONDS,
            freshness_window_seconds=settings.RATE_CACHE_TTL_SECONDS,
            serve_stale_on_error=settings.RATE_CACHE_SERVE_STALE,
            max_amount=settings.MAX_CONVERSION_AMOUNT,
        )
