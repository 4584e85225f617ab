"""
Mock provider for development and tests.
Serves a fixed rate table without any network access.
"""

import logging

from apps.converter.domain.config import RateConfig
from apps.converter.domain.interfaces import BaseRateProvider
from apps.converter.domain.models import RateTable

logger = logging.getLogger(__name__)


class MockProvider(BaseRateProvider):
    """
    Mock provider that returns approximate real-world rates.
    Useful for:
    - Testing without external API calls
    - Development without API keys
    """

    # Base rates relative to USD (approximate real-world values)
    BASE_RATES = {
        "USD": 1.0,
        "EUR": 0.85,
        "GBP": 0.73,
        "CHF": 0.88,
        "JPY": 110.0,
        "CAD": 1.36,
        "AUD": 1.52,
    }

    def __init__(self, config: RateConfig | None = None):
        self.config = config or RateConfig()

    def fetch(self) -> RateTable:
        logger.debug("MockProvider serving %d fixed rates", len(self.BASE_RATES))
        return RateTable(self.BASE_RATES, base_currency=self.config.base_currency)
