import logging
import math

import requests

from apps.converter.domain.config import RateConfig
from apps.converter.domain.exceptions import UpstreamError
from apps.converter.domain.interfaces import BaseRateProvider
from apps.converter.domain.models import RateTable
from apps.converter.domain.validators import is_valid_currency_code

logger = logging.getLogger(__name__)


class FreeCurrencyApiProvider(BaseRateProvider):
    """
    freecurrencyapi.com provider.
    Uses the /latest endpoint to fetch every rate relative to the base currency
    in a single call.
    """

    def __init__(self, config: RateConfig):
        self.config = config

    def fetch(self) -> RateTable:
        """
        Fetch the full rate table from the upstream API.

        Returns:
            RateTable keyed by currency code

        Raises:
            UpstreamError: on a non-200 response, a transport failure or a
                malformed payload. Nothing is retried here.
        """
        if not self.config.api_url or not self.config.api_key:
            logger.error("FREECURRENCY_API_URL or FREECURRENCY_API_KEY is not configured")
            raise UpstreamError(None, "provider not configured")

        # Format: https://api.freecurrencyapi.com/v1/latest?apikey=KEY
        try:
            response = requests.get(
                self.config.api_url,
                params={"apikey": self.config.api_key},
                timeout=self.config.timeout_seconds,
            )
        except requests.exceptions.Timeout as e:
            logger.error("Timeout calling rate provider: %s", e)
            raise UpstreamError(None, "timeout") from e
        except requests.exceptions.RequestException as e:
            logger.error("Transport error calling rate provider: %s", e)
            raise UpstreamError(None, str(e)) from e

        if response.status_code != 200:
            logger.error("Rate provider returned HTTP %s", response.status_code)
            raise UpstreamError(response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError(response.status_code, "malformed payload") from e

        # Response format: {"data": {"EUR": 0.85, "USD": 1.0, ...}}
        rates = data.get("data") if isinstance(data, dict) else None
        if not isinstance(rates, dict):
            raise UpstreamError(response.status_code, "malformed payload")

        table = RateTable(self._clean_rates(rates), base_currency=self.config.base_currency)
        logger.info("Fetched %d rates from upstream", len(table))
        return table

    @staticmethod
    def _clean_rates(rates: dict) -> dict[str, float]:
        cleaned = {}
        for code, rate in rates.items():
            if not is_valid_currency_code(code):
                logger.warning("Skipping rate with invalid currency code %r", code)
                continue
            if isinstance(rate, bool) or not isinstance(rate, (int, float)):
                logger.warning("Skipping non-numeric rate for %s: %r", code, rate)
                continue
            try:
                value = float(rate)
            except OverflowError:
                logger.warning("Skipping out-of-range rate for %s", code)
                continue
            if not math.isfinite(value) or value <= 0:
                logger.warning("Skipping non-positive rate for %s: %r", code, rate)
                continue
            cleaned[code] = value
        return cleaned
