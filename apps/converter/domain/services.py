"""
Domain services - Core business logic.
Implements cross-rate conversion through the base currency.
"""

import logging

from apps.converter.domain.config import DEFAULT_MAX_AMOUNT, RateConfig
from apps.converter.domain.exceptions import UnknownCurrency
from apps.converter.domain.interfaces import BaseRateSource
from apps.converter.domain.models import ConversionRequest, ConversionResult, RateTable
from apps.converter.domain.validators import validate_amount, validate_currency_code
from apps.converter.infrastructure.cache.rate_cache import get_rate_cache

logger = logging.getLogger(__name__)


class ConversionEngine:
    """
    Converts amounts between any two currencies present in the rate table.

    The upstream table only quotes rates against the base currency, so every
    conversion goes source -> base -> target:

        amount_in_base = amount / source_rate
        converted      = amount_in_base * target_rate
        effective_rate = target_rate / source_rate

    Inputs are validated before the rate source is touched, so invalid input
    never triggers an upstream fetch.
    """

    def __init__(self, rate_source: BaseRateSource, max_amount: float = DEFAULT_MAX_AMOUNT):
        self.rate_source = rate_source
        self.max_amount = max_amount

    def convert(self, source: str, target: str, amount) -> ConversionResult:
        """
        Convert an amount from one currency to another.

        Args:
            source: Source currency code (e.g. "EUR")
            target: Target currency code (e.g. "USD")
            amount: Amount to convert, in units of the source currency

        Returns:
            ConversionResult with the converted amount and effective rate

        Raises:
            InvalidAmount, InvalidCurrencyCode: input failed validation
            UnknownCurrency: a code is missing from the rate table
            UpstreamError: rates could not be obtained

        Example:
            >>> engine.convert("USD", "EUR", 100)
            ConversionResult(converted_amount=85.0, effective_rate=0.85)
        """
        value = validate_amount(amount, self.max_amount)
        validate_currency_code(source, "source")
        validate_currency_code(target, "target")

        rates = self.rate_source.get_rates()

        source_rate = rates.get(source)
        if source_rate is None:
            raise UnknownCurrency(source)
        target_rate = rates.get(target)
        if target_rate is None:
            raise UnknownCurrency(target)

        # Scaling by the effective rate keeps same-currency conversion exact.
        effective_rate = target_rate / source_rate
        converted_amount = value * effective_rate

        logger.debug("Converted %s %s -> %s %s at %s", value, source, converted_amount, target, effective_rate)
        return ConversionResult(converted_amount=converted_amount, effective_rate=effective_rate)

    def convert_request(self, request: ConversionRequest) -> ConversionResult:
        return self.convert(request.source, request.target, request.amount)

    def available_rates(self) -> RateTable:
        return self.rate_source.get_rates()


def get_conversion_engine() -> ConversionEngine:
    """Engine bound to the process-wide rate cache."""
    return ConversionEngine(get_rate_cache(), max_amount=RateConfig.from_settings().max_amount)
