"""
Provider Registry - Maps ProviderName enum to adapter classes.
The active provider is selected by the RATE_PROVIDER setting.
"""

import logging

from django.db import models

from apps.converter.domain.config import RateConfig
from apps.converter.domain.interfaces import BaseRateProvider
from apps.converter.infrastructure.providers.freecurrency import FreeCurrencyApiProvider
from apps.converter.infrastructure.providers.mock import MockProvider

logger = logging.getLogger(__name__)


class ProviderName(models.TextChoices):
    """
    Enum with available providers.
    To add a new provider:
    1. Add an entry here
    2. Implement the BaseRateProvider interface
    3. Register in PROVIDER_REGISTRY
    """

    FREECURRENCY = "freecurrency", "FreeCurrencyAPI"
    MOCK = "mock", "Mock"


# Registry: Maps ProviderName enum to the corresponding adapter class
PROVIDER_REGISTRY: dict[str, type[BaseRateProvider]] = {
    ProviderName.FREECURRENCY: FreeCurrencyApiProvider,
    ProviderName.MOCK: MockProvider,
}


def get_provider_instance(provider_name: str, config: RateConfig) -> BaseRateProvider | None:
    """
    Get an instance of a provider by its name.

    Args:
        provider_name: The provider name from ProviderName enum
        config: Configuration handed to the provider

    Returns:
        Instance of the provider adapter, or None if not found
    """
    provider_class = PROVIDER_REGISTRY.get(provider_name)

    if provider_class is None:
        logger.error("Provider '%s' not found in registry", provider_name)
        return None

    return provider_class(config)


def get_configured_provider(config: RateConfig) -> BaseRateProvider:
    provider = get_provider_instance(config.provider_name, config)
    if provider is None:
        raise ValueError(
            f"Unknown RATE_PROVIDER '{config.provider_name}'. "
            f"Choose one of: {', '.join(PROVIDER_REGISTRY)}"
        )
    return provider
