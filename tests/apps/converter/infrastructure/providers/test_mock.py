import pytest

from apps.converter.domain.config import RateConfig
from apps.converter.domain.models import RateTable
from apps.converter.infrastructure.providers.mock import MockProvider


@pytest.fixture
def provider():
    return MockProvider()


def test_fetch_returns_fixed_table(provider):
    """
    Test that MockProvider serves its base rates as a RateTable.
    """
    table = provider.fetch()

    assert isinstance(table, RateTable)
    assert table["USD"] == 1.0
    assert table["EUR"] == 0.85
    assert set(table.codes()) == set(MockProvider.BASE_RATES)


def test_fetch_is_deterministic(provider):
    """
    Test that repeated fetches produce equal tables.
    """
    assert provider.fetch().as_dict() == provider.fetch().as_dict()


def test_fetch_returns_new_table_each_time(provider):
    assert provider.fetch() is not provider.fetch()


def test_uses_configured_base_currency():
    table = MockProvider(RateConfig(base_currency="USD")).fetch()

    assert table.base_currency == "USD"
