import pytest
from datetime import datetime, timedelta, timezone as dt_timezone

from apps.converter.domain.exceptions import UpstreamError
from apps.converter.domain.interfaces import BaseRateProvider
from apps.converter.domain.models import RateTable
from apps.converter.infrastructure.cache.rate_cache import reset_rate_cache


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeDateTimeClock:
    """Timezone-aware wall clock that only moves when told to."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 5, 21, 12, 0, tzinfo=dt_timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class CountingProvider(BaseRateProvider):
    """Provider returning a fixed table and counting upstream calls."""

    def __init__(self, rates: dict | None = None):
        self.rates = rates if rates is not None else {"USD": 1.0, "EUR": 0.85}
        self.calls = 0
        self.fail_with: UpstreamError | None = None

    def fetch(self) -> RateTable:
        self.calls += 1
        if self.fail_with is not None:
            raise self.fail_with
        return RateTable(self.rates)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def wall_clock():
    return FakeDateTimeClock()


@pytest.fixture
def counting_provider():
    return CountingProvider()


@pytest.fixture
def rate_table():
    return RateTable({"USD": 1.0, "EUR": 0.85, "GBP": 0.73, "JPY": 110.0})


@pytest.fixture(autouse=True)
def fresh_rate_cache():
    """Each test starts without a process-wide rate cache."""
    reset_rate_cache()
    yield
    reset_rate_cache()
