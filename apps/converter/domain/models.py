"""
Pure domain entities (POPOs).
No dependency on Django or the ORM.
"""

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterator, Mapping


@dataclass(frozen=True)
class RateTable:
    """
    Snapshot of rates keyed by currency code, each relative to the base currency.

    The mapping is copied and frozen on construction, so a table never changes
    after it is built; refreshing rates means building a new table.
    """

    rates: Mapping[str, float]
    base_currency: str = "USD"

    def __post_init__(self):
        frozen = {}
        for code, rate in self.rates.items():
            rate = float(rate)
            if not math.isfinite(rate) or rate <= 0:
                raise ValueError(f"rate for {code} must be positive and finite, got {rate}")
            frozen[code] = rate
        object.__setattr__(self, "rates", MappingProxyType(frozen))

    def __getitem__(self, code: str) -> float:
        return self.rates[code]

    def __contains__(self, code: object) -> bool:
        return code in self.rates

    def __iter__(self) -> Iterator[str]:
        return iter(self.rates)

    def __len__(self) -> int:
        return len(self.rates)

    def get(self, code: str) -> float | None:
        return self.rates.get(code)

    def codes(self) -> list[str]:
        return sorted(self.rates)

    def as_dict(self) -> dict[str, float]:
        return dict(self.rates)


@dataclass(frozen=True)
class CachedRateTable:

    table: RateTable
    fetched_at: float

    def age(self, now: float) -> float:
        return now - self.fetched_at

    def is_fresh(self, now: float, window_seconds: float) -> bool:
        return self.age(now) <= window_seconds


@dataclass(frozen=True)
class ConversionRequest:

    source: str
    target: str
    amount: float


@dataclass(frozen=True)
class ConversionResult:

    converted_amount: float
    effective_rate: float
