from abc import ABC, abstractmethod

from apps.converter.domain.models import RateTable


class BaseRateProvider(ABC):
    @abstractmethod
    def fetch(self) -> RateTable:
        pass


class BaseRateSource(ABC):
    @abstractmethod
    def get_rates(self) -> RateTable:
        pass
