"""
Port (interface) for daily price history providers.
Infrastructure adapters (e.g. YahooChartPriceHistoryProvider) must implement this interface.
"""

from abc import ABC, abstractmethod

from src.domain.entities.stock_price import PriceHistoryResult, PricePoint


class IPriceHistoryProvider(ABC):
    @abstractmethod
    def fetch_history(self, symbol: str) -> PriceHistoryResult:
        """Fetch about one year of daily history for *symbol*.

        Implementations never raise: network, status and payload problems are
        reported through ``PriceHistoryResult.failure``.
        """
        ...

    def fetch(self, symbol: str) -> list[PricePoint]:
        """Return the fetched points, or an empty list on any failure."""
        return self.fetch_history(symbol).points
