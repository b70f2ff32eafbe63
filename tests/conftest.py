import pytest

from src.domain.entities.stock_price import FetchFailure, PriceHistoryResult, PricePoint
from src.domain.ports.stock_data_port import IPriceHistoryProvider


class FakePriceHistoryProvider(IPriceHistoryProvider):
    def __init__(self, closes=None, failure=None, error=None) -> None:
        self._closes = closes or []
        self._failure = failure
        self._error = error
        self.requested = []

    def fetch_history(self, symbol: str) -> PriceHistoryResult:
        self.requested.append(symbol)
        if self._error is not None:
            raise self._error
        if self._failure is not None:
            return PriceHistoryResult.failed(symbol, self._failure)
        points = [
            PricePoint(date=f"2024-{1 + idx // 28:02d}-{1 + idx % 28:02d}", close=close, volume=1000 + idx)
            for idx, close in enumerate(self._closes)
        ]
        return PriceHistoryResult(symbol=symbol, points=points)


def rising_closes(count: int = 60) -> list[float]:
    head = [100.0, 102.0, 98.0, 105.0, 110.0]
    return head + [110.0 + i for i in range(1, count - len(head) + 1)]


@pytest.fixture
def make_provider():
    def _make(closes=None, failure: FetchFailure = None, error: Exception = None):
        return FakePriceHistoryProvider(closes=closes, failure=failure, error=error)

    return _make
