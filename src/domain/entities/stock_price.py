"""
Domain entities for daily price history.
Zero external dependencies: pure Python dataclasses and enums only.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class FetchFailure(str, Enum):
    """Why a price history fetch produced no data."""

    NETWORK_ERROR = "NETWORK_ERROR"
    NOT_FOUND = "NOT_FOUND"
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"


@dataclass(frozen=True)
class PricePoint:
    date: str
    close: float
    volume: int


@dataclass(frozen=True)
class PriceHistoryResult:
    """Outcome of one fetch: the points on success, a named failure otherwise."""

    symbol: str
    points: list[PricePoint] = field(default_factory=list)
    failure: Optional[FetchFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def failed(cls, symbol: str, failure: FetchFailure) -> "PriceHistoryResult":
        return cls(symbol=symbol, points=[], failure=failure)
