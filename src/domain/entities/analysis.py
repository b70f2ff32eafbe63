"""
Domain entities for a moving-average analysis of one symbol.
Zero external dependencies: pure Python dataclasses and enums only.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from src.domain.entities.stock_price import PricePoint


class Signal(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


class ScoringStrategy(str, Enum):
    """Selectable rubric for turning the latest price and MAs into a signal.

    ALIGNMENT: integer score from MA alignment and price vs MA20.
    MOMENTUM:  half-integer score from MA alignment and short-term momentum.
    """

    ALIGNMENT = "alignment"
    MOMENTUM = "momentum"


class ChangeBaseline(str, Enum):
    """Reference close used for the change / change-percent summary."""

    PREVIOUS_DAY = "previous_day"
    PERIOD_START = "period_start"


@dataclass(frozen=True)
class SignalResult:
    signal: Signal
    strength: float
    score: float = 0.0


@dataclass(frozen=True)
class AnalysisResult:
    symbol: str
    current_price: float
    change: float
    change_percent: float
    data: list[PricePoint]
    ma20: list[Optional[float]]
    ma50: list[Optional[float]]
    signal: Signal
    signal_strength: float
