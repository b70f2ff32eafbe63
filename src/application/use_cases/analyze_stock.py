"""
Use-case: fetch daily history for a symbol and derive MAs, a signal and a change summary.
Depends only on Domain ports, entities and services: no infrastructure imports.
"""

import logging
import re

from src.domain.entities.analysis import (
    AnalysisResult,
    ChangeBaseline,
    ScoringStrategy,
)
from src.domain.entities.stock_price import FetchFailure
from src.domain.errors import (
    DataUnavailableError,
    DataUnavailableReason,
    InputValidationError,
)
from src.domain.ports.stock_data_port import IPriceHistoryProvider
from src.domain.services.indicators import (
    LONG_MA_PERIOD,
    SHORT_MA_PERIOD,
    moving_average,
)
from src.domain.services.signal_scoring import generate_signal

logger = logging.getLogger(__name__)

_SYMBOL_PATTERN = re.compile(r"^[A-Z0-9]{1,10}$")

_FAILURE_MESSAGES = {
    FetchFailure.NETWORK_ERROR: "Price data provider unavailable for symbol: {symbol}",
    FetchFailure.NOT_FOUND: "No data found for symbol: {symbol}",
    FetchFailure.MALFORMED_RESPONSE: "Unreadable price data for symbol: {symbol}",
}


def normalize_symbol(symbol: str | None) -> str:
    """Trim and uppercase *symbol*.

    Raises:
        InputValidationError: if the symbol is missing, blank, or not 1-10
            alphanumeric characters.
    """
    if symbol is None or not isinstance(symbol, str) or not symbol.strip():
        raise InputValidationError("Symbol is required")
    clean = symbol.strip().upper()
    if not _SYMBOL_PATTERN.match(clean):
        raise InputValidationError("Invalid symbol format")
    return clean


def compute_change(
    closes: list[float], baseline: ChangeBaseline
) -> tuple[float, float]:
    """Return ``(change, change_percent)`` of the latest close against *baseline*."""
    current = closes[-1]
    if ChangeBaseline(baseline) is ChangeBaseline.PERIOD_START:
        reference = closes[0]
    else:
        reference = closes[-2] if len(closes) > 1 else current
    change = current - reference
    return change, change / reference * 100


class AnalyzeStockUseCase:
    def __init__(
        self,
        provider: IPriceHistoryProvider,
        strategy: ScoringStrategy = ScoringStrategy.ALIGNMENT,
        baseline: ChangeBaseline = ChangeBaseline.PREVIOUS_DAY,
        min_history_points: int = 0,
    ) -> None:
        """
        Args:
            provider:           IPriceHistoryProvider implementation.
            strategy:           Signal scoring rubric.
            baseline:           Reference close for change / change_percent.
            min_history_points: Reject series shorter than this (0 disables).
        """
        self._provider = provider
        self._strategy = strategy
        self._baseline = baseline
        self._min_history_points = min_history_points

    def execute(self, symbol: str | None) -> AnalysisResult:
        """Analyze *symbol* (case-insensitive).

        Raises:
            InputValidationError: if *symbol* is missing or malformed.
            DataUnavailableError: if the fetch failed, returned no points, or
                returned fewer than ``min_history_points``.
        """
        clean_symbol = normalize_symbol(symbol)

        history = self._provider.fetch_history(clean_symbol)
        if not history.ok:
            raise DataUnavailableError(
                _FAILURE_MESSAGES[history.failure].format(symbol=clean_symbol),
                DataUnavailableReason(history.failure.value),
            )
        if not history.points:
            raise DataUnavailableError(
                f"No data found for symbol: {clean_symbol}",
                DataUnavailableReason.NOT_FOUND,
            )
        if len(history.points) < self._min_history_points:
            raise DataUnavailableError(
                f"Insufficient data for symbol: {clean_symbol} "
                f"({len(history.points)} of {self._min_history_points} days)",
                DataUnavailableReason.INSUFFICIENT_HISTORY,
            )

        closes = [point.close for point in history.points]
        ma20 = moving_average(closes, SHORT_MA_PERIOD)
        ma50 = moving_average(closes, LONG_MA_PERIOD)
        signal = generate_signal(closes, ma20, ma50, self._strategy)
        change, change_percent = compute_change(closes, self._baseline)

        logger.info(
            "Analyzed %s: %d days, signal=%s strength=%.2f",
            clean_symbol,
            len(closes),
            signal.signal.value,
            signal.strength,
        )
        return AnalysisResult(
            symbol=clean_symbol,
            current_price=closes[-1],
            change=change,
            change_percent=change_percent,
            data=list(history.points),
            ma20=ma20,
            ma50=ma50,
            signal=signal.signal,
            signal_strength=signal.strength,
        )
