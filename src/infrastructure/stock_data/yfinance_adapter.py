"""
Infrastructure adapter: yfinance → IPriceHistoryProvider.
All yfinance-specific details (Ticker.history(), DataFrame rows) are confined here;
the rest of the codebase depends only on IPriceHistoryProvider.
"""

import logging
import math

import yfinance as yf

from src.domain.entities.stock_price import FetchFailure, PriceHistoryResult, PricePoint
from src.domain.ports.stock_data_port import IPriceHistoryProvider

logger = logging.getLogger(__name__)


class YFinancePriceHistoryProvider(IPriceHistoryProvider):
    """Fetches one year of daily closes from Yahoo Finance via the yfinance library."""

    def __init__(self, period: str = "1y", interval: str = "1d") -> None:
        self._period = period
        self._interval = interval

    def fetch_history(self, symbol: str) -> PriceHistoryResult:
        try:
            history = yf.Ticker(symbol).history(
                period=self._period, interval=self._interval
            )
        except Exception as exc:
            logger.warning("yfinance history for %s failed: %s", symbol, exc)
            return PriceHistoryResult.failed(symbol, FetchFailure.NETWORK_ERROR)

        if history is None or history.empty:
            logger.warning("yfinance returned no history for %s", symbol)
            return PriceHistoryResult.failed(symbol, FetchFailure.NOT_FOUND)
        if "Close" not in history.columns:
            logger.warning("yfinance history for %s has no Close column", symbol)
            return PriceHistoryResult.failed(symbol, FetchFailure.MALFORMED_RESPONSE)

        points = []
        for date, row in history.iterrows():
            close = row["Close"]
            if close is None or math.isnan(close) or close <= 0:
                continue
            volume = row.get("Volume", 0)
            points.append(
                PricePoint(
                    date=date.strftime("%Y-%m-%d"),
                    close=float(close),
                    volume=0 if volume is None or math.isnan(volume) else int(volume),
                )
            )
        return PriceHistoryResult(symbol=symbol, points=points)
