"""
Infrastructure adapter: Yahoo Finance v8 chart endpoint (httpx) → IPriceHistoryProvider.
All knowledge of the chart payload shape is confined here.

Expected payload:
    {"chart": {"result": [{"timestamp": [...],
                           "indicators": {"quote": [{"close": [...], "volume": [...]}]}}]}}
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

import httpx

from src.domain.entities.stock_price import FetchFailure, PriceHistoryResult, PricePoint
from src.domain.ports.stock_data_port import IPriceHistoryProvider

logger = logging.getLogger(__name__)

DEFAULT_CHART_URL = "https://query1.finance.yahoo.com/v8/finance/chart"
DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


class MalformedChartError(ValueError):
    """The payload does not carry the expected chart.result structure."""


def _value_at(values: list, idx: int) -> Any:
    return values[idx] if idx < len(values) else None


def parse_chart_payload(payload: Any) -> list[PricePoint]:
    """Zip timestamps, closes and volumes into PricePoints.

    Points with a missing or non-positive close are dropped (no-trade days);
    a missing volume is recorded as 0.

    Raises:
        MalformedChartError: if ``chart.result[0]`` is absent.
    """
    try:
        result = payload["chart"]["result"][0]
    except (KeyError, IndexError, TypeError) as exc:
        raise MalformedChartError("chart.result missing from payload") from exc
    if not isinstance(result, dict):
        raise MalformedChartError("chart.result[0] is not an object")

    timestamps = result.get("timestamp") or []
    quotes = (result.get("indicators") or {}).get("quote") or [{}]
    closes = quotes[0].get("close") or []
    volumes = quotes[0].get("volume") or []

    points = []
    for idx, ts in enumerate(timestamps):
        close = _value_at(closes, idx)
        if not close or close <= 0:
            continue
        volume = _value_at(volumes, idx) or 0
        points.append(
            PricePoint(
                date=datetime.fromtimestamp(ts, tz=timezone.utc).date().isoformat(),
                close=float(close),
                volume=int(volume),
            )
        )
    return points


class YahooChartPriceHistoryProvider(IPriceHistoryProvider):
    """Fetches one year of daily closes from the Yahoo Finance chart API."""

    def __init__(
        self,
        base_url: str = DEFAULT_CHART_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: Optional[float] = 10,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._headers = {"User-Agent": user_agent}
        self._client = client or httpx.Client(timeout=timeout)

    def fetch_history(self, symbol: str) -> PriceHistoryResult:
        url = f"{self._base_url}/{symbol}"
        try:
            response = self._client.get(
                url,
                params={"interval": "1d", "range": "1y"},
                headers=self._headers,
            )
        except httpx.HTTPError as exc:
            logger.warning("Chart request for %s failed: %s", symbol, exc)
            return PriceHistoryResult.failed(symbol, FetchFailure.NETWORK_ERROR)

        if response.status_code == 404:
            logger.warning("Chart endpoint has no data for %s", symbol)
            return PriceHistoryResult.failed(symbol, FetchFailure.NOT_FOUND)
        if not response.is_success:
            logger.warning(
                "Chart request for %s returned HTTP %d", symbol, response.status_code
            )
            return PriceHistoryResult.failed(symbol, FetchFailure.NETWORK_ERROR)

        try:
            payload = response.json()
        except ValueError:
            logger.warning("Chart response for %s is not valid JSON", symbol)
            return PriceHistoryResult.failed(symbol, FetchFailure.MALFORMED_RESPONSE)

        try:
            points = parse_chart_payload(payload)
        except MalformedChartError as exc:
            chart = payload.get("chart") if isinstance(payload, dict) else None
            if isinstance(chart, dict) and chart.get("error"):
                logger.warning("Chart endpoint reported an error for %s: %s", symbol, chart["error"])
                return PriceHistoryResult.failed(symbol, FetchFailure.NOT_FOUND)
            logger.warning("Chart response for %s is malformed: %s", symbol, exc)
            return PriceHistoryResult.failed(symbol, FetchFailure.MALFORMED_RESPONSE)
        except (TypeError, ValueError, AttributeError, OverflowError, OSError) as exc:
            logger.warning("Chart response for %s has unreadable values: %s", symbol, exc)
            return PriceHistoryResult.failed(symbol, FetchFailure.MALFORMED_RESPONSE)

        return PriceHistoryResult(symbol=symbol, points=points)
