"""
Trailing simple moving averages over a close-price series.
Windows are positional over the list, not calendar-aware.
"""

from typing import Optional, Sequence

SHORT_MA_PERIOD = 20
LONG_MA_PERIOD = 50


def moving_average(closes: Sequence[float], period: int) -> list[Optional[float]]:
    """Simple moving average aligned index-for-index with *closes*.

    Position ``i`` is ``None`` while fewer than *period* values are available
    (``i < period - 1``), otherwise the mean of the *period* values ending at ``i``.

    Raises:
        ValueError: if *period* is not a positive integer.
    """
    if isinstance(period, bool) or not isinstance(period, int) or period < 1:
        raise ValueError(f"period must be a positive integer, got {period!r}")

    result: list[Optional[float]] = []
    window_sum = 0.0
    for idx, close in enumerate(closes):
        window_sum += close
        if idx >= period:
            window_sum -= closes[idx - period]
        if idx < period - 1:
            result.append(None)
        else:
            result.append(window_sum / period)
    return result
