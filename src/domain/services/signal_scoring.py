"""
Point-in-time BUY/SELL/HOLD heuristics over the latest close and its MAs.

Both rubrics share the MA alignment terms and differ only in their third
contribution and classification thresholds, so they are dispatched from one
function by ScoringStrategy.
"""

from typing import Optional, Sequence

from src.domain.entities.analysis import ScoringStrategy, Signal, SignalResult

MOMENTUM_LOOKBACK = 5

_ALIGNMENT_THRESHOLD = 3
_ALIGNMENT_SCALE = 5.0
_MOMENTUM_THRESHOLD = 1.5
_MOMENTUM_SCALE = 3.5
_MOMENTUM_HOLD_STRENGTH = 0.5


def _clamp(value: float) -> float:
    return max(0.0, min(value, 1.0))


def _trend_score(price: float, ma20: float, ma50: float) -> float:
    score = 0.0
    if price > ma20 > ma50:
        score += 2
    elif price < ma20 < ma50:
        score -= 2

    if ma20 > ma50:
        score += 1
    elif ma20 < ma50:
        score -= 1
    return score


def _score_alignment(closes: Sequence[float], ma20: float, ma50: float) -> SignalResult:
    price = closes[-1]
    score = _trend_score(price, ma20, ma50)
    if price > ma20:
        score += 1
    elif price < ma20:
        score -= 1

    strength = _clamp(abs(score) / _ALIGNMENT_SCALE)
    if score >= _ALIGNMENT_THRESHOLD:
        return SignalResult(Signal.BUY, strength, score)
    if score <= -_ALIGNMENT_THRESHOLD:
        return SignalResult(Signal.SELL, strength, score)
    return SignalResult(Signal.HOLD, strength, score)


def _score_momentum(closes: Sequence[float], ma20: float, ma50: float) -> SignalResult:
    price = closes[-1]
    score = _trend_score(price, ma20, ma50)
    # Never neutral: a flat close counts as weakening.
    reference = closes[max(0, len(closes) - MOMENTUM_LOOKBACK)]
    score += 0.5 if price > reference else -0.5

    if score > _MOMENTUM_THRESHOLD:
        return SignalResult(Signal.BUY, _clamp(abs(score) / _MOMENTUM_SCALE), score)
    if score < -_MOMENTUM_THRESHOLD:
        return SignalResult(Signal.SELL, _clamp(abs(score) / _MOMENTUM_SCALE), score)
    return SignalResult(Signal.HOLD, _MOMENTUM_HOLD_STRENGTH, score)


_SCORERS = {
    ScoringStrategy.ALIGNMENT: _score_alignment,
    ScoringStrategy.MOMENTUM: _score_momentum,
}


def generate_signal(
    closes: Sequence[float],
    ma20: Sequence[Optional[float]],
    ma50: Sequence[Optional[float]],
    strategy: ScoringStrategy = ScoringStrategy.ALIGNMENT,
) -> SignalResult:
    """Classify the most recent trading day.

    Args:
        closes:   Chronological close prices.
        ma20:     Short moving average aligned with *closes*.
        ma50:     Long moving average aligned with *closes*.
        strategy: Rubric used to score the latest values.

    Returns:
        SignalResult with strength in [0, 1]. When either latest moving average
        is missing (insufficient history) the result is HOLD with strength 0
        under every strategy.
    """
    if not closes or not ma20 or not ma50:
        return SignalResult(Signal.HOLD, 0.0, 0.0)
    last_ma20 = ma20[-1]
    last_ma50 = ma50[-1]
    if last_ma20 is None or last_ma50 is None:
        return SignalResult(Signal.HOLD, 0.0, 0.0)
    return _SCORERS[ScoringStrategy(strategy)](closes, last_ma20, last_ma50)
