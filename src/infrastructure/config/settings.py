"""
Runtime settings read from environment variables.
The entry point calls load_dotenv() first, so a local .env file is honored.
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from src.domain.entities.analysis import ChangeBaseline, ScoringStrategy
from src.infrastructure.stock_data.yahoo_chart_adapter import (
    DEFAULT_CHART_URL,
    DEFAULT_USER_AGENT,
)

PROVIDERS = ("yahoo_chart", "yfinance")


def _read_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if value < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")
    return value


def _read_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    price_provider: str = "yahoo_chart"
    chart_url: str = DEFAULT_CHART_URL
    user_agent: str = DEFAULT_USER_AGENT
    http_timeout_seconds: float = 10.0
    scoring_strategy: ScoringStrategy = ScoringStrategy.ALIGNMENT
    change_baseline: ChangeBaseline = ChangeBaseline.PREVIOUS_DAY
    min_history_points: int = 0
    cors_allow_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from *env* (defaults to ``os.environ``).

        Raises:
            ValueError: on an unknown provider, strategy or baseline, or a
                non-numeric timeout / history minimum.
        """
        env = os.environ if env is None else env

        provider = env.get("PRICE_PROVIDER", "yahoo_chart").strip().lower()
        if provider not in PROVIDERS:
            raise ValueError(
                f"PRICE_PROVIDER must be one of {', '.join(PROVIDERS)}, got {provider!r}"
            )

        origins = [
            origin.strip()
            for origin in env.get("CORS_ALLOW_ORIGINS", "*").split(",")
            if origin.strip()
        ]

        return cls(
            price_provider=provider,
            chart_url=env.get("YAHOO_CHART_URL", DEFAULT_CHART_URL),
            user_agent=env.get("HTTP_USER_AGENT", DEFAULT_USER_AGENT),
            http_timeout_seconds=_read_float(env, "HTTP_TIMEOUT_SECONDS", 10.0),
            scoring_strategy=ScoringStrategy(
                env.get("SCORING_STRATEGY", "alignment").strip().lower()
            ),
            change_baseline=ChangeBaseline(
                env.get("CHANGE_BASELINE", "previous_day").strip().lower()
            ),
            min_history_points=_read_int(env, "MIN_HISTORY_POINTS", 0),
            cors_allow_origins=origins or ["*"],
            log_level=env.get("LOG_LEVEL", "INFO").strip().upper(),
        )
