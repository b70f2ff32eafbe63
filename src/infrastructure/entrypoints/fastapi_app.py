"""
FastAPI entry point.

This module is the Composition Root: it loads settings, wires the configured
price history adapter into AnalyzeStockUseCase, and maps domain errors onto
JSON error responses of the form {"error": "..."}.

Run locally:
    uvicorn src.infrastructure.entrypoints.fastapi_app:app --reload --port 3001
"""

import logging
from typing import Optional

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

load_dotenv()

from src.application.use_cases.analyze_stock import AnalyzeStockUseCase  # noqa: E402
from src.domain.entities.analysis import AnalysisResult, Signal  # noqa: E402
from src.domain.errors import AnalysisError, DataUnavailableError  # noqa: E402
from src.domain.ports.stock_data_port import IPriceHistoryProvider  # noqa: E402
from src.infrastructure.config.settings import Settings  # noqa: E402
from src.infrastructure.stock_data.yahoo_chart_adapter import (  # noqa: E402
    YahooChartPriceHistoryProvider,
)

logger = logging.getLogger(__name__)


def build_provider(settings: Settings) -> IPriceHistoryProvider:
    if settings.price_provider == "yfinance":
        from src.infrastructure.stock_data.yfinance_adapter import (
            YFinancePriceHistoryProvider,
        )
        return YFinancePriceHistoryProvider()
    return YahooChartPriceHistoryProvider(
        base_url=settings.chart_url,
        user_agent=settings.user_agent,
        timeout=settings.http_timeout_seconds,
    )


# ---------------------------------------------------------------------------
# Composition Root: wire all dependencies once at startup
# ---------------------------------------------------------------------------
_settings = Settings.from_env()
logging.basicConfig(
    level=_settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
_analyze_use_case = AnalyzeStockUseCase(
    build_provider(_settings),
    strategy=_settings.scoring_strategy,
    baseline=_settings.change_baseline,
    min_history_points=_settings.min_history_points,
)


def get_analyze_use_case() -> AnalyzeStockUseCase:
    """FastAPI dependency: the process-wide analysis use case."""
    return _analyze_use_case


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------
class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PricePointModel(_CamelModel):
    date: str
    close: float
    volume: int


class AnalysisResponse(_CamelModel):
    symbol: str
    current_price: float
    change: float
    change_percent: float
    data: list[PricePointModel]
    ma20: list[Optional[float]]
    ma50: list[Optional[float]]
    signal: Signal
    signal_strength: float

    @classmethod
    def from_result(cls, result: AnalysisResult) -> "AnalysisResponse":
        return cls(
            symbol=result.symbol,
            current_price=result.current_price,
            change=result.change,
            change_percent=result.change_percent,
            data=[
                PricePointModel(date=p.date, close=p.close, volume=p.volume)
                for p in result.data
            ],
            ma20=result.ma20,
            ma50=result.ma50,
            signal=result.signal,
            signal_strength=result.signal_strength,
        )


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(title="Stock Signal Analyzer API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_allow_origins,
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.exception_handler(AnalysisError)
async def analysis_error_handler(request: Request, exc: AnalysisError) -> JSONResponse:
    body = {"error": exc.message}
    if isinstance(exc, DataUnavailableError):
        body["reason"] = exc.reason.value
    return JSONResponse(status_code=exc.status_code, content=body)


@app.get("/api/stock", response_model=AnalysisResponse)
def analyze_stock(
    symbol: Optional[str] = None,
    use_case: AnalyzeStockUseCase = Depends(get_analyze_use_case),
):
    """Analyze one symbol: price history, MA20 / MA50 and a BUY/SELL/HOLD signal."""
    try:
        result = use_case.execute(symbol)
    except AnalysisError:
        raise
    except Exception:
        logger.exception("Unexpected error analyzing symbol %r", symbol)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})
    return AnalysisResponse.from_result(result)


@app.get("/health")
async def health():
    return {"status": "ok"}
