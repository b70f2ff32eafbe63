import pytest

from conftest import rising_closes
from src.application.use_cases.analyze_stock import (
    AnalyzeStockUseCase,
    compute_change,
    normalize_symbol,
)
from src.domain.entities.analysis import ChangeBaseline, ScoringStrategy, Signal
from src.domain.entities.stock_price import FetchFailure
from src.domain.errors import (
    DataUnavailableError,
    DataUnavailableReason,
    InputValidationError,
)


@pytest.mark.parametrize("raw, expected", [(" aapl ", "AAPL"), ("brk1", "BRK1"), ("X", "X")])
def test_normalize_symbol(raw, expected):
    assert normalize_symbol(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "   ", "AAPL!", "BRK-B", "ABCDEFGHIJK", 42])
def test_normalize_symbol_rejects_malformed(raw):
    with pytest.raises(InputValidationError) as excinfo:
        normalize_symbol(raw)
    assert excinfo.value.status_code == 400


def test_compute_change_previous_day():
    change, percent = compute_change([100.0, 80.0, 88.0], ChangeBaseline.PREVIOUS_DAY)
    assert change == pytest.approx(8.0)
    assert percent == pytest.approx(10.0)


def test_compute_change_period_start():
    change, percent = compute_change([100.0, 80.0, 88.0], ChangeBaseline.PERIOD_START)
    assert change == pytest.approx(-12.0)
    assert percent == pytest.approx(-12.0)


def test_compute_change_single_point_is_flat():
    assert compute_change([50.0], ChangeBaseline.PREVIOUS_DAY) == (0.0, 0.0)


def test_execute_builds_aligned_result(make_provider):
    closes = rising_closes()
    provider = make_provider(closes=closes)

    result = AnalyzeStockUseCase(provider).execute("  aapl")

    assert provider.requested == ["AAPL"]
    assert result.symbol == "AAPL"
    assert result.current_price == closes[-1]
    assert len(result.data) == len(result.ma20) == len(result.ma50) == len(closes)
    assert result.ma20[18] is None and result.ma20[19] is not None
    assert result.ma50[48] is None and result.ma50[49] is not None
    assert result.signal is Signal.BUY
    assert result.signal_strength == pytest.approx(0.8)
    assert result.change == pytest.approx(closes[-1] - closes[-2])


def test_execute_uses_configured_strategy_and_baseline(make_provider):
    closes = rising_closes()
    use_case = AnalyzeStockUseCase(
        make_provider(closes=closes),
        strategy=ScoringStrategy.MOMENTUM,
        baseline=ChangeBaseline.PERIOD_START,
    )

    result = use_case.execute("AAPL")

    assert result.signal is Signal.BUY
    assert result.signal_strength == pytest.approx(1.0)
    assert result.change == pytest.approx(closes[-1] - closes[0])
    assert result.change_percent == pytest.approx((closes[-1] - closes[0]) / closes[0] * 100)


def test_short_series_is_not_an_error_in_lenient_mode(make_provider):
    closes = [10.0 + i for i in range(25)]

    result = AnalyzeStockUseCase(make_provider(closes=closes)).execute("ABC")

    assert result.ma50 == [None] * 25
    assert result.ma20[-1] is not None
    assert result.signal is Signal.HOLD
    assert result.signal_strength == 0.0


def test_short_series_is_rejected_in_strict_mode(make_provider):
    use_case = AnalyzeStockUseCase(make_provider(closes=[10.0] * 49), min_history_points=50)

    with pytest.raises(DataUnavailableError) as excinfo:
        use_case.execute("ABC")

    assert excinfo.value.reason is DataUnavailableReason.INSUFFICIENT_HISTORY
    assert excinfo.value.status_code == 400


def test_empty_series_is_not_found(make_provider):
    with pytest.raises(DataUnavailableError) as excinfo:
        AnalyzeStockUseCase(make_provider(closes=[])).execute("ABC")

    assert excinfo.value.reason is DataUnavailableReason.NOT_FOUND
    assert excinfo.value.status_code == 404


@pytest.mark.parametrize("failure", list(FetchFailure))
def test_fetch_failure_reason_is_surfaced(make_provider, failure):
    with pytest.raises(DataUnavailableError) as excinfo:
        AnalyzeStockUseCase(make_provider(failure=failure)).execute("ABC")

    assert excinfo.value.reason.value == failure.value
    assert "ABC" in excinfo.value.message


def test_invalid_symbol_never_reaches_provider(make_provider):
    provider = make_provider(closes=[1.0])

    with pytest.raises(InputValidationError):
        AnalyzeStockUseCase(provider).execute("   ")

    assert provider.requested == []
