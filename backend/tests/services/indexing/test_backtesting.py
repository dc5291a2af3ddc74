"""
Tests for the synthetic backtest model.
"""
from datetime import date

import pytest

from app.services.indexing.backtesting import (
    HORIZONS,
    TRADING_DAYS,
    backtest_seed,
    generate_backtest,
    trading_days,
)
from factories import make_quote

BENCHMARKS = {"sp500": 560.0, "nasdaq": 480.0}
END = date(2026, 3, 6)  # a Friday


@pytest.fixture
def quotes():
    return [
        make_quote(symbol="NVDA", price=500.0, sector="Technology", change_percent_1d=2.0),
        make_quote(symbol="NEE", price=75.0, sector="Utilities", change_percent_1d=-1.0),
        make_quote(symbol="UNH", price=520.0, sector="Healthcare", change_percent_1d=0.5),
        make_quote(symbol="TSLA", price=250.0, sector="Automotive", change_percent_1d=3.0),
        make_quote(symbol="FSLR", price=185.0, sector="Energy", change_percent_1d=-2.0),
        make_quote(symbol="AMD", price=120.0, sector="Technology", change_percent_1d=1.0),
    ]


class TestTradingDays:

    def test_weekdays_only_ending_on_end(self):
        days = trading_days(END, 10)
        assert len(days) == 10
        assert days[-1] == END
        assert all(d.weekday() < 5 for d in days)
        assert days == sorted(days)

    def test_weekend_end_rolls_back_to_friday(self):
        assert trading_days(date(2026, 3, 8), 1) == [END]


class TestGenerateBacktest:

    def test_deterministic_for_same_holdings(self, quotes):
        a = generate_backtest(quotes, "Mixed Index", BENCHMARKS, end=END)
        b = generate_backtest(list(reversed(quotes)), "Mixed Index", BENCHMARKS, end=END)
        assert a.performance_dict() == b.performance_dict()
        assert a.historical == b.historical

    def test_seed_depends_on_name(self, quotes):
        assert backtest_seed(quotes, "A") != backtest_seed(quotes, "B")

    def test_series_anchored_on_current_levels(self, quotes):
        report = generate_backtest(quotes, "Mixed Index", BENCHMARKS, end=END)

        assert len(report.historical) == TRADING_DAYS
        last = report.historical[-1]
        assert last["date"] == END.isoformat()
        assert last["portfolioValue"] == pytest.approx(sum(q.price for q in quotes), abs=0.01)
        assert last["sp500Value"] == pytest.approx(560.0, abs=0.01)
        assert last["nasdaqValue"] == pytest.approx(480.0, abs=0.01)

    def test_horizon_metrics(self, quotes):
        report = generate_backtest(quotes, "Mixed Index", BENCHMARKS, end=END)

        assert set(report.performance) == set(HORIZONS)
        for metrics in report.performance.values():
            assert metrics.alpha == pytest.approx(metrics.portfolio_return - metrics.sp500_return, abs=0.011)
            assert metrics.volatility > 0
            assert metrics.max_drawdown >= 0

        one_year = report.performance_dict()["1Y"]
        assert set(one_year) == {
            "portfolioReturn", "sp500Return", "nasdaqReturn", "alpha",
            "beta", "volatility", "sharpeRatio", "maxDrawdown",
        }

    def test_beta_tracks_market_exposure(self, quotes):
        report = generate_backtest(quotes, "Mixed Index", BENCHMARKS, end=END)
        # 2 of 6 holdings are technology: model beta 0.8 + 0.5 / 3
        assert 0.5 < report.horizon("1Y").beta < 1.5

    def test_empty_basket(self):
        report = generate_backtest([], "Empty Index", BENCHMARKS, end=END)
        assert report.historical[-1]["portfolioValue"] == 0.0
        assert report.horizon("1M") is not None
