"""
Synthetic backtest for a generated index.

No price history is fetched. A year of daily returns is simulated for the
S&P 500, the NASDAQ and the portfolio, seeded from the holdings so the same
basket always produces the same curve. Figures are illustrative only.

Flow:
1. Seed a numpy Generator from the holdings and index name
2. Simulate 252 daily returns per series
3. Turn returns into value series anchored on today's levels
4. Compute return / risk metrics per horizon (1M, 3M, 1Y)
"""
import zlib
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Sequence, Dict, Any, List, Optional

import numpy as np

from app.services.data_fetcher.quotes import StockQuote

TRADING_DAYS = 252
HORIZONS = {"1M": 21, "3M": 63, "1Y": 252}

RISK_FREE_RATE = 0.05
MARKET_ANNUAL_DRIFT = 0.10
MARKET_ANNUAL_VOL = 0.16
NASDAQ_BETA = 1.15
NASDAQ_NOISE_ANNUAL_VOL = 0.06

# Annual idiosyncratic volatility by sector; unknown sectors use the default
SECTOR_VOLATILITY = {
    "Technology": 0.28,
    "Automotive": 0.45,
    "Energy": 0.35,
    "Healthcare": 0.20,
    "Utilities": 0.15,
    "Financials": 0.25,
    "Materials": 0.30,
    "Industrials": 0.22,
    "Communication": 0.26,
    "Communication Services": 0.26,
    "Consumer Discretionary": 0.30,
}
DEFAULT_SECTOR_VOLATILITY = 0.25


@dataclass
class HorizonMetrics:
    portfolio_return: float
    sp500_return: float
    nasdaq_return: float
    alpha: float
    beta: float
    volatility: float
    sharpe_ratio: float
    max_drawdown: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "portfolioReturn": self.portfolio_return,
            "sp500Return": self.sp500_return,
            "nasdaqReturn": self.nasdaq_return,
            "alpha": self.alpha,
            "beta": self.beta,
            "volatility": self.volatility,
            "sharpeRatio": self.sharpe_ratio,
            "maxDrawdown": self.max_drawdown,
        }


@dataclass
class BacktestReport:
    performance: Dict[str, HorizonMetrics] = field(default_factory=dict)
    historical: List[Dict[str, Any]] = field(default_factory=list)

    def horizon(self, key: str) -> Optional[HorizonMetrics]:
        return self.performance.get(key)

    def performance_dict(self) -> Dict[str, Dict[str, float]]:
        return {key: metrics.to_dict() for key, metrics in self.performance.items()}


def backtest_seed(quotes: Sequence[StockQuote], index_name: str) -> int:
    """Stable seed: CRC32 of the sorted holdings plus the index name."""
    holdings = sorted(f"{q.symbol}:{q.price:.4f}" for q in quotes)
    return zlib.crc32(("|".join(holdings) + "#" + index_name).encode("utf-8"))


def trading_days(end: date, count: int) -> List[date]:
    """The last ``count`` weekdays up to and including ``end`` (or its preceding Friday)."""
    days: List[date] = []
    current = end
    while len(days) < count:
        if current.weekday() < 5:
            days.append(current)
        current -= timedelta(days=1)
    days.reverse()
    return days


def _values_from_returns(returns: np.ndarray, last_value: float) -> np.ndarray:
    """Cumulative value series whose final point equals ``last_value``."""
    growth = np.cumprod(1.0 + returns)
    return growth * (last_value / growth[-1])


def _compounded_pct(returns: np.ndarray) -> float:
    return float((np.prod(1.0 + returns) - 1.0) * 100)


def _max_drawdown_pct(returns: np.ndarray) -> float:
    curve = np.cumprod(1.0 + returns)
    peaks = np.maximum.accumulate(np.concatenate(([1.0], curve)))[1:]
    drawdowns = (peaks - curve) / peaks
    return float(drawdowns.max() * 100) if drawdowns.size else 0.0


def _horizon_metrics(port: np.ndarray, sp: np.ndarray, nq: np.ndarray) -> HorizonMetrics:
    portfolio_return = _compounded_pct(port)
    sp500_return = _compounded_pct(sp)

    sp_var = float(np.var(sp, ddof=1)) if sp.size > 1 else 0.0
    if sp_var > 0:
        beta = float(np.cov(port, sp, ddof=1)[0, 1] / sp_var)
    else:
        beta = 1.0

    daily_std = float(np.std(port, ddof=1)) if port.size > 1 else 0.0
    volatility = daily_std * np.sqrt(TRADING_DAYS)
    if daily_std > 0:
        excess = float(np.mean(port)) - RISK_FREE_RATE / TRADING_DAYS
        sharpe = excess / daily_std * np.sqrt(TRADING_DAYS)
    else:
        sharpe = 0.0

    return HorizonMetrics(
        portfolio_return=round(portfolio_return, 2),
        sp500_return=round(sp500_return, 2),
        nasdaq_return=round(_compounded_pct(nq), 2),
        alpha=round(portfolio_return - sp500_return, 2),
        beta=round(beta, 2),
        volatility=round(float(volatility * 100), 2),
        sharpe_ratio=round(float(sharpe), 2),
        max_drawdown=round(_max_drawdown_pct(port), 2),
    )


def generate_backtest(
    quotes: Sequence[StockQuote],
    index_name: str,
    benchmarks: Dict[str, float],
    end: Optional[date] = None,
) -> BacktestReport:
    """Simulated one-year backtest of an equally weighted basket."""
    rng = np.random.default_rng(backtest_seed(quotes, index_name))
    end = end or date.today()

    count = len(quotes)
    tech_share = (
        sum(1 for q in quotes if (q.sector or "").lower() == "technology") / count
        if count else 0.0
    )
    mean_change = (
        sum(q.change_percent_1d for q in quotes) / count / 100 if count else 0.0
    )
    sector_vol = (
        float(np.mean([SECTOR_VOLATILITY.get(q.sector or "", DEFAULT_SECTOR_VOLATILITY) for q in quotes]))
        if count else DEFAULT_SECTOR_VOLATILITY
    )
    # Diversification across equal-weight holdings
    idio_vol = sector_vol / np.sqrt(max(count, 1))

    portfolio_beta = 0.8 + 0.5 * tech_share
    # Today's average move, read as an annual excess return
    daily_alpha = mean_change / TRADING_DAYS

    sp = rng.normal(MARKET_ANNUAL_DRIFT / TRADING_DAYS, MARKET_ANNUAL_VOL / np.sqrt(TRADING_DAYS), TRADING_DAYS)
    nq = NASDAQ_BETA * sp + rng.normal(0.0, NASDAQ_NOISE_ANNUAL_VOL / np.sqrt(TRADING_DAYS), TRADING_DAYS)
    port = (
        portfolio_beta * sp
        + daily_alpha
        + rng.normal(0.0, idio_vol / np.sqrt(TRADING_DAYS), TRADING_DAYS)
    )

    total_value = sum(q.price for q in quotes)
    port_values = _values_from_returns(port, total_value)
    sp_values = _values_from_returns(sp, benchmarks["sp500"])
    nq_values = _values_from_returns(nq, benchmarks["nasdaq"])

    historical = [
        {
            "date": day.isoformat(),
            "portfolioValue": round(float(pv), 2),
            "sp500Value": round(float(sv), 2),
            "nasdaqValue": round(float(nv), 2),
        }
        for day, pv, sv, nv in zip(trading_days(end, TRADING_DAYS), port_values, sp_values, nq_values)
    ]

    performance = {
        key: _horizon_metrics(port[-points:], sp[-points:], nq[-points:])
        for key, points in HORIZONS.items()
    }

    return BacktestReport(performance=performance, historical=historical)
