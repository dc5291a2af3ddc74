"""
Index-level figures derived from constituent quotes.
"""
from dataclasses import dataclass
from typing import Sequence, Dict, Any

from app.services.data_fetcher.quotes import StockQuote

# No multi-day price history is fetched; the weekly figure is the daily
# figure scaled to seven days.
WEEK_MULTIPLIER = 7


@dataclass
class PerformanceSummary:
    total_value: float
    performance_1d: float
    performance_7d: float


def summarize(quotes: Sequence[StockQuote]) -> PerformanceSummary:
    """Unweighted sum of prices and mean daily change."""
    total_value = sum(q.price for q in quotes)
    if quotes:
        performance_1d = sum(q.change_percent_1d for q in quotes) / len(quotes)
    else:
        performance_1d = 0.0
    return PerformanceSummary(
        total_value=total_value,
        performance_1d=performance_1d,
        performance_7d=performance_1d * WEEK_MULTIPLIER,
    )


def performance_score(index: Dict[str, Any]) -> float:
    """Trending rank: 60% weekly, 40% monthly performance."""
    return 0.6 * (index.get("performance7d") or 0.0) + 0.4 * (index.get("performance30d") or 0.0)


def categorize(name: str) -> str:
    """Explore-page category from the index name."""
    lowered = (name or "").lower()
    if "ai" in lowered or "tech" in lowered:
        return "Technology"
    if "health" in lowered or "medical" in lowered:
        return "Healthcare"
    if "energy" in lowered or "clean" in lowered:
        return "Energy"
    if "ceo" in lowered or "young" in lowered:
        return "Leadership"
    return "Innovation"
