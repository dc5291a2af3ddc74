"""
Static reference prices used when no stock-data provider answers.

Levels are representative snapshots for well-known tickers, not live data.
Daily changes are drawn at lookup time so repeated generations still move.
"""
import random
from typing import Dict, Any, Optional

from app.services.data_fetcher.quotes import StockQuote

# symbol → price / name / sector / market cap (USD)
STATIC_STOCK_PRICES: Dict[str, Dict[str, Any]] = {
    # Mega Cap Tech
    "AAPL": {"price": 189.50, "name": "Apple Inc.", "sector": "Technology", "market_cap": 2.97e12},
    "MSFT": {"price": 415.20, "name": "Microsoft Corporation", "sector": "Technology", "market_cap": 3.08e12},
    "GOOGL": {"price": 152.30, "name": "Alphabet Inc.", "sector": "Technology", "market_cap": 1.91e12},
    "AMZN": {"price": 155.80, "name": "Amazon.com Inc.", "sector": "Consumer Discretionary", "market_cap": 1.61e12},
    "NVDA": {"price": 498.70, "name": "NVIDIA Corporation", "sector": "Technology", "market_cap": 1.22e12},
    "TSLA": {"price": 248.40, "name": "Tesla Inc.", "sector": "Consumer Discretionary", "market_cap": 789e9},
    "META": {"price": 504.20, "name": "Meta Platforms Inc.", "sector": "Communication Services", "market_cap": 1.28e12},
    "NFLX": {"price": 487.30, "name": "Netflix Inc.", "sector": "Communication Services", "market_cap": 210e9},
    "PLTR": {"price": 38.20, "name": "Palantir Technologies Inc.", "sector": "Technology", "market_cap": 82e9},
    "AMD": {"price": 123.60, "name": "Advanced Micro Devices Inc.", "sector": "Technology", "market_cap": 199e9},

    # Healthcare
    "UNH": {"price": 590.40, "name": "UnitedHealth Group Inc.", "sector": "Healthcare", "market_cap": 554e9},
    "JNJ": {"price": 162.80, "name": "Johnson & Johnson", "sector": "Healthcare", "market_cap": 426e9},
    "PFE": {"price": 28.90, "name": "Pfizer Inc.", "sector": "Healthcare", "market_cap": 163e9},
    "MRK": {"price": 100.20, "name": "Merck & Co. Inc.", "sector": "Healthcare", "market_cap": 254e9},
    "ABT": {"price": 113.40, "name": "Abbott Laboratories", "sector": "Healthcare", "market_cap": 198e9},
    "DXCM": {"price": 78.60, "name": "DexCom Inc.", "sector": "Healthcare", "market_cap": 30e9},
    "TDOC": {"price": 12.50, "name": "Teladoc Health Inc.", "sector": "Healthcare", "market_cap": 2e9},
    "VEEV": {"price": 214.70, "name": "Veeva Systems Inc.", "sector": "Healthcare", "market_cap": 33e9},

    # Clean Energy
    "NEE": {"price": 75.40, "name": "NextEra Energy Inc.", "sector": "Utilities", "market_cap": 154e9},
    "FSLR": {"price": 185.20, "name": "First Solar Inc.", "sector": "Energy", "market_cap": 19.8e9},
    "ENPH": {"price": 92.50, "name": "Enphase Energy Inc.", "sector": "Energy", "market_cap": 12.8e9},
    "PLUG": {"price": 3.15, "name": "Plug Power Inc.", "sector": "Energy", "market_cap": 1.8e9},
    "BEP": {"price": 28.90, "name": "Brookfield Renewable Partners", "sector": "Utilities", "market_cap": 18.2e9},
    "ALB": {"price": 88.75, "name": "Albemarle Corporation", "sector": "Materials", "market_cap": 10.4e9},
}

KNOWN_CHANGE_RANGE = 10.0     # ±5% for table symbols
UNKNOWN_CHANGE_RANGE = 8.0    # ±4% for anything else
UNKNOWN_PRICE_MIN = 50.0
UNKNOWN_PRICE_SPAN = 200.0    # → [$50, $250]


def synthesize_quote(symbol: str, rng: Optional[random.Random] = None) -> StockQuote:
    """
    Build a usable quote without any provider.

    Table symbols keep their static price/name/sector/market cap; anything
    else gets a generic Technology record with a random price.
    """
    rng = rng or random
    info = STATIC_STOCK_PRICES.get(symbol)

    if info:
        change_percent = (rng.random() - 0.5) * KNOWN_CHANGE_RANGE
        return StockQuote(
            symbol=symbol,
            name=info["name"],
            price=info["price"],
            sector=info["sector"],
            market_cap=info["market_cap"],
            change_1d=info["price"] * (change_percent / 100),
            change_percent_1d=change_percent,
            source="static",
        )

    price = UNKNOWN_PRICE_MIN + rng.random() * UNKNOWN_PRICE_SPAN
    change_percent = (rng.random() - 0.5) * UNKNOWN_CHANGE_RANGE
    return StockQuote(
        symbol=symbol,
        name=f"{symbol} Corporation",
        price=price,
        sector="Technology",
        market_cap=price * 1e9,
        change_1d=price * (change_percent / 100),
        change_percent_1d=change_percent,
        source="synthetic",
    )
