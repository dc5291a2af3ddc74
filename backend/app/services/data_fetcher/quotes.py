"""
Normalized shapes shared by every stock-data provider.
"""
from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any


@dataclass
class StockQuote:
    """Current quote plus static profile for one symbol."""
    symbol: str
    name: str
    price: float
    sector: Optional[str] = None
    market_cap: Optional[float] = None
    change_1d: float = 0.0
    change_percent_1d: float = 0.0
    source: str = "unknown"  # polygon, finnhub, static, synthetic

    def to_dict(self) -> Dict[str, Any]:
        return {
            "symbol": self.symbol,
            "name": self.name,
            "price": self.price,
            "sector": self.sector,
            "marketCap": self.market_cap,
            "change1d": self.change_1d,
            "changePercent1d": self.change_percent_1d,
        }


@dataclass
class SymbolMatch:
    """One row of a ticker search."""
    symbol: str
    name: str
    type: str = "unknown"
    region: str = "US"
    currency: str = "USD"
    exchange: str = "Unknown"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
