"""
Data fetcher services

Includes:
- Polygon (ticker reference, snapshots, ticker search)
- Finnhub (quotes, company profiles, search)
- Alpha Vantage (symbol search, global quotes)
"""
from app.services.data_fetcher.quotes import StockQuote, SymbolMatch
from app.services.data_fetcher.polygon_service import PolygonService, get_polygon_service
from app.services.data_fetcher.finnhub_service import FinnhubService, get_finnhub_service
from app.services.data_fetcher.alpha_vantage_service import (
    AlphaVantageService,
    get_alpha_vantage_service,
)

__all__ = [
    "StockQuote",
    "SymbolMatch",
    "PolygonService",
    "get_polygon_service",
    "FinnhubService",
    "get_finnhub_service",
    "AlphaVantageService",
    "get_alpha_vantage_service",
]
