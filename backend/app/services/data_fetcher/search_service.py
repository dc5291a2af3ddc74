"""
Universal ticker search and live stock price lookup.

Search tries Alpha Vantage, then Finnhub, then Polygon; the first provider
with results answers. Live prices come from Finnhub, then Alpha Vantage.
"""
from typing import Optional, Dict, Any

from loguru import logger

from app.services.data_fetcher.alpha_vantage_service import get_alpha_vantage_service
from app.services.data_fetcher.finnhub_service import get_finnhub_service
from app.services.data_fetcher.polygon_service import get_polygon_service


class SearchService:
    def __init__(self, alpha_vantage=None, finnhub=None, polygon=None):
        self.alpha_vantage = alpha_vantage or get_alpha_vantage_service()
        self.finnhub = finnhub or get_finnhub_service()
        self.polygon = polygon or get_polygon_service()

    async def search(self, query: str) -> Dict[str, Any]:
        for provider in (self.alpha_vantage, self.finnhub, self.polygon):
            if not provider.is_available:
                continue
            try:
                matches = await provider.search(query)
            except Exception as e:
                logger.warning(f"{provider.name} search failed for '{query}': {e}")
                continue
            if matches:
                logger.info(f"Found {len(matches)} results for '{query}' from {provider.name}")
                return {
                    "success": True,
                    "source": provider.name,
                    "results": [m.to_dict() for m in matches],
                }

        logger.info(f"No search results for '{query}' from any provider")
        return {
            "success": True,
            "source": "none",
            "results": [],
            "message": "No results found. Please try a different search term.",
        }

    async def get_live_price(self, symbol: str) -> Optional[Dict[str, Any]]:
        """Live quote for the stock-price endpoint, or None when nothing answers."""
        symbol = symbol.upper()

        if self.finnhub.is_available:
            quote = await self.finnhub.get_quote(symbol)
            if quote:
                return {
                    "success": True,
                    "symbol": symbol,
                    "current_price": quote.get("c"),
                    "change": quote.get("d"),
                    "change_percent": quote.get("dp"),
                    "high": quote.get("h"),
                    "low": quote.get("l"),
                    "open": quote.get("o"),
                    "previous_close": quote.get("pc"),
                }

        if self.alpha_vantage.is_available:
            quote = await self.alpha_vantage.get_global_quote(symbol)
            if quote:
                return {"success": True, "symbol": symbol, **quote}

        return None


_search_service: Optional[SearchService] = None


def get_search_service() -> SearchService:
    global _search_service
    if _search_service is None:
        _search_service = SearchService()
    return _search_service
