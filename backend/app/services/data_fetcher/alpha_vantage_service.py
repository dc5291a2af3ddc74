"""
Alpha Vantage data fetcher - symbol search and global quote.

API docs: https://www.alphavantage.co/documentation/
"""
from typing import Optional, List, Dict, Any

from loguru import logger

from app.config import get_settings
from app.services.data_fetcher.base import HTTPDataProvider
from app.services.data_fetcher.quotes import SymbolMatch

ALPHA_VANTAGE_BASE = "https://www.alphavantage.co/query"


def _to_float(value: Any) -> Optional[float]:
    if value in (None, ""):
        return None
    try:
        return float(str(value).replace("%", ""))
    except ValueError:
        return None


class AlphaVantageService(HTTPDataProvider):
    """Service for the Alpha Vantage query API."""

    name = "alphavantage"
    key_param = "apikey"

    async def search(self, query: str, limit: int = 20) -> List[SymbolMatch]:
        data = await self._fetch(
            ALPHA_VANTAGE_BASE,
            params={"function": "SYMBOL_SEARCH", "keywords": query},
        )
        if isinstance(data, dict) and ("Note" in data or "Information" in data):
            # Throttle / premium notices come back as 200s
            logger.warning(f"Alpha Vantage notice: {data.get('Note') or data.get('Information')}")
            return []

        matches = (data or {}).get("bestMatches") or []
        return [
            SymbolMatch(
                symbol=item.get("1. symbol"),
                name=item.get("2. name") or item.get("1. symbol"),
                type=(item.get("3. type") or "unknown").lower(),
                region=item.get("4. region") or "Unknown",
                currency=item.get("8. currency") or "USD",
                exchange=item.get("4. region") or "Unknown",
            )
            for item in matches[:limit]
            if item.get("1. symbol")
        ]

    async def get_global_quote(self, symbol: str) -> Optional[Dict[str, Any]]:
        """GLOBAL_QUOTE normalized to the live stock-price shape."""
        data = await self._fetch(
            ALPHA_VANTAGE_BASE,
            params={"function": "GLOBAL_QUOTE", "symbol": symbol},
        )
        quote = (data or {}).get("Global Quote") or {}
        price = _to_float(quote.get("05. price"))
        if not price:
            return None

        return {
            "current_price": price,
            "change": _to_float(quote.get("09. change")),
            "change_percent": _to_float(quote.get("10. change percent")),
            "high": _to_float(quote.get("03. high")),
            "low": _to_float(quote.get("04. low")),
            "open": _to_float(quote.get("02. open")),
            "previous_close": _to_float(quote.get("08. previous close")),
        }


_alpha_vantage_service: Optional[AlphaVantageService] = None


def get_alpha_vantage_service() -> AlphaVantageService:
    global _alpha_vantage_service
    if _alpha_vantage_service is None:
        settings = get_settings()
        _alpha_vantage_service = AlphaVantageService(
            api_key=settings.ALPHA_VANTAGE_API_KEY,
            requests_per_minute=settings.ALPHA_VANTAGE_REQUESTS_PER_MINUTE,
            timeout_seconds=settings.PROVIDER_TIMEOUT_SECONDS,
        )
    return _alpha_vantage_service
