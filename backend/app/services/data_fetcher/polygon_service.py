"""
Polygon.io data fetcher.

Used as the first tier for quotes (ticker reference + live snapshot) and for
company-name → ticker search.

API docs: https://polygon.io/docs/stocks
"""
from typing import Optional, List, Dict, Any

from loguru import logger

from app.config import get_settings
from app.services.data_fetcher.base import HTTPDataProvider
from app.services.data_fetcher.quotes import StockQuote, SymbolMatch

POLYGON_BASE = "https://api.polygon.io"


class PolygonService(HTTPDataProvider):
    """Service for fetching data from the Polygon.io REST API."""

    name = "polygon"
    key_param = "apiKey"

    async def get_stock_data(self, symbol: str) -> Optional[StockQuote]:
        """
        Reference data + snapshot for one ticker.

        Returns None when either call fails or the snapshot carries no price.
        """
        if not self.is_available:
            return None

        reference = await self._fetch(f"{POLYGON_BASE}/v3/reference/tickers/{symbol}")
        if not reference:
            return None

        snapshot = await self._fetch(
            f"{POLYGON_BASE}/v2/snapshot/locale/us/markets/stocks/tickers/{symbol}"
        )
        if not snapshot:
            return None

        details = reference.get("results") or {}
        ticker = snapshot.get("ticker") or snapshot.get("results") or {}
        day = ticker.get("day") or {}

        price = (
            ticker.get("value")
            or day.get("c")
            or (ticker.get("lastTrade") or {}).get("p")
            or (ticker.get("prevDay") or {}).get("c")
        )
        if not price:
            logger.debug(f"Polygon snapshot for {symbol} has no price")
            return None

        day_open = day.get("o")
        day_close = day.get("c")
        if ticker.get("todaysChange") is not None:
            change = ticker.get("todaysChange") or 0.0
            change_percent = ticker.get("todaysChangePerc") or 0.0
        elif day_open and day_close:
            change = day_close - day_open
            change_percent = change / day_open * 100
        else:
            change, change_percent = 0.0, 0.0

        return StockQuote(
            symbol=symbol,
            name=details.get("name") or symbol,
            price=float(price),
            sector=details.get("sic_description"),
            market_cap=details.get("market_cap"),
            change_1d=float(change),
            change_percent_1d=float(change_percent),
            source=self.name,
        )

    async def search(self, query: str, limit: int = 20) -> List[SymbolMatch]:
        """Active tickers whose name or symbol matches ``query``."""
        data = await self._fetch(
            f"{POLYGON_BASE}/v3/reference/tickers",
            params={"search": query, "active": "true", "limit": limit},
        )
        results: List[Dict[str, Any]] = (data or {}).get("results") or []
        return [
            SymbolMatch(
                symbol=item.get("ticker"),
                name=item.get("name") or item.get("ticker"),
                type=(item.get("type") or "unknown").lower(),
                region=(item.get("locale") or "us").upper(),
                currency=(item.get("currency_name") or "usd").upper(),
                exchange=item.get("primary_exchange") or "Unknown",
            )
            for item in results
            if item.get("ticker")
        ]


_polygon_service: Optional[PolygonService] = None


def get_polygon_service() -> PolygonService:
    global _polygon_service
    if _polygon_service is None:
        settings = get_settings()
        _polygon_service = PolygonService(
            api_key=settings.POLYGON_API_KEY,
            requests_per_minute=settings.POLYGON_REQUESTS_PER_MINUTE,
            timeout_seconds=settings.PROVIDER_TIMEOUT_SECONDS,
        )
    return _polygon_service
