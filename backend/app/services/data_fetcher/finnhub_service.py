"""
Finnhub data fetcher.

Second tier for quotes (quote + company profile), second source for
universal search and first source for the live stock-price endpoint.

API docs: https://finnhub.io/docs/api
"""
from typing import Optional, List, Dict, Any

from loguru import logger

from app.config import get_settings
from app.services.data_fetcher.base import HTTPDataProvider
from app.services.data_fetcher.quotes import StockQuote, SymbolMatch

FINNHUB_BASE = "https://finnhub.io/api/v1"


class FinnhubService(HTTPDataProvider):
    """Service for fetching data from the Finnhub REST API."""

    name = "finnhub"
    key_param = "token"

    async def get_quote(self, symbol: str) -> Optional[Dict[str, Any]]:
        """
        Raw quote: c (current), d (change), dp (change %), h, l, o, pc.

        Finnhub answers 200 with c == 0 for unknown symbols, so that is
        reported as None too.
        """
        data = await self._fetch(f"{FINNHUB_BASE}/quote", params={"symbol": symbol})
        if not data or not data.get("c"):
            return None
        return data

    async def get_profile(self, symbol: str) -> Dict[str, Any]:
        data = await self._fetch(f"{FINNHUB_BASE}/stock/profile2", params={"symbol": symbol})
        return data if isinstance(data, dict) else {}

    async def get_stock_data(self, symbol: str) -> Optional[StockQuote]:
        if not self.is_available:
            return None

        quote = await self.get_quote(symbol)
        if not quote:
            return None

        # Profile is best-effort: only the optional fields depend on it
        profile = await self.get_profile(symbol)
        market_cap = profile.get("marketCapitalization")
        if market_cap:
            # Finnhub reports market cap in millions
            market_cap = float(market_cap) * 1e6

        return StockQuote(
            symbol=symbol,
            name=profile.get("name") or symbol,
            price=float(quote["c"]),
            sector=profile.get("finnhubIndustry"),
            market_cap=market_cap,
            change_1d=float(quote.get("d") or 0.0),
            change_percent_1d=float(quote.get("dp") or 0.0),
            source=self.name,
        )

    async def search(self, query: str, limit: int = 20) -> List[SymbolMatch]:
        data = await self._fetch(f"{FINNHUB_BASE}/search", params={"q": query})
        results = (data or {}).get("result") or []
        if results:
            logger.debug(f"Finnhub search '{query}': {len(results)} results")
        return [
            SymbolMatch(
                symbol=item.get("symbol"),
                name=item.get("description") or item.get("symbol"),
                type=(item.get("type") or "unknown").lower(),
                region=item.get("country") or "US",
                currency=item.get("currency") or "USD",
                exchange=item.get("exchange") or "Unknown",
            )
            for item in results[:limit]
            if item.get("symbol")
        ]


_finnhub_service: Optional[FinnhubService] = None


def get_finnhub_service() -> FinnhubService:
    global _finnhub_service
    if _finnhub_service is None:
        settings = get_settings()
        _finnhub_service = FinnhubService(
            api_key=settings.FINNHUB_API_KEY,
            requests_per_minute=settings.FINNHUB_REQUESTS_PER_MINUTE,
            timeout_seconds=settings.PROVIDER_TIMEOUT_SECONDS,
        )
    return _finnhub_service
