"""
Price source adapter - one quote per symbol, whatever it takes.

Tiers, first usable answer wins:
  1. Polygon (ticker reference + snapshot)
  2. Finnhub (quote + profile)
  3. Static table / synthetic record (never fails)

Providers without an API key are skipped silently. The adapter never raises
to its caller.
"""
import asyncio
import random
from typing import Optional, List, Dict, Any, Sequence

from loguru import logger

from app.data.fallback_prices import synthesize_quote
from app.services.data_fetcher.quotes import StockQuote
from app.services.data_fetcher.polygon_service import get_polygon_service
from app.services.data_fetcher.finnhub_service import get_finnhub_service

# Benchmark proxies and their levels when nothing answers
SP500_PROXY = "SPY"
NASDAQ_PROXY = "QQQ"
DOW_PROXY = "DIA"
VIX_SYMBOL = "^VIX"

DEFAULT_BENCHMARKS = {"sp500": 500.0, "nasdaq": 400.0}
DEFAULT_MARKET_LEVELS = {"sp500": 500.0, "nasdaq": 400.0, "dow": 35000.0, "vix": 20.0}


class PriceSourceAdapter:
    """Normalizes quotes from an ordered list of providers."""

    def __init__(self, providers: Optional[Sequence[Any]] = None, rng: Optional[random.Random] = None):
        if providers is None:
            providers = [get_polygon_service(), get_finnhub_service()]
        self.providers = list(providers)
        self.rng = rng

    async def _from_providers(self, symbol: str) -> Optional[StockQuote]:
        for provider in self.providers:
            if not provider.is_available:
                continue
            try:
                quote = await provider.get_stock_data(symbol)
            except Exception as e:
                logger.warning(f"{provider.name} failed for {symbol}: {e}")
                continue
            if quote and quote.price:
                return quote
            logger.debug(f"{provider.name} had no price for {symbol}")
        return None

    async def get_stock_data(self, symbol: str) -> StockQuote:
        """Quote for one symbol; falls back to static data, never raises."""
        quote = await self._from_providers(symbol)
        if quote:
            return quote

        logger.info(f"No provider quote for {symbol}, using static fallback")
        return synthesize_quote(symbol, self.rng)

    async def get_many(self, symbols: List[str]) -> List[StockQuote]:
        """Quotes for every symbol, fetched concurrently, returned in input order."""
        return list(await asyncio.gather(*(self.get_stock_data(s) for s in symbols)))

    async def get_benchmarks(self) -> Dict[str, float]:
        """S&P 500 / NASDAQ levels via their ETF proxies."""
        sp500, nasdaq = await asyncio.gather(
            self._from_providers(SP500_PROXY),
            self._from_providers(NASDAQ_PROXY),
        )
        return {
            "sp500": sp500.price if sp500 else DEFAULT_BENCHMARKS["sp500"],
            "nasdaq": nasdaq.price if nasdaq else DEFAULT_BENCHMARKS["nasdaq"],
        }

    async def get_market_snapshot(self) -> Dict[str, Dict[str, Any]]:
        """Current S&P 500 / NASDAQ / DOW / VIX levels."""
        labels = {
            "sp500": ("S&P 500", SP500_PROXY),
            "nasdaq": ("NASDAQ", NASDAQ_PROXY),
            "dow": ("DOW", DOW_PROXY),
            "vix": ("VIX", VIX_SYMBOL),
        }
        quotes = await asyncio.gather(
            *(self._from_providers(proxy) for _, proxy in labels.values())
        )

        snapshot = {}
        for (key, (label, _)), quote in zip(labels.items(), quotes):
            snapshot[key] = {
                "symbol": label,
                "value": quote.price if quote else DEFAULT_MARKET_LEVELS[key],
                "change1d": quote.change_1d if quote else 0.0,
                "changePercent1d": quote.change_percent_1d if quote else 0.0,
            }
        return snapshot


_price_source: Optional[PriceSourceAdapter] = None


def get_price_source() -> PriceSourceAdapter:
    global _price_source
    if _price_source is None:
        _price_source = PriceSourceAdapter()
    return _price_source
