"""
Company name → ticker symbol resolution.
"""
from typing import Optional, Sequence, Any, List

from loguru import logger

from app.services.data_fetcher.quotes import SymbolMatch
from app.services.data_fetcher.polygon_service import get_polygon_service
from app.services.data_fetcher.finnhub_service import get_finnhub_service

SEARCH_LIMIT = 5


def pick_best_match(company_name: str, results: List[SymbolMatch]) -> Optional[str]:
    """
    Prefer a result whose name contains the query (or is contained by it),
    case-insensitively; otherwise the first result.
    """
    if not results:
        return None

    query = company_name.lower()
    for result in results:
        name = (result.name or "").lower()
        if name and (query in name or name in query):
            return result.symbol
    return results[0].symbol


class SymbolResolver:
    """Best-effort ticker lookup; one search call to the first configured provider."""

    def __init__(self, providers: Optional[Sequence[Any]] = None):
        if providers is None:
            providers = [get_polygon_service(), get_finnhub_service()]
        self.providers = list(providers)

    async def resolve(self, company_name: str) -> Optional[str]:
        provider = next((p for p in self.providers if p.is_available), None)
        if provider is None:
            return None

        try:
            results = await provider.search(company_name, limit=SEARCH_LIMIT)
        except Exception as e:
            logger.warning(f"Symbol search failed for '{company_name}': {e}")
            return None

        symbol = pick_best_match(company_name, results)
        if symbol:
            logger.debug(f"Resolved '{company_name}' → {symbol} via {provider.name}")
        return symbol


_symbol_resolver: Optional[SymbolResolver] = None


def get_symbol_resolver() -> SymbolResolver:
    global _symbol_resolver
    if _symbol_resolver is None:
        _symbol_resolver = SymbolResolver()
    return _symbol_resolver
