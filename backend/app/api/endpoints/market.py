"""
Market endpoints - ticker search, live quotes and benchmark snapshot
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger

from app.services.data_fetcher.price_source import PriceSourceAdapter, get_price_source
from app.services.data_fetcher.search_service import SearchService, get_search_service

router = APIRouter()


@router.get("/search")
async def search_symbols(
    query: Optional[str] = Query(None, description="Company name or ticker fragment"),
    service: SearchService = Depends(get_search_service),
):
    if not query or not query.strip():
        raise HTTPException(status_code=400, detail="Search query is required")

    try:
        return await service.search(query.strip())
    except Exception as e:
        logger.error(f"Search failed for '{query}': {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/stock-price/{symbol}")
async def get_stock_price(symbol: str, service: SearchService = Depends(get_search_service)):
    """Live quote from Finnhub, falling back to Alpha Vantage."""
    try:
        quote = await service.get_live_price(symbol)
    except Exception as e:
        logger.error(f"Stock price lookup failed for {symbol}: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    if not quote:
        raise HTTPException(status_code=404, detail="Stock price not found")
    return quote


@router.get("/market-data")
async def get_market_data(price_source: PriceSourceAdapter = Depends(get_price_source)):
    """S&P 500, NASDAQ, DOW and VIX levels."""
    try:
        return await price_source.get_market_snapshot()
    except Exception as e:
        logger.error(f"Market data fetch failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))
