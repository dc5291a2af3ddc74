"""
Tests for universal search and live price lookup.
"""
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.services.data_fetcher.quotes import SymbolMatch
from app.services.data_fetcher.search_service import SearchService


def _provider(name, available=True, **methods):
    provider = MagicMock()
    provider.name = name
    provider.is_available = available
    for method, value in methods.items():
        setattr(provider, method, AsyncMock(return_value=value))
    return provider


@pytest.fixture
def match():
    return SymbolMatch(symbol="IBM", name="International Business Machines", type="equity",
                       region="United States", currency="USD", exchange="United States")


class TestSearch:

    @pytest.mark.asyncio
    async def test_alpha_vantage_first(self, match):
        av = _provider("alphavantage", search=[match])
        finnhub = _provider("finnhub", search=[])
        polygon = _provider("polygon", search=[])

        result = await SearchService(av, finnhub, polygon).search("ibm")

        assert result["success"] is True
        assert result["source"] == "alphavantage"
        assert result["results"][0]["symbol"] == "IBM"
        finnhub.search.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_results_fall_through(self, match):
        av = _provider("alphavantage", search=[])
        finnhub = _provider("finnhub", available=False, search=[match])
        polygon = _provider("polygon", search=[match])

        result = await SearchService(av, finnhub, polygon).search("ibm")

        assert result["source"] == "polygon"
        finnhub.search.assert_not_called()

    @pytest.mark.asyncio
    async def test_nothing_answers(self):
        providers = [_provider(n, available=False) for n in ("alphavantage", "finnhub", "polygon")]

        result = await SearchService(*providers).search("ibm")

        assert result["source"] == "none"
        assert result["results"] == []


class TestLivePrice:

    @pytest.mark.asyncio
    async def test_finnhub_quote(self):
        finnhub = _provider("finnhub", get_quote={"c": 10.0, "d": 1.0, "dp": 11.1, "h": 10.5, "l": 9.0, "o": 9.1, "pc": 9.0})
        av = _provider("alphavantage", get_global_quote=None)

        result = await SearchService(av, finnhub, _provider("polygon")).get_live_price("plug")

        assert result["symbol"] == "PLUG"
        assert result["current_price"] == 10.0
        assert result["previous_close"] == 9.0
        av.get_global_quote.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_alpha_vantage_fallback(self):
        finnhub = _provider("finnhub", get_quote=None)
        av = _provider("alphavantage", get_global_quote={"current_price": 5.0, "change": 0.1})

        result = await SearchService(av, finnhub, _provider("polygon")).get_live_price("abc")

        assert result == {"success": True, "symbol": "ABC", "current_price": 5.0, "change": 0.1}

    @pytest.mark.asyncio
    async def test_none_when_nothing_answers(self):
        finnhub = _provider("finnhub", get_quote=None)
        av = _provider("alphavantage", get_global_quote=None)

        assert await SearchService(av, finnhub, _provider("polygon")).get_live_price("abc") is None
