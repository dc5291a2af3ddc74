"""
Tests for Polygon / Finnhub / Alpha Vantage response normalization.
HTTP is mocked at HTTPDataProvider._fetch.
"""
from unittest.mock import AsyncMock

import pytest

from app.services.data_fetcher.alpha_vantage_service import AlphaVantageService
from app.services.data_fetcher.finnhub_service import FinnhubService
from app.services.data_fetcher.polygon_service import PolygonService


def _polygon():
    return PolygonService(api_key="k", requests_per_minute=5, timeout_seconds=1)


def _finnhub():
    return FinnhubService(api_key="k", requests_per_minute=60, timeout_seconds=1)


class TestHTTPDataProvider:

    @pytest.mark.asyncio
    async def test_no_key_returns_none(self):
        service = PolygonService(api_key="", requests_per_minute=5, timeout_seconds=1)
        assert service.is_available is False
        assert await service._fetch("https://example.invalid") is None

    @pytest.mark.asyncio
    async def test_exhausted_window_returns_none_without_request(self):
        service = _polygon()
        service._get_session = AsyncMock()
        for _ in range(5):
            service.rate_limiter.try_acquire()

        assert await service._fetch("https://example.invalid") is None
        service._get_session.assert_not_awaited()


class TestPolygon:

    @pytest.mark.asyncio
    async def test_reference_plus_snapshot(self):
        service = _polygon()
        service._fetch = AsyncMock(side_effect=[
            {"results": {"name": "NVIDIA Corp", "sic_description": "Semiconductors", "market_cap": 3.0e12}},
            {"ticker": {"day": {"o": 100.0, "c": 110.0}}},
        ])

        quote = await service.get_stock_data("NVDA")

        assert quote.price == 110.0
        assert quote.name == "NVIDIA Corp"
        assert quote.sector == "Semiconductors"
        assert quote.change_1d == pytest.approx(10.0)
        assert quote.change_percent_1d == pytest.approx(10.0)
        assert quote.source == "polygon"

    @pytest.mark.asyncio
    async def test_missing_price_is_failure(self):
        service = _polygon()
        service._fetch = AsyncMock(side_effect=[{"results": {"name": "X"}}, {"ticker": {"day": {}}}])

        assert await service.get_stock_data("X") is None

    @pytest.mark.asyncio
    async def test_failed_reference_is_failure(self):
        service = _polygon()
        service._fetch = AsyncMock(return_value=None)

        assert await service.get_stock_data("X") is None
        assert service._fetch.await_count == 1

    @pytest.mark.asyncio
    async def test_search(self):
        service = _polygon()
        service._fetch = AsyncMock(return_value={"results": [
            {"ticker": "TSLA", "name": "Tesla, Inc.", "type": "CS", "locale": "us",
             "currency_name": "usd", "primary_exchange": "XNAS"},
            {"name": "no ticker"},
        ]})

        results = await service.search("tesla", limit=5)

        assert [r.symbol for r in results] == ["TSLA"]
        assert results[0].to_dict() == {
            "symbol": "TSLA", "name": "Tesla, Inc.", "type": "cs",
            "region": "US", "currency": "USD", "exchange": "XNAS",
        }


class TestFinnhub:

    @pytest.mark.asyncio
    async def test_quote_plus_profile(self):
        service = _finnhub()
        service._fetch = AsyncMock(side_effect=[
            {"c": 250.0, "d": -5.0, "dp": -1.96, "h": 255, "l": 245, "o": 254, "pc": 255},
            {"name": "Tesla Inc", "finnhubIndustry": "Automobiles", "marketCapitalization": 800000},
        ])

        quote = await service.get_stock_data("TSLA")

        assert quote.price == 250.0
        assert quote.change_percent_1d == -1.96
        assert quote.market_cap == 800000 * 1e6
        assert quote.sector == "Automobiles"

    @pytest.mark.asyncio
    async def test_zero_price_is_failure(self):
        service = _finnhub()
        service._fetch = AsyncMock(return_value={"c": 0, "d": None, "dp": None})

        assert await service.get_stock_data("NOPE") is None

    @pytest.mark.asyncio
    async def test_failed_profile_keeps_quote(self):
        service = _finnhub()
        service._fetch = AsyncMock(side_effect=[{"c": 12.5, "d": 0.5, "dp": 4.0}, None])

        quote = await service.get_stock_data("PLUG")

        assert quote.price == 12.5
        assert quote.name == "PLUG"
        assert quote.sector is None
        assert quote.market_cap is None


class TestAlphaVantage:

    @pytest.mark.asyncio
    async def test_global_quote(self):
        service = AlphaVantageService(api_key="k", requests_per_minute=5, timeout_seconds=1)
        service._fetch = AsyncMock(return_value={"Global Quote": {
            "02. open": "100.0", "03. high": "105.0", "04. low": "99.0", "05. price": "104.0",
            "08. previous close": "100.0", "09. change": "4.0", "10. change percent": "4.0000%",
        }})

        quote = await service.get_global_quote("IBM")

        assert quote == {
            "current_price": 104.0, "change": 4.0, "change_percent": 4.0,
            "high": 105.0, "low": 99.0, "open": 100.0, "previous_close": 100.0,
        }

    @pytest.mark.asyncio
    async def test_rate_limit_note_gives_no_results(self):
        service = AlphaVantageService(api_key="k", requests_per_minute=5, timeout_seconds=1)
        service._fetch = AsyncMock(return_value={"Note": "Thank you for using Alpha Vantage!"})

        assert await service.search("ibm") == []
