"""
Tests for static/synthetic quote synthesis.
"""
import random

from app.data.fallback_prices import STATIC_STOCK_PRICES, synthesize_quote


class TestKnownSymbols:

    def test_static_fields_are_exact(self):
        quote = synthesize_quote("AAPL", random.Random(1))
        info = STATIC_STOCK_PRICES["AAPL"]
        assert quote.price == info["price"]
        assert quote.name == info["name"]
        assert quote.sector == info["sector"]
        assert quote.market_cap == info["market_cap"]
        assert quote.source == "static"

    def test_change_percent_within_five(self):
        rng = random.Random(7)
        for _ in range(200):
            quote = synthesize_quote("NEE", rng)
            assert -5.0 <= quote.change_percent_1d <= 5.0
            assert abs(quote.change_1d - quote.price * quote.change_percent_1d / 100) < 1e-9

    def test_table_has_24_symbols(self):
        assert len(STATIC_STOCK_PRICES) == 24


class TestUnknownSymbols:

    def test_synthetic_record(self):
        rng = random.Random(3)
        for _ in range(200):
            quote = synthesize_quote("ZZZZ", rng)
            assert 50.0 <= quote.price <= 250.0
            assert -4.0 <= quote.change_percent_1d <= 4.0
            assert quote.name == "ZZZZ Corporation"
            assert quote.sector == "Technology"
            assert quote.market_cap == quote.price * 1e9
            assert quote.source == "synthetic"

    def test_seeded_rng_is_reproducible(self):
        a = synthesize_quote("QQQQ", random.Random(99))
        b = synthesize_quote("QQQQ", random.Random(99))
        assert a == b
