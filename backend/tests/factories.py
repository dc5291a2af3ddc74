"""
Factories and fakes shared across test modules.
"""
from app.services.data_fetcher.quotes import StockQuote


class RecordingPublisher:
    """EventPublisher that keeps every published event."""

    def __init__(self):
        self.events = []

    def publish(self, event):
        self.events.append(event)

    def of_type(self, event_type):
        return [e for e in self.events if e["type"] == event_type]


def make_quote(**overrides) -> StockQuote:
    """StockQuote with safe defaults."""
    defaults = dict(
        symbol="AAPL",
        name="Apple Inc.",
        price=100.0,
        sector="Technology",
        market_cap=1e12,
        change_1d=1.0,
        change_percent_1d=1.0,
        source="test",
    )
    defaults.update(overrides)
    return StockQuote(**defaults)
