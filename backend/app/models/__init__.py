"""
SQLAlchemy models
"""
from app.models.stock_index import StockIndex
from app.models.stock import Stock
from app.models.historical_data import HistoricalData

__all__ = [
    "StockIndex",
    "Stock",
    "HistoricalData",
]
