"""
Index repository - persistence for generated indexes, their stocks and
historical points.

Wraps a SQLAlchemy session so the pipeline and endpoints depend on one
injectable object instead of issuing queries directly. Identity values come
from the database's own sequences; every write commits its own transaction.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any, List

from loguru import logger
from sqlalchemy.orm import Session

from app.models.stock_index import StockIndex
from app.models.stock import Stock
from app.models.historical_data import HistoricalData


class IndexRepository:
    """Read/write access to indexes, stocks and historical data."""

    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    # Indexes
    # ------------------------------------------------------------------

    def create_index(
        self,
        prompt: str,
        name: str,
        description: Optional[str] = None,
        is_public: bool = False,
        total_value: float = 0.0,
        performance_1d: float = 0.0,
        performance_7d: float = 0.0,
        performance_30d: float = 0.0,
        performance_1y: float = 0.0,
        benchmark_sp500: float = 0.0,
        benchmark_nasdaq: float = 0.0,
    ) -> StockIndex:
        record = StockIndex(
            prompt=prompt,
            name=name,
            description=description,
            is_public=is_public,
            total_value=total_value,
            performance_1d=performance_1d,
            performance_7d=performance_7d,
            performance_30d=performance_30d,
            performance_1y=performance_1y,
            benchmark_sp500=benchmark_sp500,
            benchmark_nasdaq=benchmark_nasdaq,
        )
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        logger.info(f"Index {record.id} created: {record.name}")
        return record

    def get_index(self, index_id: int) -> Optional[StockIndex]:
        return self.db.query(StockIndex).filter(StockIndex.id == index_id).first()

    def update_index(self, index_id: int, updates: Dict[str, Any]) -> Optional[StockIndex]:
        """
        Apply a partial update keyed by API field names (``isPublic``,
        ``name``, ``description``). Unknown keys are ignored.
        """
        record = self.get_index(index_id)
        if not record:
            return None

        for field, value in updates.items():
            column = StockIndex.UPDATABLE_FIELDS.get(field)
            if column is None:
                logger.debug(f"Ignoring non-updatable index field: {field}")
                continue
            setattr(record, column, value)

        self.db.commit()
        self.db.refresh(record)
        return record

    def list_indexes(self) -> List[StockIndex]:
        """All indexes, newest first."""
        return (
            self.db.query(StockIndex)
            .order_by(StockIndex.created_at.desc(), StockIndex.id.desc())
            .all()
        )

    # ------------------------------------------------------------------
    # Stocks
    # ------------------------------------------------------------------

    def add_stock(
        self,
        index_id: int,
        symbol: str,
        name: str,
        price: float,
        sector: Optional[str] = None,
        market_cap: Optional[float] = None,
        weight: float = 1.0,
        change_1d: float = 0.0,
        change_percent_1d: float = 0.0,
    ) -> Stock:
        stock = Stock(
            index_id=index_id,
            symbol=symbol,
            name=name,
            price=price,
            sector=sector,
            market_cap=market_cap,
            weight=weight,
            change_1d=change_1d or 0.0,
            change_percent_1d=change_percent_1d or 0.0,
        )
        self.db.add(stock)
        self.db.commit()
        self.db.refresh(stock)
        return stock

    def get_stocks(self, index_id: int) -> List[Stock]:
        return (
            self.db.query(Stock)
            .filter(Stock.index_id == index_id)
            .order_by(Stock.id)
            .all()
        )

    def count_stocks(self) -> int:
        return self.db.query(Stock).count()

    # ------------------------------------------------------------------
    # Historical data
    # ------------------------------------------------------------------

    def add_historical_points(self, index_id: int, points: List[Dict[str, Any]]) -> List[HistoricalData]:
        """Append historical points ({date, value, sp500Value, nasdaqValue})."""
        rows = [
            HistoricalData(
                index_id=index_id,
                date=point["date"],
                value=point["value"],
                sp500_value=point["sp500Value"],
                nasdaq_value=point["nasdaqValue"],
            )
            for point in points
        ]
        self.db.add_all(rows)
        self.db.commit()
        return rows

    def get_historical(self, index_id: int, days: int = 30) -> List[HistoricalData]:
        """Points for an index no older than ``days``, oldest first."""
        cutoff = datetime.now(timezone.utc).replace(tzinfo=None) - timedelta(days=days)
        return (
            self.db.query(HistoricalData)
            .filter(HistoricalData.index_id == index_id)
            .filter(HistoricalData.date >= cutoff)
            .order_by(HistoricalData.date.asc())
            .all()
        )

    # ------------------------------------------------------------------
    # Portfolio
    # ------------------------------------------------------------------

    def portfolio_summary(self) -> Dict[str, Any]:
        """Aggregate totals across every index."""
        indexes = self.db.query(StockIndex).all()

        total_value = sum(idx.total_value for idx in indexes)
        total_change_1d = sum(idx.total_value * idx.performance_1d / 100 for idx in indexes)
        total_change_percent_1d = (total_change_1d / total_value) * 100 if total_value > 0 else 0.0
        avg_performance = (
            sum(idx.performance_1d for idx in indexes) / len(indexes) if indexes else 0.0
        )

        return {
            "totalValue": total_value,
            "totalChange1d": total_change_1d,
            "totalChangePercent1d": total_change_percent_1d,
            "activeIndexes": len(indexes),
            "totalStocks": self.count_stocks(),
            "avgPerformance": avg_performance,
        }
