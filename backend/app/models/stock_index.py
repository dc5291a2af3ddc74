"""
Stock index model - one generated basket of stocks per prompt.
"""
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, Float, String, Text, Boolean, DateTime
from sqlalchemy.orm import relationship

from app.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class StockIndex(Base):
    __tablename__ = "indexes"

    id = Column(Integer, primary_key=True, index=True)
    prompt = Column(Text, nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    is_public = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False, index=True)

    # ── Valuation at creation ────────────────────────────────────────────
    total_value = Column(Float, default=0.0, nullable=False)        # sum of constituent prices
    performance_1d = Column(Float, default=0.0, nullable=False)     # percentages, unbounded
    performance_7d = Column(Float, default=0.0, nullable=False)
    performance_30d = Column(Float, default=0.0, nullable=False)
    performance_1y = Column(Float, default=0.0, nullable=False)
    benchmark_sp500 = Column(Float, default=0.0, nullable=False)    # SPY level
    benchmark_nasdaq = Column(Float, default=0.0, nullable=False)   # QQQ level

    # Relationships
    stocks = relationship("Stock", back_populates="index", order_by="Stock.id")
    historical_data = relationship("HistoricalData", back_populates="index")

    # Fields a client may change through a partial update
    UPDATABLE_FIELDS = {
        "name": "name",
        "description": "description",
        "isPublic": "is_public",
    }

    def __repr__(self):
        return f"<StockIndex(id={self.id}, name='{self.name}')>"

    def to_dict(self) -> dict:
        """Serialise for API responses."""
        return {
            "id": self.id,
            "prompt": self.prompt,
            "name": self.name,
            "description": self.description,
            "isPublic": self.is_public,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "totalValue": self.total_value,
            "performance1d": self.performance_1d,
            "performance7d": self.performance_7d,
            "performance30d": self.performance_30d,
            "performance1y": self.performance_1y,
            "benchmarkSp500": self.benchmark_sp500,
            "benchmarkNasdaq": self.benchmark_nasdaq,
        }
