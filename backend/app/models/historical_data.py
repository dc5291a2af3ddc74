"""
Historical data model - daily index value alongside benchmark levels
"""
from sqlalchemy import Column, Integer, Float, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from app.database import Base


class HistoricalData(Base):
    __tablename__ = "historical_data"

    id = Column(Integer, primary_key=True, index=True)
    index_id = Column(Integer, ForeignKey("indexes.id"), nullable=False)
    date = Column(DateTime, nullable=False)
    value = Column(Float, nullable=False)
    sp500_value = Column(Float, nullable=False)
    nasdaq_value = Column(Float, nullable=False)

    # Relationship
    index = relationship("StockIndex", back_populates="historical_data")

    __table_args__ = (
        Index('idx_historical_index_date', 'index_id', 'date'),
    )

    def __repr__(self):
        return f"<HistoricalData(index_id={self.index_id}, date={self.date}, value={self.value})>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "indexId": self.index_id,
            "date": self.date.isoformat() if self.date else None,
            "value": self.value,
            "sp500Value": self.sp500_value,
            "nasdaqValue": self.nasdaq_value,
        }
