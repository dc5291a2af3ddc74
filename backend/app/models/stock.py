"""
Stock model - one constituent of a generated index
"""
from sqlalchemy import Column, Integer, Float, String, ForeignKey
from sqlalchemy.orm import relationship

from app.database import Base


class Stock(Base):
    __tablename__ = "stocks"

    id = Column(Integer, primary_key=True, index=True)
    index_id = Column(Integer, ForeignKey("indexes.id"), nullable=False, index=True)
    symbol = Column(String(64), nullable=False)
    name = Column(String(255), nullable=False)
    price = Column(Float, nullable=False)
    sector = Column(String(100))
    market_cap = Column(Float)
    weight = Column(Float, default=1.0, nullable=False)  # equal weighting, not renormalized
    change_1d = Column(Float, default=0.0, nullable=False)
    change_percent_1d = Column(Float, default=0.0, nullable=False)

    # Relationship
    index = relationship("StockIndex", back_populates="stocks")

    def __repr__(self):
        return f"<Stock(symbol='{self.symbol}', index_id={self.index_id})>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "indexId": self.index_id,
            "symbol": self.symbol,
            "name": self.name,
            "price": self.price,
            "sector": self.sector,
            "marketCap": self.market_cap,
            "weight": self.weight,
            "change1d": self.change_1d,
            "changePercent1d": self.change_percent_1d,
        }
