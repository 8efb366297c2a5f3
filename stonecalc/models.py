from sqlalchemy import Column, Integer, String, Float, BigInteger, JSON

from .database import Base


class HistoryEntry(Base):
    """One stored calculation. Rows are inserted and deleted, never updated."""
    __tablename__ = "history_entries"

    id = Column(Integer, primary_key=True, index=True)
    item_id = Column(String, unique=True, nullable=False, index=True)  # opaque token shown to clients
    timestamp = Column(BigInteger, nullable=False, index=True)         # epoch ms
    user_mobile = Column(String, nullable=True, index=True)
    label = Column(String, nullable=True)
    calc_mode = Column(String, nullable=False)
    total_murubba = Column(Float, nullable=False)
    total_price = Column(Float, nullable=False)
    result_json = Column(JSON, nullable=False)  # full CalculationResult, camelCase keys
