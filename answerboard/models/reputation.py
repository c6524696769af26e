"""
ReputationRecord model backing SqlReputationLedger.
"""
from sqlalchemy import Column, String, Integer, DateTime, func
from ..db import Base


class ReputationRecord(Base):
    __tablename__ = "reputation_records"

    category = Column(String(15), primary_key=True, nullable=False)
    user_id = Column(String(64), primary_key=True, nullable=False, index=True)  # opaque to the ledger
    score = Column(Integer, nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
