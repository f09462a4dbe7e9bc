from sqlalchemy import Column, String, Text, DateTime
from datetime import datetime
from .database import Base


class StorageItem(Base):
    """
    One slot of the local key-value store.

    Mirrors a browser's localStorage: string keys, string values, whole-value
    reads and writes. Saved projects live together under a single key.
    """
    __tablename__ = "storage_items"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
