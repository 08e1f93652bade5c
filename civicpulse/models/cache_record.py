"""Cache record database model."""

from datetime import datetime

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from civicpulse.database import Base


class CacheRecord(Base):
    """One key-value pair of the local result cache.

    The value is the JSON envelope written by LocalResultCache; expiry is
    decided from the envelope, not from updated_at.
    """

    __tablename__ = "cache_records"

    key: Mapped[str] = mapped_column(String(512), primary_key=True)
    value: Mapped[str] = mapped_column(Text)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )
