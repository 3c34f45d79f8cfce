"""Daily record model for self-reported fatigue."""

from sqlalchemy import Column, Integer, String, Date, DateTime, Text, UniqueConstraint
from datetime import datetime

from app.database import Base


class Record(Base):
    """One user's self-reported state for one calendar day."""

    __tablename__ = "records"
    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_records_user_id_date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(255), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)

    fatigue = Column(Integer, nullable=False)  # 1-5 by default, see Settings.fatigue_*
    notes = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Record {self.user_id} {self.date} - Fatigue:{self.fatigue}>"
