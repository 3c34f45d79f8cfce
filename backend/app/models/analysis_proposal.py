"""Persisted flag recording that a weekly analysis was proposed."""

from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint
from datetime import datetime

from app.database import Base


class AnalysisProposal(Base):
    """Marks (user, ISO week) as already offered a weekly analysis."""

    __tablename__ = "analysis_proposals"
    __table_args__ = (
        UniqueConstraint("user_id", "week_key", name="uq_analysis_proposals_user_week"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(255), nullable=False, index=True)
    week_key = Column(String(10), nullable=False)  # YYYY-MM-DD of the ISO week's Monday
    proposed_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<AnalysisProposal {self.user_id} week of {self.week_key}>"
