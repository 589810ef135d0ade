from sqlalchemy import JSON, Column, DateTime, String

from talenthub.db.base import Base


class AssessmentScoreRecord(Base):
    __tablename__ = "assessment_scores"

    id = Column(String(64), primary_key=True)

    assessment_id = Column(String(64), nullable=False, index=True)
    candidate_id = Column(String(64), nullable=True, index=True)

    completed_at = Column(DateTime(timezone=True), nullable=True, index=True)

    # Per-question breakdown and section subtotals
    document = Column(JSON, nullable=False)
