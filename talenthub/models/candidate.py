from sqlalchemy import JSON, Column, DateTime, String

from talenthub.db.base import Base


# =========================
# Candidate
# =========================
class CandidateRecord(Base):
    __tablename__ = "candidates"

    id = Column(String(64), primary_key=True)

    name = Column(String(255), nullable=False, index=True)
    email = Column(String(255), nullable=False, index=True)
    current_stage = Column(String(20), nullable=False, index=True)
    job_id = Column(String(64), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, index=True)

    # Notes, timeline and the rest of the Candidate document
    document = Column(JSON, nullable=False)
