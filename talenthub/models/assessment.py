from sqlalchemy import JSON, Boolean, Column, DateTime, String

from talenthub.db.base import Base


class AssessmentRecord(Base):
    __tablename__ = "assessments"

    id = Column(String(64), primary_key=True)

    title = Column(String(255), nullable=False, index=True)
    job_id = Column(String(64), nullable=False, index=True)

    is_active = Column(Boolean, default=True, nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, index=True)

    # Sections and questions are stored whole; edits overwrite the document
    document = Column(JSON, nullable=False)
