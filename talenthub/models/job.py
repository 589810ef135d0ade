from sqlalchemy import JSON, Column, DateTime, Integer, String

from talenthub.db.base import Base


class JobRecord(Base):
    __tablename__ = "jobs"

    id = Column(String(64), primary_key=True)

    title = Column(String(255), nullable=False)
    slug = Column(String(255), index=True)
    status = Column(String(20), nullable=False, index=True)
    order = Column(Integer, nullable=False, default=0, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, index=True)

    # Full Job document (camelCase keys)
    document = Column(JSON, nullable=False)
