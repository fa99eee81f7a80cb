from sqlalchemy import Column, DateTime, Integer, String

from app.core.database import Base, utcnow


class Activity(Base):
    __tablename__ = "activities"

    id = Column(Integer, primary_key=True, index=True)

    # free text, e.g. "User Jane Smith updated"
    description = Column(String, nullable=False)

    timestamp = Column(DateTime, nullable=False, default=utcnow, index=True)
