from sqlalchemy import Column, Float, Integer, String

from app.core.database import Base


class Revenue(Base):
    __tablename__ = "revenue"

    id = Column(Integer, primary_key=True, index=True)

    month = Column(String, nullable=False)
    revenue = Column(Float, nullable=False)
