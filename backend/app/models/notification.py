from sqlalchemy import Boolean, Column, DateTime, Integer, String

from app.core.database import Base, utcnow

NOTIFICATION_TYPES = ("success", "warning", "error", "info")


def display_time() -> str:
    return utcnow().strftime("%m/%d/%Y, %I:%M:%S %p")


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)

    # "success" | "warning" | "error" | "info"
    type = Column(String, nullable=False)
    message = Column(String, nullable=False)

    # human-readable, shown as-is by the dashboard
    time = Column(String, nullable=False, default=display_time)
    read = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
