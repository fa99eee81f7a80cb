from sqlalchemy import Column, DateTime, Integer, String

from app.core.database import Base, utcnow

ROLES = ("user", "manager", "admin")
STATUSES = ("active", "inactive", "pending")


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)

    # "user" | "manager" | "admin"
    role = Column(String, nullable=False, default="user")
    # "active" | "inactive" | "pending"
    status = Column(String, nullable=False, default="active", index=True)

    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)

    join_date = Column(DateTime, nullable=False, default=utcnow)
    orders = Column(Integer, nullable=False, default=0)

    # login bookkeeping
    last_login = Column(DateTime, nullable=True)
    login_attempts = Column(Integer, nullable=False, default=0)
    lock_until = Column(DateTime, nullable=True)

    def is_locked(self, now) -> bool:
        return self.lock_until is not None and self.lock_until > now
