# backend/app/schemas.py

from datetime import datetime, timezone
from typing import Annotated, Literal, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

Role = Literal["user", "manager", "admin"]
UserStatus = Literal["active", "inactive", "pending"]
NotificationType = Literal["success", "warning", "error", "info"]


def _as_utc(value: datetime) -> datetime:
    # stored naive, always UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UTCDateTime = Annotated[datetime, AfterValidator(_as_utc)]


class APIModel(BaseModel):
    # camelCase on the wire, snake_case in Python
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ---------- USERS ----------

class UserOut(APIModel):
    """Public view of a user; never carries the password hash."""

    id: int
    name: str
    email: str
    role: Role
    status: UserStatus
    phone: Optional[str] = None
    address: Optional[str] = None
    join_date: UTCDateTime
    orders: int = 0
    last_login: Optional[UTCDateTime] = None


class UserCreate(APIModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: Optional[str] = Field(default=None, min_length=6)
    role: Role = "user"
    status: UserStatus = "active"
    phone: Optional[str] = None
    address: Optional[str] = None
    orders: int = Field(default=0, ge=0)


class UserUpdate(APIModel):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=6)
    role: Optional[Role] = None
    status: Optional[UserStatus] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    orders: Optional[int] = Field(default=None, ge=0)


# ---------- NOTIFICATIONS ----------

class NotificationOut(APIModel):
    id: int
    type: NotificationType
    message: str
    time: str
    read: bool = False


class NotificationCreate(APIModel):
    type: NotificationType
    message: str = Field(min_length=1)


# ---------- ACTIVITY / REVENUE / STATS ----------

class ActivityOut(APIModel):
    id: int
    description: str
    timestamp: UTCDateTime


class RevenueOut(APIModel):
    id: int
    month: str
    revenue: float


class StatsOut(APIModel):
    total_users: int = 0
    active_users: int = 0
    total_orders: int = 0
    total_revenue: float = 0


class MessageOut(APIModel):
    message: str


class HealthOut(APIModel):
    status: str
    database: Literal["connected", "disconnected"]
    timestamp: UTCDateTime
