# backend/app/api/routes.py

from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from sqlalchemy.orm import Session

from app.api.deps_auth import (
    get_broadcaster,
    get_current_user,
    get_db,
    get_settings_dep,
    require_admin,
    require_staff,
)
from app.core.config import Settings
from app.core.database import check_connection, utcnow
from app.core.errors import NotFoundError
from app.core.security import TokenClaims
from app.core.seed import seed_database
from app.schemas import (
    ActivityOut,
    HealthOut,
    MessageOut,
    NotificationCreate,
    NotificationOut,
    RevenueOut,
    StatsOut,
    UserCreate,
    UserOut,
    UserUpdate,
)
from app.services import activities as activity_service
from app.services import notifications as notification_service
from app.services import stats as stats_service
from app.services import users as user_service
from app.services.broadcaster import Broadcaster
from app.services.events import (
    DeletedRef,
    NewActivity,
    NewNotification,
    NotificationRead,
    UserAdded,
    UserDeleted,
    UserUpdated,
)

router = APIRouter()

# ---------- HEALTH / SEED (no token) ----------

@router.get("/health", response_model=HealthOut)
def health(request: Request):
    connected = check_connection(request.app.state.engine)
    return HealthOut(
        status="healthy",
        database="connected" if connected else "disconnected",
        timestamp=utcnow(),
    )


@router.post("/seed", response_model=MessageOut)
def seed(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings_dep),
):
    if not settings.seed_endpoint_enabled:
        raise NotFoundError("Endpoint")
    seed_database(db)
    return MessageOut(message="Database seeded successfully")

# ---------- STATS / REVENUE (admin+manager) ----------

@router.get("/stats", response_model=StatsOut)
def get_stats(
    db: Session = Depends(get_db),
    _user: TokenClaims = Depends(require_staff),
):
    return StatsOut(**stats_service.get_stats(db))


@router.get("/revenue", response_model=List[RevenueOut])
def list_revenue(
    db: Session = Depends(get_db),
    _user: TokenClaims = Depends(require_staff),
):
    return stats_service.list_revenue(db)

# ---------- USERS (admin+manager read, admin write) ----------

@router.get("/users", response_model=List[UserOut])
def list_users(
    search: Optional[str] = None,
    status: Optional[str] = None,
    db: Session = Depends(get_db),
    _user: TokenClaims = Depends(require_staff),
):
    return user_service.list_users(db, search=search, status=status)


@router.post("/users", response_model=UserOut)
def create_user(
    payload: UserCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    broadcaster: Broadcaster = Depends(get_broadcaster),
    _user: TokenClaims = Depends(require_admin),
):
    user, activity = user_service.create_user(db, payload)
    user_out = UserOut.model_validate(user)

    background_tasks.add_task(
        broadcaster.publish_all,
        UserAdded(data=user_out),
        NewActivity(data=ActivityOut.model_validate(activity)),
    )
    return user_out


@router.put("/users/{user_id}", response_model=UserOut)
def update_user(
    user_id: int,
    payload: UserUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    broadcaster: Broadcaster = Depends(get_broadcaster),
    _user: TokenClaims = Depends(require_admin),
):
    user, activity = user_service.update_user(db, user_id, payload)
    user_out = UserOut.model_validate(user)

    background_tasks.add_task(
        broadcaster.publish_all,
        UserUpdated(data=user_out),
        NewActivity(data=ActivityOut.model_validate(activity)),
    )
    return user_out


@router.delete("/users/{user_id}", response_model=MessageOut)
def delete_user(
    user_id: int,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    broadcaster: Broadcaster = Depends(get_broadcaster),
    _user: TokenClaims = Depends(require_admin),
):
    deleted_id, activity = user_service.delete_user(db, user_id)

    background_tasks.add_task(
        broadcaster.publish_all,
        UserDeleted(data=DeletedRef(id=deleted_id)),
        NewActivity(data=ActivityOut.model_validate(activity)),
    )
    return MessageOut(message="User deleted successfully")

# ---------- NOTIFICATIONS ----------

@router.get("/notifications", response_model=List[NotificationOut])
def list_notifications(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings_dep),
    _user: TokenClaims = Depends(get_current_user),
):
    return notification_service.list_recent(db, limit=settings.notifications_limit)


@router.post("/notifications", response_model=NotificationOut)
def create_notification(
    payload: NotificationCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    broadcaster: Broadcaster = Depends(get_broadcaster),
    _user: TokenClaims = Depends(require_staff),
):
    notification = notification_service.create_notification(
        db, type=payload.type, message=payload.message
    )
    out = NotificationOut.model_validate(notification)

    background_tasks.add_task(broadcaster.publish, NewNotification(data=out))
    return out


@router.put("/notifications/{notification_id}/read", response_model=NotificationOut)
def mark_notification_read(
    notification_id: int,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    broadcaster: Broadcaster = Depends(get_broadcaster),
    _user: TokenClaims = Depends(get_current_user),
):
    notification = notification_service.mark_read(db, notification_id)
    out = NotificationOut.model_validate(notification)

    background_tasks.add_task(broadcaster.publish, NotificationRead(data=out))
    return out

# ---------- ACTIVITIES ----------

@router.get("/activities", response_model=List[ActivityOut])
def list_activities(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings_dep),
    _user: TokenClaims = Depends(get_current_user),
):
    return activity_service.list_recent(db, limit=settings.activities_limit)
