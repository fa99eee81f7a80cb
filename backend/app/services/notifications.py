from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.models.notification import Notification


def list_recent(db: Session, limit: int = 20) -> list[Notification]:
    limit = max(1, min(limit, 200))
    return (
        db.query(Notification)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .limit(limit)
        .all()
    )


def create_notification(db: Session, *, type: str, message: str) -> Notification:
    notification = Notification(type=type, message=message.strip())
    db.add(notification)
    db.commit()
    db.refresh(notification)
    return notification


def mark_read(db: Session, notification_id: int) -> Notification:
    notification = db.get(Notification, notification_id)
    if not notification:
        raise NotFoundError("Notification", notification_id)

    # idempotent: already-read stays read
    if not notification.read:
        notification.read = True
        db.commit()
        db.refresh(notification)
    return notification
