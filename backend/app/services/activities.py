from sqlalchemy.orm import Session

from app.models.activity import Activity


def record_activity(db: Session, description: str) -> Activity:
    activity = Activity(description=description)
    db.add(activity)
    db.commit()
    db.refresh(activity)
    return activity


def list_recent(db: Session, limit: int = 10) -> list[Activity]:
    limit = max(1, min(limit, 200))
    return (
        db.query(Activity)
        .order_by(Activity.timestamp.desc(), Activity.id.desc())
        .limit(limit)
        .all()
    )
