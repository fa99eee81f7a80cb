from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.revenue import Revenue
from app.models.user import User


def get_stats(db: Session) -> dict:
    total_users = db.query(func.count(User.id)).scalar() or 0
    active_users = db.query(func.count(User.id)).filter(User.status == "active").scalar() or 0
    total_orders = db.query(func.coalesce(func.sum(User.orders), 0)).scalar() or 0
    total_revenue = db.query(func.coalesce(func.sum(Revenue.revenue), 0)).scalar() or 0

    return {
        "total_users": int(total_users),
        "active_users": int(active_users),
        "total_orders": int(total_orders),
        "total_revenue": float(total_revenue),
    }


def list_revenue(db: Session) -> list[Revenue]:
    # months are seeded in calendar order
    return db.query(Revenue).order_by(Revenue.id.asc()).all()
