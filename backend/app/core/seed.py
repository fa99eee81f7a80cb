import logging

from sqlalchemy.orm import Session

from app.core.security import hash_password
from app.models.activity import Activity
from app.models.notification import Notification
from app.models.revenue import Revenue
from app.models.user import User

logger = logging.getLogger(__name__)

# Demo accounts (local demos only)
DEMO_USERS = [
    {"name": "John Doe", "email": "john@example.com", "password": "admin123", "status": "active", "role": "admin", "phone": "+1-555-0101", "address": "123 Main St, New York, NY", "orders": 12},
    {"name": "Jane Smith", "email": "jane@example.com", "password": "user123", "status": "active", "role": "user", "phone": "+1-555-0102", "address": "456 Oak Ave, Los Angeles, CA", "orders": 8},
    {"name": "Bob Johnson", "email": "bob@example.com", "password": "user123", "status": "inactive", "role": "user", "phone": "+1-555-0103", "address": "789 Pine Rd, Chicago, IL", "orders": 5},
    {"name": "Alice Brown", "email": "alice@example.com", "password": "manager123", "status": "active", "role": "manager", "phone": "+1-555-0104", "address": "321 Elm St, Houston, TX", "orders": 15},
    {"name": "Charlie Wilson", "email": "charlie@example.com", "password": "user123", "status": "pending", "role": "user", "phone": "+1-555-0105", "address": "654 Maple Dr, Phoenix, AZ", "orders": 3},
    {"name": "Diana Davis", "email": "diana@example.com", "password": "admin123", "status": "active", "role": "admin", "phone": "+1-555-0106", "address": "987 Cedar Ln, Philadelphia, PA", "orders": 20},
    {"name": "Edward Miller", "email": "edward@example.com", "password": "user123", "status": "inactive", "role": "user", "phone": "+1-555-0107", "address": "147 Birch Way, San Antonio, TX", "orders": 7},
    {"name": "Fiona Garcia", "email": "fiona@example.com", "password": "manager123", "status": "active", "role": "manager", "phone": "+1-555-0108", "address": "258 Spruce St, San Diego, CA", "orders": 11},
]

DEMO_NOTIFICATIONS = [
    {"type": "success", "message": "New order received: #5678"},
    {"type": "warning", "message": "Inventory low for product SKU-1234"},
    {"type": "info", "message": "System maintenance scheduled for tonight"},
    {"type": "error", "message": "Payment gateway timeout detected"},
    {"type": "success", "message": "Monthly report generated successfully"},
]

DEMO_REVENUE = [
    ("Jan", 32000),
    ("Feb", 28000),
    ("Mar", 35000),
    ("Apr", 42000),
    ("May", 38000),
    ("Jun", 45678),
]

DEMO_ACTIVITIES = [
    "New user registration",
    "Order #1234 completed",
    "Product updated",
    "New review submitted",
    "Payment processed",
]


def seed_database(db: Session) -> None:
    """Wipe every collection and load the demo data set (DEV ONLY)."""
    for model in (User, Notification, Revenue, Activity):
        db.query(model).delete()
    db.commit()

    users = []
    for s in DEMO_USERS:
        fields = {k: v for k, v in s.items() if k != "password"}
        users.append(User(password_hash=hash_password(s["password"]), **fields))

    db.add_all(users)
    db.add_all(Notification(**n) for n in DEMO_NOTIFICATIONS)
    db.add_all(Revenue(month=m, revenue=r) for m, r in DEMO_REVENUE)
    db.add_all(Activity(description=d) for d in DEMO_ACTIVITIES)
    db.commit()

    logger.info(
        "Seeded %d users, %d notifications, %d revenue rows, %d activities",
        len(DEMO_USERS),
        len(DEMO_NOTIFICATIONS),
        len(DEMO_REVENUE),
        len(DEMO_ACTIVITIES),
    )


def seed_if_empty(db: Session) -> bool:
    existing = db.query(User).count()
    if existing > 0:
        return False

    seed_database(db)
    return True
