import logging
import secrets
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, ValidationError
from app.core.security import hash_password
from app.models.activity import Activity
from app.models.user import User
from app.schemas import UserCreate, UserUpdate
from app.services.activities import record_activity

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("User", user_id)
    return user


def list_users(
    db: Session,
    search: Optional[str] = None,
    status: Optional[str] = None,
) -> list[User]:
    q = db.query(User)

    if status and status != "all":
        q = q.filter(User.status == status)

    if search and search.strip():
        pattern = f"%{search.strip()}%"
        q = q.filter(or_(User.name.ilike(pattern), User.email.ilike(pattern)))

    return q.order_by(User.join_date.desc(), User.id.desc()).all()


def _ensure_email_free(db: Session, email: str, exclude_id: Optional[int] = None) -> None:
    q = db.query(User).filter(User.email == email)
    if exclude_id is not None:
        q = q.filter(User.id != exclude_id)
    if q.first():
        raise ValidationError("User already exists", details={"field": "email"})


def _commit(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ValidationError(str(e.orig), details={"constraint": "users"}) from e


def create_user(
    db: Session,
    payload: UserCreate,
    *,
    actor: Optional[str] = None,
) -> tuple[User, Activity]:
    email = str(payload.email).strip().lower()
    _ensure_email_free(db, email)

    # no password given: the account exists but cannot log in until one is set
    password = payload.password or secrets.token_urlsafe(32)

    user = User(
        name=payload.name.strip(),
        email=email,
        password_hash=hash_password(password),
        role=payload.role,
        status=payload.status,
        phone=payload.phone,
        address=payload.address,
        orders=payload.orders,
    )
    db.add(user)
    _commit(db)
    db.refresh(user)

    if actor:
        description = f"New user {user.name} registered by {actor}"
    else:
        description = f"New user {user.name} added"
    activity = record_activity(db, description)

    logger.info("Created user %s (%s)", user.id, user.role)
    return user, activity


def update_user(db: Session, user_id: int, payload: UserUpdate) -> tuple[User, Activity]:
    user = get_user(db, user_id)

    changes = payload.model_dump(exclude_unset=True)
    password = changes.pop("password", None)

    if changes.get("email") is not None:
        changes["email"] = str(changes["email"]).strip().lower()
        _ensure_email_free(db, changes["email"], exclude_id=user.id)

    for k, v in changes.items():
        if v is None and k in ("name", "email", "role", "status", "orders"):
            continue
        setattr(user, k, v)

    if password:
        user.password_hash = hash_password(password)

    _commit(db)
    db.refresh(user)

    activity = record_activity(db, f"User {user.name} updated")
    return user, activity


def delete_user(db: Session, user_id: int) -> tuple[int, Activity]:
    user = get_user(db, user_id)
    name = user.name

    db.delete(user)
    db.commit()

    activity = record_activity(db, f"User {name} deleted")
    logger.info("Deleted user %s", user_id)
    return user_id, activity


def increment_orders(db: Session, user_id: int, by: int = 1) -> User:
    updated = (
        db.query(User)
        .filter(User.id == user_id)
        .update({User.orders: User.orders + by}, synchronize_session=False)
    )
    db.commit()
    if not updated:
        raise NotFoundError("User", user_id)
    return get_user(db, user_id)
