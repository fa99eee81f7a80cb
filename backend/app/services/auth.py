"""
Login and credential maintenance.

Login walks a single user record through: lookup, lock check, status
check, password check. Failed password checks count towards a temporary
lock; a successful one clears the counter.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.database import utcnow
from app.core.errors import (
    AccountLockedError,
    AccountNotActiveError,
    InvalidCredentialsError,
    NotFoundError,
)
from app.core.security import create_access_token, hash_password, verify_password
from app.models.user import User

logger = logging.getLogger(__name__)


def login(
    db: Session,
    email: str,
    password: str,
    settings: Settings,
    now: Optional[datetime] = None,
) -> tuple[str, User]:
    now = now or utcnow()
    email = (email or "").strip().lower()

    user = db.query(User).filter(User.email == email).first()
    if not user:
        raise InvalidCredentialsError()

    if user.is_locked(now):
        logger.warning("Login refused for locked account %s", email)
        raise AccountLockedError()

    if user.status != "active":
        raise AccountNotActiveError()

    if not verify_password(password, user.password_hash):
        user.login_attempts = (user.login_attempts or 0) + 1
        if user.login_attempts >= settings.max_login_attempts:
            user.lock_until = now + timedelta(minutes=settings.lock_minutes)
            logger.warning(
                "Locking %s for %d minutes after %d failed attempts",
                email,
                settings.lock_minutes,
                user.login_attempts,
            )
        db.commit()
        raise InvalidCredentialsError()

    user.login_attempts = 0
    user.lock_until = None
    user.last_login = now
    db.commit()
    db.refresh(user)

    token = create_access_token(user, settings)
    return token, user


def get_profile(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("User", user_id)
    return user


def change_password(db: Session, user_id: int, current_password: str, new_password: str) -> None:
    user = get_profile(db, user_id)

    if not verify_password(current_password, user.password_hash):
        raise InvalidCredentialsError("Current password is incorrect")

    user.password_hash = hash_password(new_password)
    db.commit()
