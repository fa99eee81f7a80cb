# backend/app/api/deps_auth.py

from typing import Iterable, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import Settings
from app.core.errors import ForbiddenError, UnauthenticatedError
from app.core.security import TokenClaims, decode_token
from app.services.broadcaster import Broadcaster

# auto_error=False: a missing header yields None
bearer_scheme = HTTPBearer(auto_error=False)


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_broadcaster(request: Request) -> Broadcaster:
    return request.app.state.broadcaster


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings_dep),
) -> TokenClaims:
    """Authenticate: the bearer token must be present and verify."""
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError()

    # claims only; no store lookup
    return decode_token(credentials.credentials, settings)


def authorize(claims: TokenClaims, allowed_roles: Iterable[str]) -> TokenClaims:
    allowed = tuple(allowed_roles)
    if claims.role not in allowed:
        raise ForbiddenError(claims.role, allowed)
    return claims


def require_roles(*roles: str):
    """Authenticate, then Authorize against ``roles``."""

    def dependency(user: TokenClaims = Depends(get_current_user)) -> TokenClaims:
        return authorize(user, roles)

    return dependency


require_admin = require_roles("admin")
require_staff = require_roles("admin", "manager")
