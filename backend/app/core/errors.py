"""
Error taxonomy for the dashboard API.

Services raise these; the exception handler registered in ``app.main``
turns them into JSON responses with the matching status code.
"""

from typing import Any, Optional

from fastapi import status


class DashboardError(Exception):
    """Base class for every error surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class UnauthenticatedError(DashboardError):
    """No usable credentials were presented."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_code = "UNAUTHENTICATED"

    def __init__(self, message: str = "Access token required"):
        super().__init__(message)


class InvalidTokenError(UnauthenticatedError):
    """The token has a bad signature, is malformed, or has expired."""

    default_code = "INVALID_TOKEN"

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class ForbiddenError(DashboardError):
    status_code = status.HTTP_403_FORBIDDEN
    default_code = "FORBIDDEN"

    def __init__(self, role: str, allowed: tuple[str, ...]):
        super().__init__(
            "Insufficient permissions",
            details={"role": role, "allowed_roles": list(allowed)},
        )


class InvalidCredentialsError(DashboardError):
    """Same error for an unknown email and a wrong password."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_code = "INVALID_CREDENTIALS"

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class AccountNotActiveError(DashboardError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_code = "ACCOUNT_NOT_ACTIVE"

    def __init__(self):
        super().__init__("Account is not active")


class AccountLockedError(DashboardError):
    status_code = status.HTTP_423_LOCKED
    default_code = "ACCOUNT_LOCKED"

    def __init__(self):
        super().__init__("Account temporarily locked")


class NotFoundError(DashboardError):
    status_code = status.HTTP_404_NOT_FOUND
    default_code = "NOT_FOUND"

    def __init__(self, resource: str, resource_id: Any = None):
        details = {"resource": resource}
        if resource_id is not None:
            details["id"] = resource_id
        super().__init__(f"{resource} not found", details=details)


class ValidationError(DashboardError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_code = "VALIDATION_ERROR"
