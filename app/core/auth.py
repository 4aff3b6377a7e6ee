import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from app.core.config import get_settings
from app.core.enums import Permission, permissions_for
from app.core.exceptions import UnauthorizedException, ForbiddenException

logger = logging.getLogger(__name__)

# Missing or malformed headers are reported by get_current_user itself
token_bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class CurrentUser:
    """Caller identity taken from a trusted access token"""
    user_id: Optional[str]
    role: Optional[str]

    def has_permission(self, permission: Permission) -> bool:
        return permission in permissions_for(self.role)


def decode_access_token(token: str) -> dict:
    """Decode and verify a JWT issued by the identity service"""
    settings = get_settings()
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as e:
        logger.warning(f"Rejected access token: {str(e)}")
        raise UnauthorizedException("Invalid or expired token")


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(token_bearer_scheme),
) -> CurrentUser:
    """Resolve the caller from the Authorization header"""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedException("Authentication token missing")

    payload = decode_access_token(credentials.credentials)
    user_id = payload.get("userId", payload.get("sub"))
    return CurrentUser(
        user_id=str(user_id) if user_id is not None else None,
        role=payload.get("role"),
    )


def require_permission(permission: Permission):
    """Build a dependency that only lets callers holding ``permission`` through"""

    def dependency(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if not current_user.has_permission(permission):
            logger.warning(
                f"User {current_user.user_id} with role {current_user.role!r} denied {permission.value}"
            )
            raise ForbiddenException(f"Forbidden: missing permission {permission.value}")
        return current_user

    return dependency


require_admin = require_permission(Permission.MOVIES_WRITE)
