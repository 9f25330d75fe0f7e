"""
FastAPI dependencies for resolving the signed-in user
"""
from datetime import datetime, timezone
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from .database import get_db
from .exceptions import AuthenticationError, PermissionDeniedError
from .security import decode_token
from ..models.user import User, UserRole
from ..models.session import Session as SessionModel

security = HTTPBearer(auto_error=False)


def _as_aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone=True columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def get_current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> SessionModel:
    """Resolve the active session row for the bearer token"""
    if credentials is None:
        raise AuthenticationError()

    token = credentials.credentials
    payload = decode_token(token, expected_type="access")

    session = db.query(SessionModel).filter(
        SessionModel.token == token,
        SessionModel.is_active == True
    ).first()
    if not session or str(session.user_id) != payload.get("sub"):
        raise AuthenticationError("Session has been signed out or is invalid", code="session_inactive")

    if _as_aware(session.expires_at) <= datetime.now(timezone.utc):
        raise AuthenticationError("Session has expired", code="session_expired")

    session.last_used_at = datetime.now(timezone.utc)
    db.commit()
    return session


def get_current_user(
    session: SessionModel = Depends(get_current_session),
    db: Session = Depends(get_db)
) -> User:
    """Get the user behind the current session"""
    user = db.query(User).filter(User.id == session.user_id).first()
    if not user:
        raise AuthenticationError("User no longer exists", code="user_not_found")
    return user


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Get the current user, rejecting deactivated accounts"""
    if not current_user.is_active:
        raise PermissionDeniedError("User account is inactive")
    return current_user


def require_admin(current_user: User = Depends(get_current_active_user)) -> User:
    """Allow only admin users"""
    if current_user.role != UserRole.ADMIN:
        raise PermissionDeniedError("Administrator role required")
    return current_user
