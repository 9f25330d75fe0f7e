"""
Authentication API endpoints
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from datetime import datetime, timedelta, timezone
import logging
from ..core.database import get_db
from ..core.security import verify_password, get_password_hash, create_access_token, create_refresh_token, decode_token
from ..core.config import settings
from ..core.dependencies import get_current_active_user, get_current_session
from ..core.exceptions import AuthenticationError, PermissionDeniedError, ValidationError
from ..models.user import User
from ..models.session import Session as SessionModel
from ..schemas.auth import UserRegister, UserLogin, RefreshRequest, Token, UserResponse, SessionResponse
from ..services.contract_service import commit_or_raise

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


def _issue_tokens(user: User) -> dict:
    """Create a new access/refresh token pair for the user"""
    now = datetime.now(timezone.utc)
    access_token_expires = timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {"sub": user.id, "email": user.email}
    return {
        "access_token": create_access_token(data=claims, expires_delta=access_token_expires),
        "refresh_token": create_refresh_token(data=claims),
        "expires_at": now + access_token_expires,
        "refresh_expires_at": now + timedelta(days=settings.JWT_REFRESH_TOKEN_EXPIRE_DAYS),
    }


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserRegister,
    db: Session = Depends(get_db)
):
    """Create an account (sign up)"""
    email = user_data.email.lower()
    existing_user = db.query(User).filter(User.email == email).first()
    if existing_user:
        raise ValidationError("Email already registered", field="email", code="email_taken")

    new_user = User(
        email=email,
        password_hash=get_password_hash(user_data.password),
        full_name=user_data.full_name
    )

    db.add(new_user)
    # A concurrent sign-up with the same email surfaces here as a conflict
    commit_or_raise(db, "create the account")
    db.refresh(new_user)

    logger.info(f"Registered user {new_user.id} ({new_user.email})")
    return new_user


@router.post("/login", response_model=Token)
async def login(
    credentials: UserLogin,
    db: Session = Depends(get_db)
):
    """Sign in and start a session"""
    user = db.query(User).filter(User.email == credentials.email.lower()).first()
    if not user:
        # Lets the client offer to switch to account creation
        raise AuthenticationError(
            "No account found with this email. Would you like to create one?",
            code="account_not_found",
            details={"suggest_sign_up": True}
        )

    if not verify_password(credentials.password, user.password_hash):
        raise AuthenticationError("Incorrect email or password", code="invalid_credentials")

    if not user.is_active:
        raise PermissionDeniedError("User account is inactive")

    tokens = _issue_tokens(user)
    session = SessionModel(
        user_id=user.id,
        token=tokens["access_token"],
        refresh_token=tokens["refresh_token"],
        expires_at=tokens["expires_at"],
        refresh_expires_at=tokens["refresh_expires_at"],
        is_active=True
    )
    db.add(session)
    db.commit()

    logger.info(f"User {user.id} signed in")
    return {
        "access_token": tokens["access_token"],
        "refresh_token": tokens["refresh_token"],
        "token_type": "bearer",
        "expires_at": tokens["expires_at"],
    }


@router.post("/refresh", response_model=Token)
async def refresh(
    request: RefreshRequest,
    db: Session = Depends(get_db)
):
    """Exchange a refresh token for a new token pair on the same session"""
    payload = decode_token(request.refresh_token, expected_type="refresh")

    session = db.query(SessionModel).filter(
        SessionModel.refresh_token == request.refresh_token,
        SessionModel.is_active == True
    ).first()
    if not session or str(session.user_id) != payload.get("sub"):
        raise AuthenticationError("Session has been signed out or is invalid", code="session_inactive")

    user = session.user
    if not user.is_active:
        raise PermissionDeniedError("User account is inactive")

    tokens = _issue_tokens(user)
    session.token = tokens["access_token"]
    session.refresh_token = tokens["refresh_token"]
    session.expires_at = tokens["expires_at"]
    session.refresh_expires_at = tokens["refresh_expires_at"]
    session.last_used_at = datetime.now(timezone.utc)
    db.commit()

    return {
        "access_token": tokens["access_token"],
        "refresh_token": tokens["refresh_token"],
        "token_type": "bearer",
        "expires_at": tokens["expires_at"],
    }


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(get_current_active_user)
):
    """Get current user information"""
    return current_user


@router.get("/session", response_model=SessionResponse)
async def get_session(
    session: SessionModel = Depends(get_current_session),
    current_user: User = Depends(get_current_active_user)
):
    """Report the state of the caller's session"""
    return {
        "active": session.is_active,
        "user": current_user,
        "expires_at": session.expires_at,
        "created_at": session.created_at,
        "last_used_at": session.last_used_at,
    }


@router.post("/logout")
async def logout(
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Sign out and deactivate the user's sessions"""
    db.query(SessionModel).filter(
        SessionModel.user_id == current_user.id,
        SessionModel.is_active == True
    ).update({"is_active": False, "ended_at": datetime.now(timezone.utc)})
    db.commit()

    logger.info(f"User {current_user.id} signed out")
    return {"message": "Successfully logged out"}
