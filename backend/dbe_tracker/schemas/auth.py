"""
Authentication schemas
"""
from pydantic import BaseModel, EmailStr, field_validator
from typing import Optional
from datetime import datetime
from ..models.user import UserRole
from ..utils.validators import validate_password


class UserRegister(BaseModel):
    """User registration schema"""
    email: EmailStr
    password: str
    full_name: Optional[str] = None

    @field_validator("password")
    @classmethod
    def check_password_policy(cls, value: str) -> str:
        is_valid, error = validate_password(value)
        if not is_valid:
            raise ValueError(error)
        return value


class UserLogin(BaseModel):
    """User login schema"""
    email: EmailStr
    password: str


class RefreshRequest(BaseModel):
    refresh_token: str


class Token(BaseModel):
    """Token response schema"""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_at: datetime


class UserResponse(BaseModel):
    """User response schema"""
    id: int
    email: str
    full_name: Optional[str]
    role: UserRole
    is_active: bool
    is_verified: bool
    created_at: datetime

    class Config:
        from_attributes = True


class SessionResponse(BaseModel):
    """Current session state for clients watching sign-in changes"""
    active: bool
    user: UserResponse
    expires_at: datetime
    created_at: datetime
    last_used_at: datetime
