from pydantic import field_validator
import re
from typing import Optional
from datetime import datetime

from srms.config.settings import settings
from srms.schemas import CamelModel

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')


def normalize_email(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    v = v.strip().lower()
    if not v:
        return None
    if not EMAIL_PATTERN.match(v):
        raise ValueError('Invalid email address')
    return v


def check_password_length(v: str) -> str:
    if v is None or len(v) < settings.MIN_PASSWORD_LENGTH:
        raise ValueError(f'Password must be at least {settings.MIN_PASSWORD_LENGTH} characters long')
    return v


class LoginRequest(CamelModel):
    identifier: str
    password: str

    @field_validator('identifier')
    @classmethod
    def validate_identifier(cls, v):
        if not v or not v.strip():
            raise ValueError('IEMIS code or email is required')
        return v.strip()

    @field_validator('password')
    @classmethod
    def validate_password(cls, v):
        if not v:
            raise ValueError('Password is required')
        return v


class RegisterRequest(CamelModel):
    iemis_code: str
    email: Optional[str] = None
    password: str
    role: str
    school_id: Optional[int] = None

    @field_validator('iemis_code')
    @classmethod
    def validate_iemis_code(cls, v):
        if not v or not v.strip():
            raise ValueError('IEMIS code is required')
        return v.strip()

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        return normalize_email(v)

    @field_validator('password')
    @classmethod
    def validate_password(cls, v):
        return check_password_length(v)

    @field_validator('role')
    @classmethod
    def validate_role(cls, v):
        v = (v or '').strip().lower()
        if v not in ('admin', 'school'):
            raise ValueError("Role must be either 'admin' or 'school'")
        return v


class ChangePasswordRequest(CamelModel):
    current_password: str
    new_password: str

    @field_validator('new_password')
    @classmethod
    def validate_new_password(cls, v):
        return check_password_length(v)


class UserResponse(CamelModel):
    id: int
    iemis_code: str
    email: Optional[str] = None
    role: str
    school_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LoginResponse(CamelModel):
    success: bool
    message: str
    token: str
    user: UserResponse


class RegisterResponse(CamelModel):
    success: bool
    message: str
    user: UserResponse
