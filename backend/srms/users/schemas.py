from pydantic import field_validator
from typing import Optional

from srms.auth.schemas import RegisterRequest, UserResponse, normalize_email, check_password_length
from srms.schemas import CamelModel


class UserCreate(RegisterRequest):
    pass


class UserUpdate(CamelModel):
    """Partial update; omitted fields keep their stored values."""
    iemis_code: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None
    school_id: Optional[int] = None

    @field_validator('iemis_code')
    @classmethod
    def validate_iemis_code(cls, v):
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError('IEMIS code cannot be empty')
        return v

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        return normalize_email(v)

    @field_validator('password')
    @classmethod
    def validate_password(cls, v):
        if v is None or v == '':
            return None
        return check_password_length(v)

    @field_validator('role')
    @classmethod
    def validate_role(cls, v):
        if v is None:
            return v
        v = v.strip().lower()
        if v not in ('admin', 'school'):
            raise ValueError("Role must be either 'admin' or 'school'")
        return v


User = UserResponse
