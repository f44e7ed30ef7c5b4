from pydantic import field_validator
import re

from srms.auth.schemas import normalize_email, check_password_length
from srms.schemas import CamelModel


class SendOtpRequest(CamelModel):
    email: str

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        v = normalize_email(v)
        if v is None:
            raise ValueError('Email is required')
        return v


class VerifyOtpRequest(SendOtpRequest):
    otp: str

    @field_validator('otp')
    @classmethod
    def validate_otp(cls, v):
        v = (v or '').strip()
        if not re.match(r'^\d{6}$', v):
            raise ValueError('OTP must be 6 digits')
        return v


class ResetPasswordRequest(VerifyOtpRequest):
    new_password: str

    @field_validator('new_password')
    @classmethod
    def validate_new_password(cls, v):
        return check_password_length(v)
