from pydantic import field_validator, ValidationInfo
import re
from typing import Optional
from datetime import datetime

from srms.auth.schemas import normalize_email
from srms.config.options import SCHOOL_STATUSES, SUBSCRIPTION_PLANS
from srms.schemas import CamelModel

# Minimum trimmed length per text field
MIN_LENGTHS = {
    'iemis_code': 3,
    'name': 3,
    'municipality': 3,
    'estd': 4,
    'prepared_by': 2,
    'checked_by': 2,
    'head_teacher_name': 2,
}


class SchoolFields(CamelModel):
    iemis_code: str
    logo_url: Optional[str] = None
    name: str
    municipality: str
    estd: str
    prepared_by: str
    checked_by: str
    head_teacher_name: str
    head_teacher_contact: str
    email: Optional[str] = None
    status: str = "Active"
    subscription_plan: str = "Basic"


class SchoolBase(SchoolFields):
    """Request body with field rules applied."""

    @field_validator('iemis_code', 'name', 'municipality', 'estd', 'prepared_by', 'checked_by', 'head_teacher_name')
    @classmethod
    def validate_min_length(cls, v: str, info: ValidationInfo):
        v = (v or '').strip()
        minimum = MIN_LENGTHS[info.field_name]
        if len(v) < minimum:
            label = info.field_name.replace('_', ' ').capitalize()
            raise ValueError(f'{label} must be at least {minimum} characters long')
        return v

    @field_validator('head_teacher_contact')
    @classmethod
    def validate_contact(cls, v):
        v = (v or '').strip()
        if not re.match(r'^\d{10}$', v):
            raise ValueError('Head teacher contact must be a 10-digit number')
        return v

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        return normalize_email(v)

    @field_validator('status')
    @classmethod
    def validate_status(cls, v):
        if v not in SCHOOL_STATUSES:
            raise ValueError(f"Status must be one of {', '.join(SCHOOL_STATUSES)}")
        return v

    @field_validator('subscription_plan')
    @classmethod
    def validate_subscription_plan(cls, v):
        if v not in SUBSCRIPTION_PLANS:
            raise ValueError(f"Subscription plan must be one of {', '.join(SUBSCRIPTION_PLANS)}")
        return v


class SchoolCreate(SchoolBase):
    pass


class SchoolUpdate(SchoolBase):
    pass


class School(SchoolFields):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
