from pydantic import field_validator
from typing import Optional
from datetime import datetime

from srms.schemas import CamelModel


class AcademicYearCreate(CamelModel):
    year: int
    is_active: bool = True

    @field_validator('year')
    @classmethod
    def validate_year(cls, v):
        if v <= 0:
            raise ValueError('Year must be a positive integer')
        return v


class AcademicYearUpdate(AcademicYearCreate):
    pass


class AcademicYearToggle(CamelModel):
    """Explicit state to set; when omitted the current state is flipped."""
    is_active: Optional[bool] = None


class AcademicYear(CamelModel):
    id: int
    year: int
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
