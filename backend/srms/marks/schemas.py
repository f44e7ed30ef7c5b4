from pydantic import field_validator
from typing import List, Optional
from datetime import datetime

from srms.schemas import CamelModel


class MarkEntry(CamelModel):
    subject_id: int
    theory_obtained: Optional[float] = None
    practical_obtained: Optional[float] = None
    is_absent: bool = False

    @field_validator('theory_obtained', 'practical_obtained')
    @classmethod
    def validate_non_negative(cls, v):
        if v is not None and v < 0:
            raise ValueError('Marks cannot be negative')
        return v


class Mark(CamelModel):
    id: int
    student_id: int
    subject_id: int
    academic_year: int
    theory_obtained: Optional[float] = None
    practical_obtained: Optional[float] = None
    is_absent: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class MarksSaveResponse(CamelModel):
    success: bool = True
    message: str
    marks: List[Mark]
