from pydantic import field_validator
from typing import Optional
from datetime import date, datetime

from srms.config.options import GENDERS
from srms.schemas import CamelModel


class StudentFields(CamelModel):
    student_system_id: Optional[str] = None
    school_id: Optional[int] = None
    name: str
    dob: Optional[date] = None
    dob_bs: Optional[str] = None
    gender: str
    grade: int
    roll_no: Optional[str] = None
    photo_url: Optional[str] = None
    year: int
    symbol_no: str
    alph: Optional[str] = None
    registration_id: Optional[str] = None
    father_name: Optional[str] = None
    mother_name: Optional[str] = None
    mobile_no: Optional[str] = None


class StudentCreate(StudentFields):

    @field_validator('name', 'symbol_no')
    @classmethod
    def validate_required_text(cls, v):
        if not v or not v.strip():
            raise ValueError('Field cannot be empty')
        return v.strip()

    @field_validator('student_system_id', 'dob_bs', 'roll_no', 'alph', 'registration_id',
                     'father_name', 'mother_name', 'mobile_no', 'photo_url')
    @classmethod
    def blank_to_none(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @field_validator('dob', mode='before')
    @classmethod
    def blank_dob(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator('gender')
    @classmethod
    def validate_gender(cls, v):
        v = (v or '').strip().capitalize()
        if v not in GENDERS:
            raise ValueError(f"Gender must be one of {', '.join(GENDERS)}")
        return v

    @field_validator('year')
    @classmethod
    def validate_year(cls, v):
        if v <= 0:
            raise ValueError('Year must be a positive integer')
        return v


class StudentUpdate(StudentCreate):
    pass


class Student(StudentFields):
    id: int
    student_system_id: str
    school_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class StudentIdResponse(CamelModel):
    id: int
