from pydantic import field_validator, model_validator
from typing import Optional
from datetime import datetime

from srms.schemas import CamelModel


class SubjectComponent(CamelModel):
    """Theory or internal (practical) part of a subject."""
    sub_code: str
    credit: float
    full_marks: float
    pass_marks: float

    @field_validator('sub_code')
    @classmethod
    def validate_sub_code(cls, v):
        if not v or not v.strip():
            raise ValueError('Subject code is required')
        return v.strip()

    @field_validator('credit', 'full_marks', 'pass_marks')
    @classmethod
    def validate_non_negative(cls, v):
        if v < 0:
            raise ValueError('Value cannot be negative')
        return v

    @model_validator(mode='after')
    def check_pass_marks(self):
        if self.pass_marks > self.full_marks:
            raise ValueError('Pass marks cannot exceed full marks')
        return self


class SubjectCreate(CamelModel):
    name: str
    grade: int
    theory: SubjectComponent
    internal: SubjectComponent

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError('Subject name is required')
        return v.strip()


class SubjectUpdate(SubjectCreate):
    pass


class Subject(CamelModel):
    id: int
    name: str
    grade: int
    theory: SubjectComponent
    internal: SubjectComponent
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row) -> "Subject":
        return cls(
            id=row.id,
            name=row.name,
            grade=row.grade,
            theory=SubjectComponent.model_construct(
                sub_code=row.theory_sub_code,
                credit=row.theory_credit,
                full_marks=row.theory_full_marks,
                pass_marks=row.theory_pass_marks,
            ),
            internal=SubjectComponent.model_construct(
                sub_code=row.internal_sub_code,
                credit=row.internal_credit,
                full_marks=row.internal_full_marks,
                pass_marks=row.internal_pass_marks,
            ),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
