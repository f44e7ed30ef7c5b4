from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from srms.auth.dependencies import get_current_user
from srms.database import get_db
from srms.marks import crud, schemas
from srms.models import User
from srms.students.router import load_student_for_user
from srms.subject_assignments.router import check_academic_year

router = APIRouter(
    prefix="/api/marks",
    tags=["marks"],
    responses={404: {"description": "Not found"}},
)


@router.get("/{student_system_id}/{year}", response_model=List[schemas.Mark])
def get_marks(
    student_system_id: str,
    year: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    check_academic_year(year)
    student = load_student_for_user(db, current_user, student_system_id)
    return crud.get_marks(db, student.id, year)


@router.post("/{student_system_id}/{year}", response_model=schemas.MarksSaveResponse)
def save_marks(
    student_system_id: str,
    year: int,
    entries: List[schemas.MarkEntry],
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Replace the student's marks for the year with the submitted rows."""
    check_academic_year(year)
    student = load_student_for_user(db, current_user, student_system_id)
    try:
        marks = crud.replace_marks(db, student, year, entries)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"success": True, "message": "Marks saved successfully", "marks": marks}
