from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from srms.auth.dependencies import get_current_user
from srms.database import get_db
from srms.models import User
from srms.students.router import load_student_for_user
from srms.subject_assignments import crud, schemas

router = APIRouter(
    prefix="/api/subject-assignments",
    tags=["subject-assignments"],
    responses={404: {"description": "Not found"}},
)


def check_academic_year(year: int) -> int:
    if year <= 0:
        raise HTTPException(status_code=400, detail="Invalid academic year")
    return year


@router.get("/{student_system_id}/{year}", response_model=schemas.AssignmentResponse)
def get_assignments(
    student_system_id: str,
    year: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    check_academic_year(year)
    student = load_student_for_user(db, current_user, student_system_id)
    subject_ids, extra_credit_subject_id = crud.get_assignments(db, student.id, year)
    return {"subject_ids": subject_ids, "extra_credit_subject_id": extra_credit_subject_id}


@router.post("/{student_system_id}/{year}", response_model=schemas.AssignmentSaveResponse)
def save_assignments(
    student_system_id: str,
    year: int,
    request: schemas.AssignmentRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Replace the student's subject assignments for the year with the submitted set."""
    check_academic_year(year)
    student = load_student_for_user(db, current_user, student_system_id)
    try:
        subject_ids, extra_credit_subject_id = crud.replace_assignments(
            db, student, request.subject_ids, request.extra_credit_subject_id, year
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "success": True,
        "message": "Subject assignments saved successfully",
        "subject_ids": subject_ids,
        "extra_credit_subject_id": extra_credit_subject_id,
    }
