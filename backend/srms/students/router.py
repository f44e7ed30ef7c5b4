import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from srms.auth.dependencies import get_current_user, ensure_can_access, is_admin
from srms.database import get_db, is_unique_violation, violated_constraint
from srms.models import School, User
from srms.schemas import MessageResponse
from srms.students import crud, schemas

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/students",
    tags=["students"],
    responses={404: {"description": "Not found"}},
)


def _integrity_to_http(exc: IntegrityError) -> HTTPException:
    if is_unique_violation(exc):
        if "student_system_id" in violated_constraint(exc):
            return HTTPException(status_code=409, detail="A student with this system ID already exists")
        return HTTPException(
            status_code=409,
            detail="A student with this symbol number already exists for this school and year",
        )
    logger.error(f"Integrity error on students: {exc}")
    return HTTPException(status_code=400, detail="Invalid student data")


def _resolve_school_id(db: Session, current_user: User, requested: Optional[int]) -> int:
    """School users always write to their own school; admins must name one."""
    if not is_admin(current_user):
        if requested is not None and requested != current_user.school_id:
            raise HTTPException(status_code=403, detail="Access denied to this school's data")
        return current_user.school_id

    if requested is None:
        raise HTTPException(status_code=400, detail="School ID is required")
    if db.query(School.id).filter(School.id == requested).first() is None:
        raise HTTPException(status_code=400, detail="School not found")
    return requested


def _get_student_or_404(db: Session, student_id: int):
    student = crud.get_student(db, student_id)
    if student is None:
        raise HTTPException(status_code=404, detail="Student not found")
    return student


def load_student_for_user(db: Session, current_user: User, student_system_id: str):
    """Fetch a student by system id, enforcing the tenant policy (404, then 403)."""
    student = crud.get_student_by_system_id(db, student_system_id)
    if student is None:
        raise HTTPException(status_code=404, detail="Student not found")
    ensure_can_access(current_user, student.school_id)
    return student


@router.get("", response_model=List[schemas.Student])
def list_students(
    school_id: Optional[int] = Query(None, alias="schoolId"),
    year: Optional[int] = Query(None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Admins may filter by school; school users only ever see their own students."""
    if not is_admin(current_user):
        school_id = current_user.school_id
    return crud.get_students(db, school_id=school_id, year=year)


@router.get("/school/{school_id}", response_model=List[schemas.Student])
def list_students_by_school(
    school_id: int,
    year: Optional[int] = Query(None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    ensure_can_access(current_user, school_id)
    return crud.get_students(db, school_id=school_id, year=year)


@router.get("/system-id/{student_system_id}", response_model=schemas.StudentIdResponse)
def get_student_id_by_system_id(
    student_system_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Resolve a student's external system id to its database id."""
    student = load_student_for_user(db, current_user, student_system_id)
    return {"id": student.id}


@router.get("/{student_id}", response_model=schemas.Student)
def get_student(student_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    student = _get_student_or_404(db, student_id)
    ensure_can_access(current_user, student.school_id)
    return student


@router.post("", response_model=schemas.Student, status_code=201)
def create_student(
    student: schemas.StudentCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    school_id = _resolve_school_id(db, current_user, student.school_id)
    try:
        db_student = crud.create_student(db, student, school_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except IntegrityError as e:
        raise _integrity_to_http(e)
    logger.info(f"Student {db_student.id} created in school {school_id} by user {current_user.id}")
    return db_student


@router.put("/{student_id}", response_model=schemas.Student)
def update_student(
    student_id: int,
    student: schemas.StudentUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    db_student = _get_student_or_404(db, student_id)
    ensure_can_access(current_user, db_student.school_id)
    requested = student.school_id if student.school_id is not None else db_student.school_id
    school_id = _resolve_school_id(db, current_user, requested)
    try:
        return crud.update_student(db, db_student, student, school_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except IntegrityError as e:
        raise _integrity_to_http(e)


@router.delete("/{student_id}", response_model=MessageResponse)
def delete_student(student_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    db_student = _get_student_or_404(db, student_id)
    ensure_can_access(current_user, db_student.school_id)
    crud.delete_student(db, db_student)
    logger.info(f"Student {student_id} deleted by user {current_user.id}")
    return {'success': True, 'message': 'Student deleted successfully'}
