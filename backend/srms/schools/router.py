import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from srms.auth.dependencies import get_current_user, require_admin, ensure_can_access, is_admin
from srms.database import get_db, is_unique_violation
from srms.models import User
from srms.schemas import MessageResponse
from srms.schools import crud, schemas

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/schools",
    tags=["schools"],
    responses={404: {"description": "Not found"}},
)


def _conflict_from(exc: IntegrityError) -> HTTPException:
    if is_unique_violation(exc):
        return HTTPException(status_code=409, detail="School with this IEMIS Code already exists")
    logger.error(f"Integrity error on schools: {exc}")
    return HTTPException(status_code=400, detail="Invalid school data")


def _get_school_or_404(db: Session, school_id: int):
    school = crud.get_school(db, school_id)
    if school is None:
        raise HTTPException(status_code=404, detail="School not found")
    return school


@router.get("", response_model=List[schemas.School])
def list_schools(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Admins see every school, school users only their own."""
    if is_admin(current_user):
        schools = crud.get_schools(db)
    else:
        school = crud.get_school(db, current_user.school_id) if current_user.school_id else None
        schools = [school] if school else []
    logger.info(f"Fetched {len(schools)} schools for user {current_user.id}")
    return schools


@router.get("/{school_id}", response_model=schemas.School)
def get_school(school_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    ensure_can_access(current_user, school_id)
    return _get_school_or_404(db, school_id)


@router.post("", response_model=schemas.School, status_code=201)
def create_school(
    school: schemas.SchoolCreate,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        db_school = crud.create_school(db, school)
    except IntegrityError as e:
        raise _conflict_from(e)
    logger.info(f"School {db_school.id} created by user {current_user.id}")
    return db_school


@router.put("/{school_id}", response_model=schemas.School)
def update_school(
    school_id: int,
    school: schemas.SchoolUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    ensure_can_access(current_user, school_id)
    db_school = _get_school_or_404(db, school_id)
    try:
        return crud.update_school(db, db_school, school)
    except IntegrityError as e:
        raise _conflict_from(e)


@router.delete("/{school_id}", response_model=MessageResponse)
def delete_school(school_id: int, current_user: User = Depends(require_admin), db: Session = Depends(get_db)):
    """
    Delete a school. Refused with 409 while students or users still belong to it.
    """
    db_school = _get_school_or_404(db, school_id)
    student_count, user_count = crud.count_dependents(db, school_id)
    if student_count > 0 or user_count > 0:
        logger.info(f"Refusing to delete school {school_id}: {student_count} students, {user_count} users")
        return JSONResponse(status_code=409, content={
            "detail": "Cannot delete school with associated data",
            "studentCount": student_count,
            "userCount": user_count,
        })
    crud.delete_school(db, db_school)
    logger.info(f"School {school_id} deleted by user {current_user.id}")
    return {'success': True, 'message': 'School deleted successfully'}
