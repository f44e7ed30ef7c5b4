import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from srms.auth.dependencies import get_current_user, require_admin
from srms.config.options import GRADES
from srms.database import get_db, is_foreign_key_violation
from srms.models import User
from srms.schemas import MessageResponse
from srms.subjects import crud, schemas

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/subjects",
    tags=["subjects"],
    responses={404: {"description": "Not found"}},
)

SUBJECT_IN_USE = "Cannot delete subject that is assigned to students or has marks"


def _get_subject_or_404(db: Session, subject_id: int):
    subject = crud.get_subject(db, subject_id)
    if subject is None:
        raise HTTPException(status_code=404, detail="Subject not found")
    return subject


@router.get("", response_model=List[schemas.Subject])
def list_subjects(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return [schemas.Subject.from_row(s) for s in crud.get_subjects(db)]


@router.get("/grade/{grade}", response_model=List[schemas.Subject])
def list_subjects_by_grade(grade: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    if grade not in GRADES:
        raise HTTPException(status_code=400, detail="Invalid grade. Must be 11 or 12")
    return [schemas.Subject.from_row(s) for s in crud.get_subjects(db, grade=grade)]


@router.get("/{subject_id}", response_model=schemas.Subject)
def get_subject(subject_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return schemas.Subject.from_row(_get_subject_or_404(db, subject_id))


@router.post("", response_model=schemas.Subject, status_code=201)
def create_subject(
    subject: schemas.SubjectCreate,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        db_subject = crud.create_subject(db, subject)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info(f"Subject {db_subject.id} created by admin {current_user.id}")
    return schemas.Subject.from_row(db_subject)


@router.put("/{subject_id}", response_model=schemas.Subject)
def update_subject(
    subject_id: int,
    subject: schemas.SubjectUpdate,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    db_subject = _get_subject_or_404(db, subject_id)
    try:
        return schemas.Subject.from_row(crud.update_subject(db, db_subject, subject))
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{subject_id}", response_model=MessageResponse)
def delete_subject(subject_id: int, current_user: User = Depends(require_admin), db: Session = Depends(get_db)):
    db_subject = _get_subject_or_404(db, subject_id)
    try:
        crud.delete_subject(db, db_subject)
    except crud.SubjectInUseError:
        raise HTTPException(status_code=409, detail=SUBJECT_IN_USE)
    except IntegrityError as e:
        if is_foreign_key_violation(e):
            raise HTTPException(status_code=409, detail=SUBJECT_IN_USE)
        raise
    logger.info(f"Subject {subject_id} deleted by admin {current_user.id}")
    return {'success': True, 'message': 'Subject deleted successfully'}
