import logging
from typing import List, Optional
from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from srms.academic_years import crud, schemas
from srms.auth.dependencies import get_current_user, require_admin
from srms.database import get_db, is_unique_violation
from srms.models import User
from srms.schemas import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/academic-years",
    tags=["academic-years"],
    responses={404: {"description": "Not found"}},
)


def _get_year_or_404(db: Session, academic_year_id: int):
    db_year = crud.get_academic_year(db, academic_year_id)
    if db_year is None:
        raise HTTPException(status_code=404, detail="Academic year not found")
    return db_year


def _ensure_year_is_free(db: Session, year: int, own_id: Optional[int] = None):
    existing = crud.get_academic_year_by_year(db, year)
    if existing is not None and existing.id != own_id:
        raise HTTPException(status_code=409, detail=f"Academic year {year} already exists")


@router.get("", response_model=List[schemas.AcademicYear])
def list_academic_years(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return crud.get_academic_years(db)


@router.get("/active", response_model=List[schemas.AcademicYear])
def list_active_academic_years(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return crud.get_academic_years(db, active_only=True)


@router.get("/{academic_year_id}", response_model=schemas.AcademicYear)
def get_academic_year(academic_year_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return _get_year_or_404(db, academic_year_id)


@router.post("", response_model=schemas.AcademicYear, status_code=201)
def create_academic_year(
    academic_year: schemas.AcademicYearCreate,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    _ensure_year_is_free(db, academic_year.year)
    try:
        db_year = crud.create_academic_year(db, academic_year)
    except IntegrityError as e:
        if is_unique_violation(e):
            raise HTTPException(status_code=409, detail=f"Academic year {academic_year.year} already exists")
        raise
    logger.info(f"Academic year {db_year.year} created by admin {current_user.id}")
    return db_year


@router.put("/{academic_year_id}", response_model=schemas.AcademicYear)
def update_academic_year(
    academic_year_id: int,
    academic_year: schemas.AcademicYearUpdate,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    db_year = _get_year_or_404(db, academic_year_id)
    _ensure_year_is_free(db, academic_year.year, own_id=academic_year_id)
    try:
        return crud.update_academic_year(db, db_year, academic_year)
    except IntegrityError as e:
        if is_unique_violation(e):
            raise HTTPException(status_code=409, detail=f"Academic year {academic_year.year} already exists")
        raise


@router.put("/{academic_year_id}/toggle", response_model=schemas.AcademicYear)
def toggle_academic_year(
    academic_year_id: int,
    toggle: Optional[schemas.AcademicYearToggle] = Body(None),
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    db_year = _get_year_or_404(db, academic_year_id)
    return crud.set_active(db, db_year, toggle.is_active if toggle else None)


@router.delete("/{academic_year_id}", response_model=MessageResponse)
def delete_academic_year(academic_year_id: int, current_user: User = Depends(require_admin), db: Session = Depends(get_db)):
    db_year = _get_year_or_404(db, academic_year_id)
    crud.delete_academic_year(db, db_year)
    logger.info(f"Academic year {academic_year_id} deleted by admin {current_user.id}")
    return {'success': True, 'message': 'Academic year deleted successfully'}
