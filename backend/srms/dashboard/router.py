import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from srms.auth.dependencies import get_current_user, require_admin, ensure_can_access
from srms.dashboard import service
from srms.dashboard.schemas import SchoolSummary, AdminSummary
from srms.database import get_db
from srms.models import School, User

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/dashboard",
    tags=["dashboard"],
)


@router.get("/schools/{school_id}", response_model=SchoolSummary)
def get_school_dashboard(
    school_id: int,
    year: Optional[int] = Query(None, description="Academic year; defaults to the current one"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Result summary for one school and academic year."""
    ensure_can_access(current_user, school_id)
    if db.query(School.id).filter(School.id == school_id).first() is None:
        raise HTTPException(status_code=404, detail="School not found")

    academic_year = year if year is not None else service.current_academic_year(db)
    return service.get_school_summary(db, school_id, academic_year)


@router.get("/admin", response_model=AdminSummary)
def get_admin_dashboard(
    year: Optional[int] = Query(None, description="Academic year; defaults to the current one"),
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    academic_year = year if year is not None else service.current_academic_year(db)
    logger.info(f"Building admin dashboard for year {academic_year}")
    return service.get_admin_summary(db, academic_year)
