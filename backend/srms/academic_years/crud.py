from typing import List, Optional
from sqlalchemy.orm import Session
from srms.models import AcademicYear
from srms.academic_years.schemas import AcademicYearCreate, AcademicYearUpdate


def get_academic_years(db: Session, active_only: bool = False) -> List[AcademicYear]:
    query = db.query(AcademicYear)
    if active_only:
        query = query.filter(AcademicYear.is_active == True)  # noqa: E712
    return query.order_by(AcademicYear.year.desc()).all()


def get_academic_year(db: Session, academic_year_id: int) -> Optional[AcademicYear]:
    return db.query(AcademicYear).filter(AcademicYear.id == academic_year_id).first()


def get_academic_year_by_year(db: Session, year: int) -> Optional[AcademicYear]:
    return db.query(AcademicYear).filter(AcademicYear.year == year).first()


def create_academic_year(db: Session, academic_year: AcademicYearCreate) -> AcademicYear:
    db_year = AcademicYear(year=academic_year.year, is_active=academic_year.is_active)
    db.add(db_year)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_year)
    return db_year


def update_academic_year(db: Session, db_year: AcademicYear, academic_year: AcademicYearUpdate) -> AcademicYear:
    db_year.year = academic_year.year
    db_year.is_active = academic_year.is_active
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_year)
    return db_year


def set_active(db: Session, db_year: AcademicYear, is_active: Optional[bool]) -> AcademicYear:
    db_year.is_active = (not db_year.is_active) if is_active is None else is_active
    db.commit()
    db.refresh(db_year)
    return db_year


def delete_academic_year(db: Session, db_year: AcademicYear) -> None:
    db.delete(db_year)
    db.commit()
