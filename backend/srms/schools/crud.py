from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
from srms.models import School, Student, User
from srms.schools.schemas import SchoolCreate, SchoolUpdate


def get_schools(db: Session) -> List[School]:
    return db.query(School).order_by(School.id).all()


def get_school(db: Session, school_id: int) -> Optional[School]:
    return db.query(School).filter(School.id == school_id).first()


def create_school(db: Session, school: SchoolCreate) -> School:
    db_school = School(**school.model_dump())
    db.add(db_school)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_school)
    return db_school


def update_school(db: Session, db_school: School, school: SchoolUpdate) -> School:
    for field, value in school.model_dump().items():
        setattr(db_school, field, value)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_school)
    return db_school


def count_dependents(db: Session, school_id: int) -> Tuple[int, int]:
    """Return (student_count, user_count) for a school."""
    student_count = db.query(Student).filter(Student.school_id == school_id).count()
    user_count = db.query(User).filter(User.school_id == school_id).count()
    return student_count, user_count


def delete_school(db: Session, db_school: School) -> None:
    db.delete(db_school)
    db.commit()
