import uuid
from typing import List, Optional
from sqlalchemy.orm import Session

from srms.config.options import check_grade
from srms.dashboard.service import invalidate_school_summary
from srms.models import Student
from srms.students.schemas import StudentCreate, StudentUpdate


def generate_student_system_id() -> str:
    return f"STU-{uuid.uuid4().hex[:12].upper()}"


def get_students(db: Session, school_id: Optional[int] = None, year: Optional[int] = None) -> List[Student]:
    query = db.query(Student)
    if school_id is not None:
        query = query.filter(Student.school_id == school_id)
    if year is not None:
        query = query.filter(Student.year == year)
    return query.order_by(Student.id).all()


def get_student(db: Session, student_id: int) -> Optional[Student]:
    return db.query(Student).filter(Student.id == student_id).first()


def get_student_by_system_id(db: Session, student_system_id: str) -> Optional[Student]:
    return db.query(Student).filter(Student.student_system_id == student_system_id).first()


def create_student(db: Session, student: StudentCreate, school_id: int) -> Student:
    """
    Insert a student for ``school_id``.

    Raises:
        ValueError: When the grade is not offered.
        sqlalchemy.exc.IntegrityError: On a duplicate symbol number or system id.
    """
    data = student.model_dump()
    data['grade'] = check_grade(data['grade'])
    data['school_id'] = school_id
    if not data.get('student_system_id'):
        data['student_system_id'] = generate_student_system_id()

    db_student = Student(**data)
    db.add(db_student)
    try:
        invalidate_school_summary(db, school_id, data['year'])
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_student)
    return db_student


def update_student(db: Session, db_student: Student, student: StudentUpdate, school_id: int) -> Student:
    data = student.model_dump()
    data['grade'] = check_grade(data['grade'])
    data['school_id'] = school_id
    if not data.get('student_system_id'):
        data['student_system_id'] = db_student.student_system_id

    previous_school_id = db_student.school_id
    for field, value in data.items():
        setattr(db_student, field, value)
    try:
        invalidate_school_summary(db, previous_school_id)
        if school_id != previous_school_id:
            invalidate_school_summary(db, school_id)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_student)
    return db_student


def delete_student(db: Session, db_student: Student) -> None:
    """Delete a student; marks and assignments go with it."""
    try:
        invalidate_school_summary(db, db_student.school_id)
        db.delete(db_student)
        db.commit()
    except Exception:
        db.rollback()
        raise
