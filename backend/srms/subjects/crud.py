from typing import List, Optional
from sqlalchemy.orm import Session

from srms.config.options import check_grade
from srms.dashboard.service import invalidate_all_summaries
from srms.models import Subject, StudentMark, StudentSubjectAssignment, StudentExtraCreditAssignment
from srms.subjects.schemas import SubjectCreate


class SubjectInUseError(Exception):
    """Raised when a subject still has marks or assignments."""


def _columns(subject: SubjectCreate) -> dict:
    return {
        'name': subject.name,
        'grade': check_grade(subject.grade),
        'theory_sub_code': subject.theory.sub_code,
        'theory_credit': subject.theory.credit,
        'theory_full_marks': subject.theory.full_marks,
        'theory_pass_marks': subject.theory.pass_marks,
        'internal_sub_code': subject.internal.sub_code,
        'internal_credit': subject.internal.credit,
        'internal_full_marks': subject.internal.full_marks,
        'internal_pass_marks': subject.internal.pass_marks,
    }


def get_subjects(db: Session, grade: Optional[int] = None) -> List[Subject]:
    query = db.query(Subject)
    if grade is not None:
        query = query.filter(Subject.grade == grade)
    return query.order_by(Subject.grade, Subject.id).all()


def get_subject(db: Session, subject_id: int) -> Optional[Subject]:
    return db.query(Subject).filter(Subject.id == subject_id).first()


def create_subject(db: Session, subject: SubjectCreate) -> Subject:
    db_subject = Subject(**_columns(subject))
    db.add(db_subject)
    db.commit()
    db.refresh(db_subject)
    return db_subject


def update_subject(db: Session, db_subject: Subject, subject: SubjectCreate) -> Subject:
    """Apply the new columns and drop cached dashboard summaries, which embed subject names."""
    for field, value in _columns(subject).items():
        setattr(db_subject, field, value)
    try:
        invalidate_all_summaries(db)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_subject)
    return db_subject


def is_subject_in_use(db: Session, subject_id: int) -> bool:
    for model in (StudentMark, StudentSubjectAssignment, StudentExtraCreditAssignment):
        if db.query(model.id).filter(model.subject_id == subject_id).first() is not None:
            return True
    return False


def delete_subject(db: Session, db_subject: Subject) -> None:
    if is_subject_in_use(db, db_subject.id):
        raise SubjectInUseError(f"Subject {db_subject.id} is referenced by marks or assignments")
    try:
        db.delete(db_subject)
        db.commit()
    except Exception:
        db.rollback()
        raise
