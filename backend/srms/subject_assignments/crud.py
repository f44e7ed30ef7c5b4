import logging
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session

from srms.dashboard.service import invalidate_school_summary
from srms.models import Student, Subject, StudentSubjectAssignment, StudentExtraCreditAssignment

logger = logging.getLogger(__name__)


def get_assignments(db: Session, student_id: int, academic_year: int) -> Tuple[List[int], Optional[int]]:
    subject_ids = [
        row.subject_id
        for row in db.query(StudentSubjectAssignment)
        .filter(
            StudentSubjectAssignment.student_id == student_id,
            StudentSubjectAssignment.academic_year == academic_year,
        )
        .order_by(StudentSubjectAssignment.subject_id)
        .all()
    ]
    extra = (
        db.query(StudentExtraCreditAssignment)
        .filter(
            StudentExtraCreditAssignment.student_id == student_id,
            StudentExtraCreditAssignment.academic_year == academic_year,
        )
        .first()
    )
    return subject_ids, extra.subject_id if extra else None


def replace_assignments(
    db: Session,
    student: Student,
    subject_ids: List[int],
    extra_credit_subject_id: Optional[int],
    academic_year: int,
) -> Tuple[List[int], Optional[int]]:
    """
    Replace a student's subjects and optional extra-credit subject for one year.

    Everything happens in one transaction. Duplicate ids are collapsed.

    Raises:
        ValueError: When any subject id does not exist.
    """
    unique_ids = sorted(set(subject_ids))
    wanted = set(unique_ids)
    if extra_credit_subject_id is not None:
        wanted.add(extra_credit_subject_id)
    if wanted:
        found = {row.id for row in db.query(Subject.id).filter(Subject.id.in_(wanted)).all()}
        missing = sorted(wanted - found)
        if missing:
            raise ValueError(f"Unknown subject IDs: {', '.join(str(i) for i in missing)}")

    try:
        db.query(StudentSubjectAssignment).filter(
            StudentSubjectAssignment.student_id == student.id,
            StudentSubjectAssignment.academic_year == academic_year,
        ).delete(synchronize_session=False)
        db.query(StudentExtraCreditAssignment).filter(
            StudentExtraCreditAssignment.student_id == student.id,
            StudentExtraCreditAssignment.academic_year == academic_year,
        ).delete(synchronize_session=False)

        db.add_all([
            StudentSubjectAssignment(student_id=student.id, subject_id=subject_id, academic_year=academic_year)
            for subject_id in unique_ids
        ])
        if extra_credit_subject_id is not None:
            db.add(StudentExtraCreditAssignment(
                student_id=student.id,
                subject_id=extra_credit_subject_id,
                academic_year=academic_year,
            ))

        invalidate_school_summary(db, student.school_id, academic_year)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Saved {len(unique_ids)} subject assignments for student {student.id}, year {academic_year}")
    return unique_ids, extra_credit_subject_id
