import logging
from typing import List
from sqlalchemy.orm import Session

from srms.dashboard.service import invalidate_school_summary
from srms.marks.schemas import MarkEntry
from srms.models import Student, StudentMark, Subject

logger = logging.getLogger(__name__)


def get_marks(db: Session, student_id: int, academic_year: int) -> List[StudentMark]:
    return (
        db.query(StudentMark)
        .filter(StudentMark.student_id == student_id, StudentMark.academic_year == academic_year)
        .order_by(StudentMark.subject_id)
        .all()
    )


def replace_marks(db: Session, student: Student, academic_year: int, entries: List[MarkEntry]) -> List[StudentMark]:
    """
    Replace every mark of a student for one year with ``entries``.

    Delete and inserts share one transaction, so a failure leaves the previous
    marks untouched.

    Raises:
        ValueError: On duplicate or unknown subject ids.
    """
    subject_ids = [entry.subject_id for entry in entries]
    if len(subject_ids) != len(set(subject_ids)):
        raise ValueError("Each subject may appear only once in a submission")
    if subject_ids:
        found = {row.id for row in db.query(Subject.id).filter(Subject.id.in_(subject_ids)).all()}
        missing = sorted(set(subject_ids) - found)
        if missing:
            raise ValueError(f"Unknown subject IDs: {', '.join(str(i) for i in missing)}")

    try:
        db.query(StudentMark).filter(
            StudentMark.student_id == student.id,
            StudentMark.academic_year == academic_year,
        ).delete(synchronize_session=False)

        rows = [
            StudentMark(
                student_id=student.id,
                subject_id=entry.subject_id,
                academic_year=academic_year,
                theory_obtained=None if entry.is_absent else entry.theory_obtained,
                practical_obtained=None if entry.is_absent else entry.practical_obtained,
                is_absent=entry.is_absent,
            )
            for entry in entries
        ]
        db.add_all(rows)
        invalidate_school_summary(db, student.school_id, academic_year)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Saved {len(entries)} marks for student {student.id}, year {academic_year}")
    return get_marks(db, student.id, academic_year)
