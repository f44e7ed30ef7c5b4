import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from srms.auth.dependencies import get_current_user
from srms.database import get_db
from srms.grading.calculator import grade_sheet, grade_extra_credit
from srms.grading.schemas import GradeSheet
from srms.marks.crud import get_marks
from srms.models import Subject, User
from srms.students.router import load_student_for_user
from srms.subject_assignments.crud import get_assignments
from srms.subject_assignments.router import check_academic_year

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/results",
    tags=["results"],
    responses={404: {"description": "Not found"}},
)


@router.get("/{student_system_id}/{year}", response_model=GradeSheet)
def get_grade_sheet(
    student_system_id: str,
    year: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    NEB grade sheet for one student and year, computed from the assigned
    subjects and the stored marks. The extra-credit subject is graded on its
    own and left out of the credit total and GPA.
    """
    check_academic_year(year)
    student = load_student_for_user(db, current_user, student_system_id)

    subject_ids, extra_credit_subject_id = get_assignments(db, student.id, year)
    wanted_ids = set(subject_ids)
    if extra_credit_subject_id is not None:
        wanted_ids.add(extra_credit_subject_id)

    subjects_by_id = {}
    if wanted_ids:
        subjects_by_id = {s.id: s for s in db.query(Subject).filter(Subject.id.in_(wanted_ids)).all()}
    subjects = [subjects_by_id[i] for i in subject_ids if i in subjects_by_id]

    marks_by_subject = {m.subject_id: m for m in get_marks(db, student.id, year)}
    sheet = grade_sheet(subjects, marks_by_subject)

    extra_credit = None
    extra_subject = subjects_by_id.get(extra_credit_subject_id)
    if extra_subject is not None and extra_subject.id in marks_by_subject:
        extra_credit = grade_extra_credit(extra_subject, marks_by_subject[extra_subject.id])

    logger.info(f"Grade sheet for student {student.id}, year {year}: GPA {sheet['gpa']}")
    return {
        "student_id": student.id,
        "student_system_id": student.student_system_id,
        "name": student.name,
        "symbol_no": student.symbol_no,
        "grade": student.grade,
        "school_id": student.school_id,
        "academic_year": year,
        **sheet,
        "extra_credit": extra_credit,
    }
