import logging
from collections import Counter, defaultdict
from typing import Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from srms.config.settings import settings
from srms.grading.calculator import dashboard_gpa, classify, NOT_GRADED
from srms.models import (
    ApplicationSetting,
    School,
    SchoolResultSummary,
    Student,
    StudentMark,
    StudentSubjectAssignment,
    Subject,
)

logger = logging.getLogger(__name__)

CURRENT_YEAR_SETTING = "current_academic_year"
TOP_N = 5


def current_academic_year(db: Session) -> int:
    """The configured current academic year, falling back to DEFAULT_ACADEMIC_YEAR."""
    setting = db.query(ApplicationSetting).filter(ApplicationSetting.key == CURRENT_YEAR_SETTING).first()
    if setting is not None and setting.value is not None:
        try:
            return int(setting.value)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring non-numeric {CURRENT_YEAR_SETTING} setting: {setting.value!r}")
    return settings.DEFAULT_ACADEMIC_YEAR


def invalidate_school_summary(db: Session, school_id: int, academic_year: Optional[int] = None) -> None:
    """
    Drop cached summaries for a school. Runs inside the caller's transaction.
    """
    query = db.query(SchoolResultSummary).filter(SchoolResultSummary.school_id == school_id)
    if academic_year is not None:
        query = query.filter(SchoolResultSummary.academic_year == academic_year)
    query.delete(synchronize_session=False)


def invalidate_all_summaries(db: Session) -> None:
    """Drop every cached summary, e.g. after a shared subject changes."""
    db.query(SchoolResultSummary).delete(synchronize_session=False)


def _student_brief(student: Student, gpa: Optional[float] = None) -> Dict:
    brief = {
        "id": student.id,
        "student_system_id": student.student_system_id,
        "name": student.name,
        "symbol_no": student.symbol_no,
        "grade": student.grade,
    }
    if gpa is not None:
        brief["gpa"] = round(gpa, 2)
    return brief


def _average(values: List[float]) -> Optional[float]:
    if not values:
        return None
    return round(sum(values) / len(values), 2)


def compute_school_summary(db: Session, school_id: int, academic_year: int) -> Dict:
    """Aggregate a school's students, marks and assignments for one academic year."""
    students = (
        db.query(Student)
        .filter(Student.school_id == school_id, Student.year == academic_year)
        .order_by(Student.id)
        .all()
    )
    student_ids = [s.id for s in students]

    marks_by_student: Dict[int, List[StudentMark]] = defaultdict(list)
    assigned_by_student: Dict[int, List[int]] = defaultdict(list)
    if student_ids:
        marks = (
            db.query(StudentMark)
            .filter(StudentMark.student_id.in_(student_ids), StudentMark.academic_year == academic_year)
            .all()
        )
        for mark in marks:
            marks_by_student[mark.student_id].append(mark)

        assignments = (
            db.query(StudentSubjectAssignment)
            .filter(
                StudentSubjectAssignment.student_id.in_(student_ids),
                StudentSubjectAssignment.academic_year == academic_year,
            )
            .all()
        )
        for assignment in assignments:
            assigned_by_student[assignment.student_id].append(assignment.subject_id)

    gender_counts = Counter(s.gender for s in students)
    graded = []
    ng_students = []
    gpas_by_grade: Dict[int, List[float]] = defaultdict(list)
    students_by_grade = Counter(s.grade for s in students)
    without_subjects = 0
    unsubmitted = 0
    subject_counts = Counter()

    for student in students:
        gpa = dashboard_gpa(marks_by_student.get(student.id, []))
        if classify(gpa) == NOT_GRADED:
            ng_students.append(student)
        else:
            graded.append((student, gpa))
            gpas_by_grade[student.grade].append(gpa)

        assigned = set(assigned_by_student.get(student.id, []))
        subject_counts.update(assigned)
        if not assigned:
            without_subjects += 1
        else:
            marked = {m.subject_id for m in marks_by_student.get(student.id, [])}
            if not assigned.issubset(marked):
                unsubmitted += 1

    top_students = sorted(graded, key=lambda pair: pair[1], reverse=True)[:TOP_N]

    top_subject_ids = [subject_id for subject_id, _ in subject_counts.most_common(TOP_N)]
    subject_names = {}
    if top_subject_ids:
        subject_names = {
            s.id: s.name
            for s in db.query(Subject).filter(Subject.id.in_(top_subject_ids)).all()
        }

    return {
        "school_id": school_id,
        "academic_year": academic_year,
        "total_students": len(students),
        "gender_counts": {
            "male": gender_counts.get("Male", 0),
            "female": gender_counts.get("Female", 0),
            "other": gender_counts.get("Other", 0),
        },
        "graded_count": len(graded),
        "ng_count": len(ng_students),
        "average_gpa": _average([gpa for _, gpa in graded]),
        "ng_students": [_student_brief(s) for s in ng_students[:TOP_N]],
        "top_students": [_student_brief(s, gpa) for s, gpa in top_students],
        "grade_wise": [
            {
                "grade": grade,
                "student_count": students_by_grade[grade],
                "average_gpa": _average(gpas_by_grade.get(grade, [])),
            }
            for grade in sorted(students_by_grade)
        ],
        "students_without_subjects": without_subjects,
        "students_with_unsubmitted_marks": unsubmitted,
        "top_subjects": [
            {
                "subject_id": subject_id,
                "name": subject_names.get(subject_id, ""),
                "student_count": subject_counts[subject_id],
            }
            for subject_id in top_subject_ids
        ],
    }


def get_school_summary(db: Session, school_id: int, academic_year: int) -> Dict:
    """
    Return the cached summary for (school, year), computing and storing it on a miss.
    """
    cached = (
        db.query(SchoolResultSummary)
        .filter(
            SchoolResultSummary.school_id == school_id,
            SchoolResultSummary.academic_year == academic_year,
        )
        .first()
    )
    if cached is not None:
        return cached.summary

    summary = compute_school_summary(db, school_id, academic_year)
    db.add(SchoolResultSummary(school_id=school_id, academic_year=academic_year, summary=summary))
    try:
        db.commit()
        logger.info(f"Cached result summary for school {school_id}, year {academic_year}")
    except IntegrityError:
        # A concurrent request stored the same summary first
        db.rollback()
    return summary


def get_admin_summary(db: Session, academic_year: int) -> Dict:
    """Per-school rows plus totals, built from the per-school summaries."""
    schools = db.query(School).order_by(School.id).all()
    rows = []
    total_students = 0
    total_graded = 0
    total_ng = 0
    weighted_gpa = 0.0

    for school in schools:
        summary = get_school_summary(db, school.id, academic_year)
        rows.append({
            "school_id": school.id,
            "school_name": school.name,
            "iemis_code": school.iemis_code,
            "status": school.status,
            "total_students": summary["total_students"],
            "graded_count": summary["graded_count"],
            "ng_count": summary["ng_count"],
            "average_gpa": summary["average_gpa"],
        })
        total_students += summary["total_students"]
        total_graded += summary["graded_count"]
        total_ng += summary["ng_count"]
        if summary["average_gpa"] is not None:
            weighted_gpa += summary["average_gpa"] * summary["graded_count"]

    return {
        "academic_year": academic_year,
        "total_schools": len(schools),
        "active_schools": sum(1 for s in schools if s.status == "Active"),
        "total_students": total_students,
        "graded_count": total_graded,
        "ng_count": total_ng,
        "average_gpa": round(weighted_gpa / total_graded, 2) if total_graded else None,
        "schools": rows,
    }
