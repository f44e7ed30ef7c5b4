"""
Grade computation.

Two calculations live here:

* the dashboard GPA, a quick estimate used for school summaries
  (average of (theory + practical) / 2 across non-absent subjects, over 25,
  capped at 4.0);
* the NEB grade sheet, where each component's percentage of full marks maps to
  a grade point and the subject and overall GPAs are credit-weighted.
"""
from typing import Dict, Iterable, List, Optional, Tuple

GRADED = "GRADED"
NOT_GRADED = "NG"

MAX_GPA = 4.0
DASHBOARD_GPA_DIVISOR = 25.0

# (minimum percentage, grade point, letter), highest first
PERCENTAGE_SCALE: List[Tuple[float, float, str]] = [
    (90, 4.0, "A+"),
    (80, 3.6, "A"),
    (70, 3.2, "B+"),
    (60, 2.8, "B"),
    (50, 2.4, "C+"),
    (40, 2.0, "C"),
    (35, 1.6, "D"),
]

# (minimum weighted grade point, letter), highest first
WGPA_SCALE: List[Tuple[float, str]] = [
    (3.61, "A+"),
    (3.21, "A"),
    (2.81, "B+"),
    (2.41, "B"),
    (2.01, "C+"),
    (1.61, "C"),
    (1.21, "D"),
]


def _number(value) -> float:
    return float(value) if value is not None else 0.0


def dashboard_gpa(marks: Iterable) -> Optional[float]:
    """
    GPA estimate over the marks that are not flagged absent.

    ``marks`` holds objects with ``theory_obtained``, ``practical_obtained`` and
    ``is_absent``. Returns None when no subject is graded.
    """
    scores = [
        (_number(m.theory_obtained) + _number(m.practical_obtained)) / 2
        for m in marks
        if not m.is_absent
    ]
    if not scores:
        return None
    gpa = (sum(scores) / len(scores)) / DASHBOARD_GPA_DIVISOR
    return min(gpa, MAX_GPA)


def classify(gpa: Optional[float]) -> str:
    if gpa is None or gpa <= 0:
        return NOT_GRADED
    return GRADED


def grade_from_percentage(percentage: float) -> Tuple[float, str]:
    for minimum, point, letter in PERCENTAGE_SCALE:
        if percentage >= minimum:
            return point, letter
    return 0.0, NOT_GRADED


def grade_from_wgpa(wgpa: float) -> str:
    for minimum, letter in WGPA_SCALE:
        if wgpa >= minimum:
            return letter
    return NOT_GRADED


def subject_remarks(final_grade: str) -> str:
    return "Non-Graded" if final_grade == NOT_GRADED else ""


def _percentage(obtained: float, full_marks: float) -> float:
    if not full_marks or full_marks <= 0:
        return 0.0
    return obtained / full_marks * 100


def grade_subject(subject, mark) -> Dict:
    """
    Grade one subject from its theory and internal (practical) components.

    An absent mark, or no mark at all, grades both components NG.
    """
    absent = mark is None or mark.is_absent
    theory_obtained = 0.0 if absent else _number(mark.theory_obtained)
    internal_obtained = 0.0 if absent else _number(mark.practical_obtained)

    theory_point, theory_grade = grade_from_percentage(
        _percentage(theory_obtained, subject.theory_full_marks))
    internal_point, internal_grade = grade_from_percentage(
        _percentage(internal_obtained, subject.internal_full_marks))

    theory_credit = _number(subject.theory_credit)
    internal_credit = _number(subject.internal_credit)
    credit = theory_credit + internal_credit
    weighted_points = theory_credit * theory_point + internal_credit * internal_point
    wgpa = weighted_points / credit if credit > 0 else 0.0

    if absent:
        final_grade = NOT_GRADED
    else:
        final_grade = grade_from_wgpa(wgpa)

    return {
        "subject_id": subject.id,
        "name": subject.name,
        "theory_sub_code": subject.theory_sub_code,
        "internal_sub_code": subject.internal_sub_code,
        "theory_credit": theory_credit,
        "internal_credit": internal_credit,
        "theory_obtained": theory_obtained,
        "internal_obtained": internal_obtained,
        "total_obtained": theory_obtained + internal_obtained,
        "theory_grade": theory_grade,
        "internal_grade": internal_grade,
        "theory_grade_point": theory_point,
        "internal_grade_point": internal_point,
        "wgpa": round(wgpa, 2),
        "final_grade": final_grade,
        "is_absent": absent,
        "remarks": subject_remarks(final_grade),
        "_weighted_points": weighted_points,
        "_credit": credit,
    }


def grade_sheet(subjects: List, marks_by_subject: Dict[int, object]) -> Dict:
    """
    Build a student's grade sheet for the assigned ``subjects``.

    Subjects without a mark are skipped. When every mark is absent the student
    is absent: GPA 0 and NG.
    """
    graded = [grade_subject(s, marks_by_subject[s.id]) for s in subjects if s.id in marks_by_subject]

    student_absent = bool(graded) and all(row["is_absent"] for row in graded)
    total_credit = sum(row.pop("_credit") for row in graded)
    total_points = sum(row.pop("_weighted_points") for row in graded)

    if student_absent or total_credit <= 0:
        gpa = 0.0
    else:
        gpa = total_points / total_credit

    any_failed = any(row["final_grade"] == NOT_GRADED for row in graded)
    if gpa <= 0 or not graded:
        overall_grade = NOT_GRADED
    else:
        overall_grade = grade_from_wgpa(gpa)

    return {
        "subjects": graded,
        "total_credit": total_credit,
        "gpa": round(gpa, 2),
        "overall_grade": overall_grade,
        "is_absent": student_absent,
        "remarks": "Non-Graded" if any_failed or overall_grade == NOT_GRADED else "",
    }


def grade_extra_credit(subject, mark) -> Dict:
    """Grade the optional extra-credit subject. It never counts toward the GPA."""
    row = grade_subject(subject, mark)
    row.pop("_weighted_points")
    row.pop("_credit")
    row["is_extra_credit"] = True
    return row
