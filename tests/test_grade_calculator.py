from types import SimpleNamespace

import pytest

from srms.grading.calculator import (
    NOT_GRADED,
    classify,
    dashboard_gpa,
    grade_from_percentage,
    grade_extra_credit,
    grade_from_wgpa,
    grade_sheet,
    grade_subject,
)


def mark(theory=None, practical=None, absent=False, subject_id=1):
    return SimpleNamespace(subject_id=subject_id, theory_obtained=theory,
                           practical_obtained=practical, is_absent=absent)


def subject(subject_id=1, theory_credit=3.0, internal_credit=1.0, theory_full=75.0, internal_full=25.0):
    return SimpleNamespace(
        id=subject_id, name=f"Subject {subject_id}",
        theory_sub_code=f"T{subject_id}", internal_sub_code=f"I{subject_id}",
        theory_credit=theory_credit, internal_credit=internal_credit,
        theory_full_marks=theory_full, internal_full_marks=internal_full,
    )


@pytest.mark.parametrize("percentage,expected", [
    (100, (4.0, "A+")),
    (90, (4.0, "A+")),
    (89.99, (3.6, "A")),
    (70, (3.2, "B+")),
    (50, (2.4, "C+")),
    (35, (1.6, "D")),
    (34.9, (0.0, NOT_GRADED)),
    (0, (0.0, NOT_GRADED)),
])
def test_grade_from_percentage(percentage, expected):
    assert grade_from_percentage(percentage) == expected


@pytest.mark.parametrize("wgpa,expected", [
    (4.0, "A+"),
    (3.61, "A+"),
    (3.6, "A"),
    (2.41, "B"),
    (1.21, "D"),
    (1.2, NOT_GRADED),
])
def test_grade_from_wgpa(wgpa, expected):
    assert grade_from_wgpa(wgpa) == expected


def test_dashboard_gpa_ignores_absent_subjects():
    gpa = dashboard_gpa([mark(80, 20), mark(absent=True), mark(None, 40)])

    # ((80 + 20) / 2 + (0 + 40) / 2) / 2 / 25
    assert gpa == pytest.approx(1.4)


def test_dashboard_gpa_without_graded_subjects():
    assert dashboard_gpa([]) is None
    assert dashboard_gpa([mark(absent=True)]) is None
    assert classify(None) == NOT_GRADED
    assert classify(0) == NOT_GRADED
    assert classify(2.5) == "GRADED"


def test_grade_subject_without_credits():
    row = grade_subject(subject(theory_credit=0, internal_credit=0), mark(50, 20))

    assert row["wgpa"] == 0
    assert row["final_grade"] == NOT_GRADED


def test_grade_subject_with_zero_full_marks():
    row = grade_subject(subject(internal_full=0), mark(75, 10))

    assert row["theory_grade"] == "A+"
    assert row["internal_grade"] == NOT_GRADED


def test_missing_mark_grades_as_absent():
    row = grade_subject(subject(), None)

    assert row["is_absent"] is True
    assert row["final_grade"] == NOT_GRADED


def test_grade_sheet_weights_by_credit():
    subjects = [subject(1), subject(2, theory_credit=4.0, internal_credit=0.0)]
    sheet = grade_sheet(subjects, {
        1: mark(75, 25, subject_id=1),
        2: mark(37.5, 0, subject_id=2),
    })

    # subject 1: 4 credits at 4.0; subject 2: 4 credits at 2.4 (50%)
    assert sheet["total_credit"] == 8
    assert sheet["gpa"] == 3.2
    assert sheet["overall_grade"] == "B+"
    assert all("_credit" not in row for row in sheet["subjects"])


def test_empty_grade_sheet():
    sheet = grade_sheet([subject()], {})

    assert sheet["subjects"] == []
    assert sheet["gpa"] == 0
    assert sheet["overall_grade"] == NOT_GRADED
    assert sheet["is_absent"] is False


def test_extra_credit_row_carries_no_gpa_weights():
    row = grade_extra_credit(subject(), mark(60, 20))

    assert row["is_extra_credit"] is True
    assert row["final_grade"] == "A"
    assert "_credit" not in row and "_weighted_points" not in row
