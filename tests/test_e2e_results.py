import pytest


@pytest.fixture()
def enrolled(school_a_client, school_a, make_student, make_subject):
    """A student with English and Nepali assigned for 2082."""
    student = make_student(school_a, name="Sita Gurung")
    english, nepali = make_subject("English"), make_subject("Nepali")
    school_a_client.post(f"/api/subject-assignments/{student.student_system_id}/2082",
                         json={"subjectIds": [english.id, nepali.id]})
    return student, english, nepali


def sheet_for(client, student, year=2082):
    response = client.get(f"/api/results/{student.student_system_id}/{year}")
    assert response.status_code == 200, response.text
    return response.json()


def save_marks(client, student, entries):
    response = client.post(f"/api/marks/{student.student_system_id}/2082", json=entries)
    assert response.status_code == 200, response.text


def test_grade_sheet(school_a_client, enrolled):
    student, english, nepali = enrolled
    save_marks(school_a_client, student, [
        {"subjectId": english.id, "theoryObtained": 60, "practicalObtained": 20},
        {"subjectId": nepali.id, "theoryObtained": 72, "practicalObtained": 24},
    ])

    sheet = sheet_for(school_a_client, student)

    assert sheet["name"] == "Sita Gurung"
    english_row, nepali_row = sheet["subjects"]
    # 60/75 and 20/25 are both 80%
    assert (english_row["theoryGrade"], english_row["internalGrade"]) == ("A", "A")
    assert english_row["wgpa"] == 3.6
    assert english_row["finalGrade"] == "A"
    assert nepali_row["finalGrade"] == "A+"
    assert sheet["totalCredit"] == 8
    assert sheet["gpa"] == 3.8
    assert sheet["overallGrade"] == "A+"
    assert sheet["remarks"] == ""


def test_absent_subject_is_not_graded(school_a_client, enrolled):
    student, english, nepali = enrolled
    save_marks(school_a_client, student, [
        {"subjectId": english.id, "theoryObtained": 72, "practicalObtained": 24},
        {"subjectId": nepali.id, "isAbsent": True},
    ])

    sheet = sheet_for(school_a_client, student)

    nepali_row = sheet["subjects"][1]
    assert nepali_row["finalGrade"] == "NG"
    assert nepali_row["remarks"] == "Non-Graded"
    assert sheet["isAbsent"] is False
    assert sheet["gpa"] == 2.0
    assert sheet["remarks"] == "Non-Graded"


def test_student_absent_in_every_subject(school_a_client, enrolled):
    student, english, nepali = enrolled
    save_marks(school_a_client, student, [
        {"subjectId": english.id, "isAbsent": True},
        {"subjectId": nepali.id, "isAbsent": True},
    ])

    sheet = sheet_for(school_a_client, student)

    assert sheet["isAbsent"] is True
    assert sheet["gpa"] == 0
    assert sheet["overallGrade"] == "NG"


def test_subjects_without_marks_are_skipped(school_a_client, enrolled):
    student, english, nepali = enrolled
    save_marks(school_a_client, student, [{"subjectId": english.id, "theoryObtained": 72, "practicalObtained": 24}])

    sheet = sheet_for(school_a_client, student)

    assert [row["subjectId"] for row in sheet["subjects"]] == [english.id]


def test_extra_credit_subject_is_graded_outside_gpa(school_a_client, enrolled, make_subject):
    student, english, nepali = enrolled
    computer = make_subject("Computer")
    school_a_client.post(f"/api/subject-assignments/{student.student_system_id}/2082", json={
        "subjectIds": [english.id], "extraCreditSubjectId": computer.id,
    })
    save_marks(school_a_client, student, [
        {"subjectId": english.id, "theoryObtained": 60, "practicalObtained": 20},
        {"subjectId": computer.id, "theoryObtained": 0, "practicalObtained": 0},
    ])

    sheet = sheet_for(school_a_client, student)

    assert [row["subjectId"] for row in sheet["subjects"]] == [english.id]
    assert sheet["subjects"][0]["isExtraCredit"] is False
    assert sheet["totalCredit"] == 4
    assert sheet["gpa"] == 3.6
    assert sheet["overallGrade"] == "A"
    assert sheet["remarks"] == ""
    extra = sheet["extraCredit"]
    assert extra["subjectId"] == computer.id
    assert extra["isExtraCredit"] is True
    assert extra["finalGrade"] == "NG"


def test_extra_credit_without_marks_is_omitted(school_a_client, enrolled, make_subject):
    student, english, nepali = enrolled
    computer = make_subject("Computer")
    school_a_client.post(f"/api/subject-assignments/{student.student_system_id}/2082", json={
        "subjectIds": [english.id], "extraCreditSubjectId": computer.id,
    })
    save_marks(school_a_client, student, [{"subjectId": english.id, "theoryObtained": 60, "practicalObtained": 20}])

    assert sheet_for(school_a_client, student)["extraCredit"] is None


def test_grade_sheet_policy(school_b_client, enrolled):
    student, _, _ = enrolled

    assert school_b_client.get(f"/api/results/{student.student_system_id}/2082").status_code == 403
    assert school_b_client.get("/api/results/NOPE/2082").status_code == 404
