def url(student, year=2082):
    return f"/api/marks/{student.student_system_id}/{year}"


def test_save_and_read_marks(school_a_client, school_a, make_student, make_subject):
    student = make_student(school_a)
    english, nepali = make_subject("English"), make_subject("Nepali")

    response = school_a_client.post(url(student), json=[
        {"subjectId": english.id, "theoryObtained": 60, "practicalObtained": 20},
        {"subjectId": nepali.id, "isAbsent": True, "theoryObtained": 50},
    ])

    assert response.status_code == 200, response.text
    marks = school_a_client.get(url(student)).json()
    assert [(m["subjectId"], m["theoryObtained"], m["isAbsent"]) for m in marks] == [
        (english.id, 60.0, False),
        (nepali.id, None, True),
    ]


def test_save_replaces_all_marks_for_year(school_a_client, school_a, make_student, make_subject):
    student = make_student(school_a)
    english, nepali = make_subject("English"), make_subject("Nepali")
    school_a_client.post(url(student), json=[
        {"subjectId": english.id, "theoryObtained": 60, "practicalObtained": 20},
        {"subjectId": nepali.id, "theoryObtained": 55, "practicalObtained": 18},
    ])

    school_a_client.post(url(student), json=[{"subjectId": english.id, "theoryObtained": 70, "practicalObtained": 22}])

    marks = school_a_client.get(url(student)).json()
    assert len(marks) == 1
    assert marks[0]["theoryObtained"] == 70.0


def test_other_years_are_untouched(school_a_client, school_a, make_student, make_subject):
    student = make_student(school_a)
    english = make_subject("English")
    school_a_client.post(url(student, 2081), json=[{"subjectId": english.id, "theoryObtained": 40}])

    school_a_client.post(url(student, 2082), json=[])

    assert len(school_a_client.get(url(student, 2081)).json()) == 1


def test_duplicate_subject_in_submission(school_a_client, school_a, make_student, make_subject):
    student = make_student(school_a)
    english = make_subject("English")

    response = school_a_client.post(url(student), json=[
        {"subjectId": english.id, "theoryObtained": 60},
        {"subjectId": english.id, "theoryObtained": 65},
    ])

    assert response.status_code == 400
    assert response.json()["detail"] == "Each subject may appear only once in a submission"


def test_failed_submission_keeps_previous_marks(school_a_client, school_a, make_student, make_subject):
    student = make_student(school_a)
    english = make_subject("English")
    school_a_client.post(url(student), json=[{"subjectId": english.id, "theoryObtained": 60}])

    response = school_a_client.post(url(student), json=[{"subjectId": 9999, "theoryObtained": 10}])

    assert response.status_code == 400
    marks = school_a_client.get(url(student)).json()
    assert [m["subjectId"] for m in marks] == [english.id]


def test_negative_marks_are_rejected(school_a_client, school_a, make_student, make_subject):
    student = make_student(school_a)
    english = make_subject("English")

    response = school_a_client.post(url(student), json=[{"subjectId": english.id, "theoryObtained": -5}])

    assert response.status_code == 422


def test_marks_tenant_policy(school_b_client, school_a, make_student, make_subject):
    student = make_student(school_a)
    english = make_subject("English")

    assert school_b_client.get(url(student)).status_code == 403
    assert school_b_client.post(url(student), json=[{"subjectId": english.id}]).status_code == 403


def test_marks_for_unknown_student(school_a_client):
    assert school_a_client.get("/api/marks/NOPE/2082").status_code == 404
