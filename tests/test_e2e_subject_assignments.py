from srms import models


def url(student, year=2082):
    return f"/api/subject-assignments/{student.student_system_id}/{year}"


def test_empty_assignments(school_a_client, school_a, make_student):
    student = make_student(school_a)

    response = school_a_client.get(url(student))

    assert response.status_code == 200
    assert response.json() == {"subjectIds": [], "extraCreditSubjectId": None}


def test_save_replaces_previous_set(school_a_client, db, school_a, make_student, make_subject):
    student = make_student(school_a)
    english, nepali, maths = make_subject("English"), make_subject("Nepali"), make_subject("Maths")

    first = school_a_client.post(url(student), json={"subjectIds": [english.id, nepali.id]})
    second = school_a_client.post(url(student), json={"subjectIds": [maths.id, english.id]})

    assert first.status_code == 200, first.text
    assert second.json()["subjectIds"] == sorted([maths.id, english.id])
    assert school_a_client.get(url(student)).json()["subjectIds"] == sorted([maths.id, english.id])
    assert db.query(models.StudentSubjectAssignment).count() == 2


def test_saving_same_set_twice_is_stable(school_a_client, school_a, make_student, make_subject):
    student = make_student(school_a)
    ids = [make_subject("English").id, make_subject("Nepali").id]

    school_a_client.post(url(student), json={"subjectIds": ids})
    school_a_client.post(url(student), json={"subjectIds": ids})

    assert school_a_client.get(url(student)).json()["subjectIds"] == sorted(ids)


def test_duplicate_ids_collapse(school_a_client, school_a, make_student, make_subject):
    student = make_student(school_a)
    english = make_subject("English")

    response = school_a_client.post(url(student), json={"subjectIds": [english.id, english.id]})

    assert response.status_code == 200
    assert response.json()["subjectIds"] == [english.id]


def test_extra_credit_subject(school_a_client, school_a, make_student, make_subject):
    student = make_student(school_a)
    english, computer = make_subject("English"), make_subject("Computer")

    school_a_client.post(url(student), json={"subjectIds": [english.id], "extraCreditSubjectId": computer.id})
    cleared = school_a_client.post(url(student), json={"subjectIds": [english.id]})

    assert cleared.json()["extraCreditSubjectId"] is None
    assert school_a_client.get(url(student)).json()["extraCreditSubjectId"] is None


def test_extra_credit_subject_is_returned(school_a_client, school_a, make_student, make_subject):
    student = make_student(school_a)
    english, computer = make_subject("English"), make_subject("Computer")

    school_a_client.post(url(student), json={"subjectIds": [english.id], "extraCreditSubjectId": computer.id})

    assert school_a_client.get(url(student)).json() == {
        "subjectIds": [english.id], "extraCreditSubjectId": computer.id,
    }


def test_unknown_subject_leaves_assignments_untouched(school_a_client, school_a, make_student, make_subject):
    student = make_student(school_a)
    english = make_subject("English")
    school_a_client.post(url(student), json={"subjectIds": [english.id]})

    response = school_a_client.post(url(student), json={"subjectIds": [english.id, 9999]})

    assert response.status_code == 400
    assert "9999" in response.json()["detail"]
    assert school_a_client.get(url(student)).json()["subjectIds"] == [english.id]


def test_assignments_are_per_year(school_a_client, school_a, make_student, make_subject):
    student = make_student(school_a)
    english = make_subject("English")

    school_a_client.post(url(student, 2082), json={"subjectIds": [english.id]})

    assert school_a_client.get(url(student, 2083)).json()["subjectIds"] == []


def test_tenant_policy(school_b_client, admin_client, school_a, make_student, make_subject):
    student = make_student(school_a)
    english = make_subject("English")

    assert school_b_client.get(url(student)).status_code == 403
    assert school_b_client.post(url(student), json={"subjectIds": [english.id]}).status_code == 403
    assert admin_client.post(url(student), json={"subjectIds": [english.id]}).status_code == 200


def test_unknown_student_and_bad_year(school_a_client, school_a, make_student):
    student = make_student(school_a)

    assert school_a_client.get("/api/subject-assignments/NOPE/2082").status_code == 404
    assert school_a_client.get(url(student, 0)).status_code == 400
