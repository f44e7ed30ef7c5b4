import pytest

from srms import models


def student_payload(**overrides):
    payload = {
        "name": "Aarati Shrestha",
        "dob": "2007-04-14",
        "dobBs": "2064-01-01",
        "gender": "Female",
        "grade": 11,
        "rollNo": "7",
        "year": 2082,
        "symbolNo": "0123456789",
        "fatherName": "Bishnu Shrestha",
        "motherName": "Gita Shrestha",
        "mobileNo": "9812345678",
    }
    payload.update(overrides)
    return payload


def test_school_user_creates_student_in_own_school(school_a_client, school_a):
    response = school_a_client.post("/api/students", json=student_payload())

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["schoolId"] == school_a.id
    assert body["studentSystemId"].startswith("STU-")
    assert body["dob"] == "2007-04-14"
    assert body["symbolNo"] == "0123456789"


def test_school_user_cannot_create_student_for_other_school(school_a_client, school_b):
    response = school_a_client.post("/api/students", json=student_payload(schoolId=school_b.id))

    assert response.status_code == 403


def test_admin_must_name_school(admin_client, school_b):
    missing = admin_client.post("/api/students", json=student_payload())
    ok = admin_client.post("/api/students", json=student_payload(schoolId=school_b.id))

    assert missing.status_code == 400
    assert ok.status_code == 201
    assert ok.json()["schoolId"] == school_b.id


def test_duplicate_symbol_number_in_same_school_and_year(school_a_client):
    first = school_a_client.post("/api/students", json=student_payload())
    second = school_a_client.post("/api/students", json=student_payload(name="Someone Else"))

    assert first.status_code == 201
    assert second.status_code == 409


def test_same_symbol_number_allowed_in_other_year_or_school(school_a_client, school_b_client):
    assert school_a_client.post("/api/students", json=student_payload()).status_code == 201
    assert school_a_client.post("/api/students", json=student_payload(year=2083)).status_code == 201
    assert school_b_client.post("/api/students", json=student_payload()).status_code == 201


def test_duplicate_student_system_id(school_a_client):
    school_a_client.post("/api/students", json=student_payload(studentSystemId="STU-FIXED"))
    response = school_a_client.post("/api/students", json=student_payload(studentSystemId="STU-FIXED", symbolNo="999"))

    assert response.status_code == 409


def test_invalid_grade_is_rejected(school_a_client):
    assert school_a_client.post("/api/students", json=student_payload(grade=10)).status_code == 400


@pytest.mark.parametrize("field,value", [("gender", "Unknown"), ("year", 0), ("name", "  ")])
def test_student_field_validation(school_a_client, field, value):
    assert school_a_client.post("/api/students", json=student_payload(**{field: value})).status_code == 422


def test_school_user_requesting_other_schools_student_is_forbidden(school_a_client, school_b, make_student):
    other = make_student(school_b)

    assert school_a_client.get(f"/api/students/{other.id}").status_code == 403
    assert school_a_client.get(f"/api/students/system-id/{other.student_system_id}").status_code == 403
    assert school_a_client.put(f"/api/students/{other.id}", json=student_payload()).status_code == 403
    assert school_a_client.delete(f"/api/students/{other.id}").status_code == 403


def test_list_students_is_scoped(school_a_client, admin_client, school_a, school_b, make_student):
    make_student(school_a)
    make_student(school_b)
    make_student(school_b, year=2081)

    own = school_a_client.get("/api/students", params={"schoolId": school_b.id})
    everything = admin_client.get("/api/students")
    filtered = admin_client.get("/api/students", params={"schoolId": school_b.id, "year": 2082})

    assert {s["schoolId"] for s in own.json()} == {school_a.id}
    assert len(everything.json()) == 3
    assert len(filtered.json()) == 1


def test_students_by_school(school_a_client, school_a, school_b, make_student):
    make_student(school_a)

    assert len(school_a_client.get(f"/api/students/school/{school_a.id}").json()) == 1
    assert school_a_client.get(f"/api/students/school/{school_b.id}").status_code == 403


def test_resolve_system_id(school_a_client, school_a, make_student):
    student = make_student(school_a)

    response = school_a_client.get(f"/api/students/system-id/{student.student_system_id}")

    assert response.status_code == 200
    assert response.json() == {"id": student.id}
    assert school_a_client.get("/api/students/system-id/UNKNOWN").status_code == 404


def test_update_student(school_a_client, school_a, make_student):
    student = make_student(school_a)

    response = school_a_client.put(f"/api/students/{student.id}", json=student_payload(name="Renamed Student"))

    assert response.status_code == 200, response.text
    assert response.json()["name"] == "Renamed Student"
    assert response.json()["studentSystemId"] == student.student_system_id


def test_school_user_cannot_move_student_to_other_school(school_a_client, school_a, school_b, make_student):
    student = make_student(school_a)

    response = school_a_client.put(f"/api/students/{student.id}", json=student_payload(schoolId=school_b.id))

    assert response.status_code == 403


def test_delete_student_cascades_marks(school_a_client, db, school_a, make_student, make_subject):
    student = make_student(school_a)
    subject = make_subject()
    school_a_client.post(f"/api/marks/{student.student_system_id}/2082", json=[
        {"subjectId": subject.id, "theoryObtained": 60, "practicalObtained": 20},
    ])

    response = school_a_client.delete(f"/api/students/{student.id}")

    assert response.status_code == 200
    assert db.query(models.StudentMark).count() == 0
    assert school_a_client.get(f"/api/students/{student.id}").status_code == 404
