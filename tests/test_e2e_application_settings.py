def test_bulk_save_creates_and_updates(admin_client):
    first = admin_client.post("/api/application-settings", json={
        "settings": {"current_academic_year": 2081, "school_logo": {"url": "/logo.png"}},
    })
    second = admin_client.post("/api/application-settings", json={
        "settings": {"current_academic_year": 2082},
    })

    assert first.status_code == 200, first.text
    assert second.status_code == 200
    settings = {s["key"]: s["value"] for s in admin_client.get("/api/application-settings").json()}
    assert settings == {"current_academic_year": 2082, "school_logo": {"url": "/logo.png"}}


def test_get_single_setting(school_a_client, admin_client):
    admin_client.post("/api/application-settings", json={"settings": {"result_publish": True}})

    response = school_a_client.get("/api/application-settings/result_publish")

    assert response.status_code == 200
    assert response.json() == {"key": "result_publish", "value": True}
    assert school_a_client.get("/api/application-settings/missing").status_code == 404


def test_put_single_setting(admin_client):
    response = admin_client.put("/api/application-settings/exam_title", json={
        "value": "Final Examination", "description": "Heading printed on grade sheets",
    })

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["key"] == "exam_title"
    assert body["value"] == "Final Examination"
    assert body["description"] == "Heading printed on grade sheets"


def test_school_user_cannot_write_settings(school_a_client):
    assert school_a_client.post("/api/application-settings", json={"settings": {"x": 1}}).status_code == 403
    assert school_a_client.put("/api/application-settings/x", json={"value": 1}).status_code == 403


def test_empty_key_is_rejected(admin_client):
    response = admin_client.post("/api/application-settings", json={"settings": {" ": 1}})

    assert response.status_code == 400


def test_settings_require_authentication(client):
    assert client.get("/api/application-settings").status_code == 401
