import pytest
from sqlalchemy.exc import OperationalError

from srms.config.options import check_grade
from srms.database import get_db


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["environment"] == "development"


def test_database_health(client):
    response = client.get("/api/health/db")

    assert response.status_code == 200
    assert response.json()["checks"]["database"]["connected"] is True


def test_database_health_when_unreachable(app, client):
    class BrokenSession:
        def execute(self, *args, **kwargs):
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    app.dependency_overrides[get_db] = lambda: BrokenSession()

    response = client.get("/api/health/db")

    assert response.status_code == 503
    assert response.json()["status"] == "unhealthy"


@pytest.mark.parametrize("grade", [11, 12, "12"])
def test_check_grade_accepts_offered_grades(grade):
    assert check_grade(grade) in (11, 12)


@pytest.mark.parametrize("grade", [10, 13, None, "eleven"])
def test_check_grade_rejects_others(grade):
    with pytest.raises(ValueError, match="Grade must be 11 or 12"):
        check_grade(grade)


def test_config_options(client):
    response = client.get("/api/config/options")

    assert response.status_code == 200
    body = response.json()
    assert body["grades"] == [11, 12]
    assert body["genders"] == ["Male", "Female", "Other"]
    assert body["roles"] == ["admin", "school"]
