import os
import pytest

# Settings are read at import time
os.environ.setdefault("APP_ENV", "development")
os.environ.setdefault("EMAIL_SERVICE", "console")
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-srms-tests-0123456789")

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from srms.auth.service import auth_service
from srms.config.settings import settings
from srms.database import Base, get_db
from srms.main import create_app
from srms import models


@pytest.fixture()
def engine():
    """In-memory SQLite database with foreign keys enforced."""
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(test_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture()
def db(engine):
    """Session shared by the test and the application under test."""
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture()
def app(db, tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path / "uploads"))
    application = create_app()

    def override_get_db():
        yield db

    application.dependency_overrides[get_db] = override_get_db
    yield application
    application.dependency_overrides.clear()


@pytest.fixture()
def client(app):
    """Client without credentials."""
    with TestClient(app) as test_client:
        yield test_client


def _make_school(db, iemis_code, name):
    school = models.School(
        iemis_code=iemis_code,
        name=name,
        municipality="Kathmandu Metropolitan City",
        estd="2045",
        prepared_by="Exam Coordinator",
        checked_by="Vice Principal",
        head_teacher_name="Head Teacher",
        head_teacher_contact="9800000000",
        email=f"{iemis_code.lower()}@school.example.com",
    )
    db.add(school)
    db.commit()
    db.refresh(school)
    return school


@pytest.fixture()
def school_a(db):
    return _make_school(db, "SCH-A-100", "Janata Secondary School")


@pytest.fixture()
def school_b(db):
    return _make_school(db, "SCH-B-200", "Saraswati Higher Secondary School")


@pytest.fixture()
def admin_user(db):
    return auth_service.register(
        db, iemis_code="ADMIN001", password="admin123", role="admin", email="admin@example.com"
    )


@pytest.fixture()
def school_user_a(db, school_a):
    return auth_service.register(
        db, iemis_code=school_a.iemis_code, password="school123", role="school",
        email="user.a@example.com", school_id=school_a.id,
    )


@pytest.fixture()
def school_user_b(db, school_b):
    return auth_service.register(
        db, iemis_code=school_b.iemis_code, password="school456", role="school",
        email="user.b@example.com", school_id=school_b.id,
    )


def _client_for(app, user):
    test_client = TestClient(app)
    token = auth_service.create_access_token(user)
    test_client.headers.update({"Authorization": f"Bearer {token}"})
    return test_client


@pytest.fixture()
def admin_client(app, admin_user):
    with _client_for(app, admin_user) as test_client:
        yield test_client


@pytest.fixture()
def school_a_client(app, school_user_a):
    with _client_for(app, school_user_a) as test_client:
        yield test_client


@pytest.fixture()
def school_b_client(app, school_user_b):
    with _client_for(app, school_user_b) as test_client:
        yield test_client


@pytest.fixture()
def make_subject(db):
    """Factory for subjects with 75/25 theory/internal split by default."""
    def _make(name="English", grade=11, theory_credit=3.0, internal_credit=1.0,
              theory_full=75.0, internal_full=25.0):
        subject = models.Subject(
            name=name,
            grade=grade,
            theory_sub_code=f"{name[:3].upper()}{grade}1",
            theory_credit=theory_credit,
            theory_full_marks=theory_full,
            theory_pass_marks=theory_full * 0.35,
            internal_sub_code=f"{name[:3].upper()}{grade}2",
            internal_credit=internal_credit,
            internal_full_marks=internal_full,
            internal_pass_marks=internal_full * 0.4,
        )
        db.add(subject)
        db.commit()
        db.refresh(subject)
        return subject
    return _make


@pytest.fixture()
def make_student(db):
    """Factory for students in a given school."""
    counter = {"n": 0}

    def _make(school, name=None, symbol_no=None, year=2082, grade=11, gender="Male"):
        counter["n"] += 1
        n = counter["n"]
        student = models.Student(
            student_system_id=f"STU-{school.id}-{n:04d}",
            school_id=school.id,
            name=name or f"Student {n}",
            gender=gender,
            grade=grade,
            year=year,
            symbol_no=symbol_no or f"{school.id}{n:06d}",
            roll_no=str(n),
        )
        db.add(student)
        db.commit()
        db.refresh(student)
        return student
    return _make
