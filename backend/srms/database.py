from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker, declarative_base
from srms.config.settings import settings

# PostgreSQL SQLSTATE codes
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"

engine = create_engine(settings.database_url, pool_pre_ping=True)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    """FastAPI dependency to get a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def _driver_error_code(exc: IntegrityError):
    orig = getattr(exc, "orig", None)
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)

def is_unique_violation(exc: IntegrityError) -> bool:
    """True when the integrity error came from a unique constraint."""
    if _driver_error_code(exc) == UNIQUE_VIOLATION:
        return True
    return "UNIQUE constraint failed" in str(getattr(exc, "orig", exc))

def is_foreign_key_violation(exc: IntegrityError) -> bool:
    """True when the integrity error came from a foreign key constraint."""
    if _driver_error_code(exc) == FOREIGN_KEY_VIOLATION:
        return True
    return "FOREIGN KEY constraint failed" in str(getattr(exc, "orig", exc))

def violated_constraint(exc: IntegrityError) -> str:
    """Best-effort text identifying the violated constraint or column."""
    orig = getattr(exc, "orig", None)
    diag = getattr(orig, "diag", None)
    detail = getattr(diag, "message_detail", None) or ""
    constraint = getattr(diag, "constraint_name", None) or ""
    return f"{constraint} {detail} {orig}".strip()
