from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from srms.models import ApplicationSetting


def get_settings(db: Session) -> List[ApplicationSetting]:
    return db.query(ApplicationSetting).order_by(ApplicationSetting.key).all()


def get_setting(db: Session, key: str) -> Optional[ApplicationSetting]:
    return db.query(ApplicationSetting).filter(ApplicationSetting.key == key).first()


def _upsert(db: Session, key: str, value: Any, description: Optional[str] = None) -> ApplicationSetting:
    db_setting = get_setting(db, key)
    if db_setting is None:
        db_setting = ApplicationSetting(key=key, value=value, description=description)
        db.add(db_setting)
    else:
        db_setting.value = value
        if description is not None:
            db_setting.description = description
    return db_setting


def upsert_setting(db: Session, key: str, value: Any, description: Optional[str] = None) -> ApplicationSetting:
    """Update a setting if it exists, otherwise create it."""
    db_setting = _upsert(db, key, value, description)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_setting)
    return db_setting


def upsert_settings(db: Session, values: Dict[str, Any]) -> None:
    """Save several settings in one transaction."""
    try:
        for key, value in values.items():
            _upsert(db, key, value)
            db.flush()
        db.commit()
    except Exception:
        db.rollback()
        raise
