from typing import List, Optional
from sqlalchemy.orm import Session
from srms.auth.service import hash_password, ROLE_ADMIN, ROLE_SCHOOL
from srms.models import User
from srms.users.schemas import UserUpdate


def get_users(db: Session) -> List[User]:
    return db.query(User).order_by(User.id).all()


def get_users_by_school(db: Session, school_id: int) -> List[User]:
    return db.query(User).filter(User.school_id == school_id).order_by(User.id).all()


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def update_user(db: Session, db_user: User, user_update: UserUpdate) -> User:
    """
    Apply the fields that were sent. A password, when present, is re-hashed.

    Raises:
        ValueError: When the resulting role/school combination is invalid.
    """
    changes = user_update.model_dump(exclude_unset=True)
    password = changes.pop('password', None)

    for field, value in changes.items():
        if field in ('iemis_code', 'role') and value is None:
            continue
        setattr(db_user, field, value)

    if db_user.role == ROLE_SCHOOL and db_user.school_id is None:
        db.rollback()
        raise ValueError("School ID is required for school users")
    if db_user.role == ROLE_ADMIN:
        db_user.school_id = None

    if password:
        db_user.password_hash = hash_password(password)

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_user)
    return db_user


def delete_user(db: Session, db_user: User) -> None:
    db.delete(db_user)
    db.commit()
