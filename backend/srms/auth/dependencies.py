from fastapi import Header, HTTPException, Depends
from typing import Optional
from sqlalchemy.orm import Session

from srms.database import get_db
from srms import models
from srms.auth.service import auth_service, AuthenticationError, ROLE_ADMIN, ROLE_SCHOOL


def _extract_bearer_token(authorization: Optional[str]) -> str:
    if not authorization or not authorization.startswith('Bearer '):
        raise HTTPException(status_code=401, detail="Unauthorized: Missing or invalid Bearer token format")

    parts = authorization.split(' ')
    if len(parts) != 2 or not parts[1]:
        raise HTTPException(status_code=401, detail="Unauthorized: Invalid token content")
    return parts[1]


def get_current_user(
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db)
) -> models.User:
    """
    Validates the bearer token and retrieves the user object from the database.

    The user row is re-fetched on every request so deleted accounts and changed
    roles take effect immediately.
    """
    token = _extract_bearer_token(authorization)

    try:
        payload = auth_service.decode_access_token(token)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=f"Unauthorized: {e}")

    user = db.query(models.User).filter(models.User.id == payload["id"]).first()

    if user is None:
        raise HTTPException(status_code=401, detail="Unauthorized: User not found")

    return user


def get_optional_user(
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db)
) -> Optional[models.User]:
    """Like get_current_user, but returns None when no Authorization header is sent."""
    if authorization is None:
        return None
    return get_current_user(authorization=authorization, db=db)


def require_admin(current_user: models.User = Depends(get_current_user)) -> models.User:
    if current_user.role != ROLE_ADMIN:
        raise HTTPException(status_code=403, detail="Admin access required")
    return current_user


def can_access(user: models.User, resource_school_id: Optional[int]) -> bool:
    """Admins reach every school; school users only their own."""
    if user.role == ROLE_ADMIN:
        return True
    if user.role == ROLE_SCHOOL and user.school_id is not None:
        return resource_school_id is not None and int(resource_school_id) == user.school_id
    return False


def ensure_can_access(user: models.User, resource_school_id: Optional[int]) -> None:
    if not can_access(user, resource_school_id):
        raise HTTPException(status_code=403, detail="Access denied to this school's data")


def is_admin(user: models.User) -> bool:
    return user.role == ROLE_ADMIN
