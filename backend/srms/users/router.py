import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from srms.auth.dependencies import get_current_user, require_admin, ensure_can_access, is_admin
from srms.auth.router import duplicate_user_detail
from srms.auth.service import auth_service
from srms.database import get_db, is_unique_violation
from srms.models import User, School
from srms.schemas import MessageResponse
from srms.users import crud, schemas

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/users",
    tags=["users"],
    responses={404: {"description": "Not found"}},
)


def _integrity_to_http(exc: IntegrityError) -> HTTPException:
    if is_unique_violation(exc):
        return HTTPException(status_code=409, detail=duplicate_user_detail(exc))
    logger.error(f"Integrity error on users: {exc}")
    return HTTPException(status_code=400, detail="Invalid user data")


def _ensure_school_exists(db: Session, school_id):
    if school_id is not None and db.query(School.id).filter(School.id == school_id).first() is None:
        raise HTTPException(status_code=400, detail="School not found")


@router.get("", response_model=List[schemas.User])
def list_users(current_user: User = Depends(require_admin), db: Session = Depends(get_db)):
    return crud.get_users(db)


@router.get("/school/{school_id}", response_model=List[schemas.User])
def list_users_by_school(school_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    ensure_can_access(current_user, school_id)
    return crud.get_users_by_school(db, school_id)


@router.get("/{user_id}", response_model=schemas.User)
def get_user(user_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Admins can read any user; other users only themselves."""
    if not is_admin(current_user) and current_user.id != user_id:
        raise HTTPException(status_code=403, detail="Access denied")
    user = crud.get_user(db, user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.post("", response_model=schemas.User, status_code=201)
def create_user(user: schemas.UserCreate, current_user: User = Depends(require_admin), db: Session = Depends(get_db)):
    _ensure_school_exists(db, user.school_id if user.role == "school" else None)
    try:
        return auth_service.register(
            db,
            iemis_code=user.iemis_code,
            password=user.password,
            role=user.role,
            email=user.email,
            school_id=user.school_id,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except IntegrityError as e:
        raise _integrity_to_http(e)


@router.put("/{user_id}", response_model=schemas.User)
def update_user(
    user_id: int,
    user_update: schemas.UserUpdate,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    db_user = crud.get_user(db, user_id)
    if db_user is None:
        raise HTTPException(status_code=404, detail="User not found")
    _ensure_school_exists(db, user_update.school_id)
    try:
        return crud.update_user(db, db_user, user_update)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except IntegrityError as e:
        raise _integrity_to_http(e)


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(user_id: int, current_user: User = Depends(require_admin), db: Session = Depends(get_db)):
    db_user = crud.get_user(db, user_id)
    if db_user is None:
        raise HTTPException(status_code=404, detail="User not found")
    if db_user.id == current_user.id:
        raise HTTPException(status_code=400, detail="You cannot delete your own account")
    crud.delete_user(db, db_user)
    logger.info(f"User {user_id} deleted by admin {current_user.id}")
    return {'success': True, 'message': 'User deleted successfully'}
