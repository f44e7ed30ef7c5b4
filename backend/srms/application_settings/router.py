import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from srms.application_settings import crud, schemas
from srms.auth.dependencies import get_current_user, require_admin
from srms.database import get_db
from srms.models import User
from srms.schemas import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/application-settings",
    tags=["application-settings"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=List[schemas.ApplicationSetting])
def list_settings(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return crud.get_settings(db)


@router.get("/{key}", response_model=schemas.SettingValue)
def get_setting(key: str, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    db_setting = crud.get_setting(db, key)
    if db_setting is None:
        raise HTTPException(status_code=404, detail="Setting not found")
    return {"key": db_setting.key, "value": db_setting.value}


@router.post("", response_model=MessageResponse)
def save_settings(
    request: schemas.SettingsBulkUpdate,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Create or update every key in ``settings``."""
    if any(not key.strip() for key in request.settings):
        raise HTTPException(status_code=400, detail="Setting keys cannot be empty")
    crud.upsert_settings(db, request.settings)
    logger.info(f"Admin {current_user.id} saved settings: {sorted(request.settings)}")
    return {'success': True, 'message': 'Settings saved successfully'}


@router.put("/{key}", response_model=schemas.ApplicationSetting)
def save_setting(
    key: str,
    request: schemas.SettingUpdate,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return crud.upsert_setting(db, key, request.value, request.description)
