import logging
from typing import Any, Callable, Dict, List, Optional
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from srms.auth.dependencies import get_current_user, ensure_can_access, is_admin
from srms.config.settings import settings
from srms.excel import service
from srms.models import User

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/excel",
    tags=["excel"],
)

PARSE_ERROR = "Could not read the uploaded Excel file"


def _resolve_school_id(current_user: User, requested: Optional[int]) -> Optional[int]:
    if not is_admin(current_user):
        return current_user.school_id
    if requested is not None:
        ensure_can_access(current_user, requested)
    return requested


def _handle_upload(
    excel_file: UploadFile,
    school_id: Optional[int],
    current_user: User,
    parser: Callable[[str], List[Dict[str, Any]]],
) -> Dict[str, Any]:
    if not service.is_excel_upload(excel_file.filename, excel_file.content_type):
        raise HTTPException(status_code=400, detail="Only Excel files (.xls, .xlsx) are allowed!")

    content = excel_file.file.read(settings.MAX_UPLOAD_SIZE_BYTES + 1)
    if len(content) > settings.MAX_UPLOAD_SIZE_BYTES:
        raise HTTPException(status_code=413, detail="File too large. Maximum size is 5MB")

    resolved_school_id = _resolve_school_id(current_user, school_id)
    path = service.save_upload(content, excel_file.filename)
    try:
        records = parser(path)
    except service.ExcelParseError as e:
        logger.error(f"Failed to parse upload '{excel_file.filename}' from user {current_user.id}: {e}")
        raise HTTPException(status_code=400, detail=PARSE_ERROR)
    finally:
        service.remove_upload(path)

    records = service.attach_school_id(records, resolved_school_id)
    logger.info(f"Parsed {len(records)} rows from '{excel_file.filename}' for school {resolved_school_id}")
    return {
        "success": True,
        "message": "File uploaded and parsed successfully",
        "count": len(records),
        "data": records,
    }


@router.post("/upload")
def upload_excel(
    excel_file: UploadFile = File(..., alias="excelFile"),
    school_id: Optional[int] = Form(None, alias="schoolId"),
    current_user: User = Depends(get_current_user),
):
    """Parse the first worksheet into rows of strings keyed by the header row."""
    return _handle_upload(excel_file, school_id, current_user, service.parse_rows)


@router.post("/upload-advanced")
def upload_excel_advanced(
    excel_file: UploadFile = File(..., alias="excelFile"),
    school_id: Optional[int] = Form(None, alias="schoolId"),
    current_user: User = Depends(get_current_user),
):
    """Parse the first worksheet cell by cell, keeping only non-empty cells."""
    return _handle_upload(excel_file, school_id, current_user, service.parse_rows_advanced)
