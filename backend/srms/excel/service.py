import logging
import os
import uuid
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Dict, List, Optional

from openpyxl import load_workbook

from srms.config.settings import settings

logger = logging.getLogger(__name__)

EXCEL_EXTENSIONS = (".xls", ".xlsx")
EXCEL_MIME_TYPES = (
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
)


class ExcelParseError(Exception):
    """The uploaded file could not be read as a spreadsheet."""


def is_excel_upload(filename: Optional[str], content_type: Optional[str]) -> bool:
    if filename and filename.lower().endswith(EXCEL_EXTENSIONS):
        return True
    return content_type in EXCEL_MIME_TYPES


def format_number(value) -> str:
    """Render a number without scientific notation or a trailing '.0'."""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    text = repr(value)
    if "e" in text.lower():
        text = format(Decimal(text), "f")
    return text


def format_value(value: Any) -> str:
    """String form of a cell value as the import screens expect it."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, time):
        return value.isoformat()
    if isinstance(value, (int, float, Decimal)):
        return format_number(value)
    return str(value).strip()


def save_upload(content: bytes, original_name: str) -> str:
    """Stage uploaded bytes under UPLOAD_DIR and return the path."""
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    extension = os.path.splitext(original_name or "")[1].lower() or ".xlsx"
    path = os.path.join(settings.UPLOAD_DIR, f"excelFile-{uuid.uuid4().hex}{extension}")
    with open(path, "wb") as f:
        f.write(content)
    return path


def remove_upload(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not remove staged upload {path}: {e}")


def _header_names(row) -> List[Optional[str]]:
    names = []
    for value in row:
        name = format_value(value)
        names.append(name or None)
    return names


def parse_rows(path: str) -> List[Dict[str, str]]:
    """
    First worksheet as a list of header -> string dicts.

    Every headed column appears in every row, empty cells as ''. Rows with no
    values at all are skipped.
    """
    try:
        wb = load_workbook(filename=path, read_only=True, data_only=True)
    except Exception as e:
        raise ExcelParseError(str(e)) from e

    try:
        ws = wb.worksheets[0] if wb.worksheets else None
        if ws is None:
            return []
        rows_iter = ws.iter_rows(values_only=True)
        header_row = next(rows_iter, None)
        if not header_row:
            return []
        headers = _header_names(header_row)

        records = []
        for row in rows_iter:
            values = [format_value(v) for v in row]
            if not any(values):
                continue
            record = {}
            for index, header in enumerate(headers):
                if header is None:
                    continue
                record[header] = values[index] if index < len(values) else ""
            records.append(record)
        return records
    except ExcelParseError:
        raise
    except Exception as e:
        raise ExcelParseError(str(e)) from e
    finally:
        wb.close()


def _format_cell(cell) -> str:
    # openpyxl type tags: n numeric, s string, d date, b boolean
    if cell.data_type == "n":
        return format_number(cell.value)
    if cell.data_type == "d":
        return format_value(cell.value)
    if cell.data_type == "b":
        return "TRUE" if cell.value else "FALSE"
    return format_value(cell.value)


def parse_rows_advanced(path: str) -> List[Dict[str, str]]:
    """
    Walk the used cell range of the first worksheet, formatting each cell by its
    type tag. Only non-empty cells are included and only non-empty rows kept.
    """
    try:
        wb = load_workbook(filename=path, data_only=True)
    except Exception as e:
        raise ExcelParseError(str(e)) from e

    try:
        ws = wb.worksheets[0] if wb.worksheets else None
        if ws is None or ws.max_row < 1:
            return []
        headers = _header_names(next(ws.iter_rows(min_row=1, max_row=1, values_only=True), ()))

        records = []
        for row in ws.iter_rows(min_row=2, max_row=ws.max_row):
            record = {}
            for cell in row:
                index = cell.column - 1
                if cell.value is None or index >= len(headers) or headers[index] is None:
                    continue
                value = _format_cell(cell)
                if value:
                    record[headers[index]] = value
            if record:
                records.append(record)
        return records
    except Exception as e:
        raise ExcelParseError(str(e)) from e
    finally:
        wb.close()


def attach_school_id(records: List[Dict[str, Any]], school_id: Optional[int]) -> List[Dict[str, Any]]:
    for record in records:
        record["schoolId"] = school_id
    return records
