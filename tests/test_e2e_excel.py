import io
import os
from datetime import datetime

import pytest
from openpyxl import Workbook

from srms.config.settings import settings
from srms.excel.service import format_number, format_value

XLSX_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def workbook_bytes(rows):
    wb = Workbook()
    ws = wb.active
    for row in rows:
        ws.append(row)
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


STUDENT_ROWS = [
    ["Name", "Symbol No", "DOB", "Mobile", "Roll"],
    ["Aarati Shrestha", 2082001234, datetime(2007, 4, 14), 9812345678, 1],
    [None, None, None, None, None],
    ["Bikash Rai", 2082001235, None, None, 2.0],
]


def upload(client, content, filename="students.xlsx", content_type=XLSX_TYPE, path="/api/excel/upload", data=None):
    return client.post(path, files={"excelFile": (filename, content, content_type)}, data=data or {})


def test_upload_parses_rows_as_strings(school_a_client, school_a):
    response = upload(school_a_client, workbook_bytes(STUDENT_ROWS))

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["success"] is True
    assert body["count"] == 2
    assert body["data"][0] == {
        "Name": "Aarati Shrestha",
        "Symbol No": "2082001234",
        "DOB": "2007-04-14",
        "Mobile": "9812345678",
        "Roll": "1",
        "schoolId": school_a.id,
    }
    assert body["data"][1]["DOB"] == ""
    assert body["data"][1]["Roll"] == "2"


def test_advanced_upload_keeps_only_filled_cells(school_a_client, school_a):
    response = upload(school_a_client, workbook_bytes(STUDENT_ROWS), path="/api/excel/upload-advanced")

    assert response.status_code == 200, response.text
    rows = response.json()["data"]
    assert len(rows) == 2
    assert rows[1] == {"Name": "Bikash Rai", "Symbol No": "2082001235", "Roll": "2", "schoolId": school_a.id}


def test_school_user_cannot_tag_other_school(school_a_client, school_a, school_b):
    response = upload(school_a_client, workbook_bytes(STUDENT_ROWS), data={"schoolId": str(school_b.id)})

    assert {row["schoolId"] for row in response.json()["data"]} == {school_a.id}


def test_admin_tags_rows_with_requested_school(admin_client, school_b):
    response = upload(admin_client, workbook_bytes(STUDENT_ROWS), data={"schoolId": str(school_b.id)})

    assert {row["schoolId"] for row in response.json()["data"]} == {school_b.id}


def test_non_excel_file_is_rejected(school_a_client):
    response = upload(school_a_client, b"name,symbol\n", filename="students.csv", content_type="text/csv")

    assert response.status_code == 400
    assert response.json()["detail"] == "Only Excel files (.xls, .xlsx) are allowed!"


def test_oversized_file_is_rejected(school_a_client, monkeypatch):
    monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE_BYTES", 100)

    response = upload(school_a_client, workbook_bytes(STUDENT_ROWS))

    assert response.status_code == 413


def test_corrupt_file_is_rejected_and_removed(school_a_client):
    response = upload(school_a_client, b"this is not a spreadsheet")

    assert response.status_code == 400
    assert response.json()["detail"] == "Could not read the uploaded Excel file"
    assert os.listdir(settings.UPLOAD_DIR) == []


def test_upload_requires_authentication(client):
    assert upload(client, workbook_bytes(STUDENT_ROWS)).status_code == 401


@pytest.mark.parametrize("value,expected", [
    (12, "12"),
    (12.0, "12"),
    (12.5, "12.5"),
    (9812345678.0, "9812345678"),
    (1e-7, "0.0000001"),
    (True, "TRUE"),
])
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_format_value():
    assert format_value(None) == ""
    assert format_value(datetime(2024, 1, 31, 10, 30)) == "2024-01-31"
    assert format_value("  padded ") == "padded"
