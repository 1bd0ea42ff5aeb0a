"""
/**
 * @file backend/services/spreadsheet_service.py
 * @description Excel 读写：上传文件按位置读取 (key, en)，生成下载模板。
 */
"""

from __future__ import annotations

import io
import zipfile
from typing import Any, Dict, List

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from backend.services.errors import InputError


XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
TEMPLATE_FILENAME = "template.xlsx"
TEMPLATE_SHEET = "translations"
TEMPLATE_ROWS = [
    {"key": "app_title", "en": "My Awesome App"},
    {"key": "welcome_message", "en": "Welcome!"},
]


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def read_source_rows(content: bytes) -> List[Dict[str, str]]:
    """
    Read the first sheet positionally: column A is the key, column B the English text.
    Row 1 is data like any other row; fully blank rows are skipped.
    """
    if not content:
        raise InputError("Uploaded file is empty")
    try:
        workbook = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, ValueError, OSError) as e:
        raise InputError(f"Unable to read spreadsheet: {e}") from e

    try:
        worksheet = workbook.worksheets[0]
        rows: List[Dict[str, str]] = []
        for values in worksheet.iter_rows(min_col=1, max_col=2, values_only=True):
            key = values[0] if len(values) > 0 else None
            en = values[1] if len(values) > 1 else None
            if key is None and en is None:
                continue
            rows.append({"key": _cell_text(key), "en": _cell_text(en)})
    finally:
        workbook.close()
    return rows


def build_template() -> bytes:
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = TEMPLATE_SHEET
    worksheet.append(["key", "en"])
    for row in TEMPLATE_ROWS:
        worksheet.append([row["key"], row["en"]])
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()
