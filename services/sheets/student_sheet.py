"""
Student Sheet Service

Appends committed recitation rows to a student's sheet and reads back the
most recent records. One sheet per student, titled with the student's name;
rows 1-3 hold the sheet header and data starts at row 4.

Record → sheet column mapping:
    0 plan           → A        5 home listen  → H (checkbox)
    1 actual date    → D        6 errors       → I (number)
    2 pages          → E (num)  7 grade        → J
    3 student listen → F (cb)   8 notes        → K
    4 sheikh listen  → G (cb)
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from config.constants import (
    RECENT_RECORDS_LIMIT,
    SHEET_DATA_START_ROW,
    SHEET_MAX_ROWS,
    SHEET_SCAN_RANGE,
)
from services.sheets.backends import SheetBackend
from services.voice.config import (
    CHECKBOX_COL_INDICES,
    DATE_COL_INDEX,
    ERRORS_COL_INDEX,
    GRADE_COL_INDEX,
    HOME_LISTEN_COL_INDEX,
    NOTES_COL_INDEX,
    NUMBER_COL_INDICES,
    PAGES_COL_INDEX,
    PLAN_COL_INDEX,
    SHEIKH_LISTEN_COL_INDEX,
    STUDENT_LISTEN_COL_INDEX,
)
from utils.exceptions import SheetNotFoundError, SpreadsheetError
from utils.logging import get_logger, log_sheet_action

logger = get_logger(__name__)


SHEET_COLUMN_BY_FIELD: Dict[int, int] = {
    PLAN_COL_INDEX: 0,
    DATE_COL_INDEX: 3,
    PAGES_COL_INDEX: 4,
    STUDENT_LISTEN_COL_INDEX: 5,
    SHEIKH_LISTEN_COL_INDEX: 6,
    HOME_LISTEN_COL_INDEX: 7,
    ERRORS_COL_INDEX: 8,
    GRADE_COL_INDEX: 9,
    NOTES_COL_INDEX: 10,
}

SHEET_WIDTH = 11

CHECKBOX_TRUE_VALUES = ("TRUE", "True", "true", "تم")

# Record keys in sheet column order, as returned by recent_records()
RECORD_KEYS = (
    ("plan", 0),
    ("actual_date", 3),
    ("pages", 4),
    ("student_listen", 5),
    ("sheikh_listen", 6),
    ("home_listen", 7),
    ("errors", 8),
    ("grade", 9),
    ("notes", 10),
)


@dataclass
class AppendResult:
    """Outcome of appending rows to a student sheet."""
    rows_added: int
    start_row: int
    sheet_url: str


def _is_blank(value: Any) -> bool:
    return value is None or value == "" or value is False


def to_number(value: Any) -> Any:
    """Numeric value when the text parses as a number, else the text itself."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value
    try:
        number = float(str(value).strip())
    except ValueError:
        return value
    return int(number) if number.is_integer() else number


def to_checkbox(value: Any) -> bool:
    """Checkbox state for a record cell ("TRUE", "تم" → checked)."""
    return value is True or value in CHECKBOX_TRUE_VALUES


def to_sheet_row(row: List[Any]) -> List[Any]:
    """
    Map one record (9 cells) to the 11 sheet columns.

    Blank record cells map to None so the existing sheet cell is kept.
    """
    values: List[Any] = [None] * SHEET_WIDTH
    for field_index, column in SHEET_COLUMN_BY_FIELD.items():
        raw = row[field_index] if field_index < len(row) else None
        if _is_blank(raw):
            continue
        if field_index in NUMBER_COL_INDICES:
            values[column] = to_number(raw)
        elif field_index in CHECKBOX_COL_INDICES:
            values[column] = to_checkbox(raw)
        else:
            values[column] = raw
    return values


def _cell(rows: List[List[Any]], row_index: int, column: int) -> Any:
    if row_index >= len(rows):
        return None
    row = rows[row_index]
    return row[column] if column < len(row) else None


def find_first_empty_row(rows: List[List[Any]]) -> Optional[int]:
    """First data row whose column A is empty, or None if the sheet is full."""
    for row_index in range(SHEET_DATA_START_ROW, SHEET_MAX_ROWS):
        value = _cell(rows, row_index, 0)
        if value is None or value == "":
            return row_index
    return None


class StudentSheetService:
    """
    Reads and writes student recitation sheets.

    Usage:
        service = StudentSheetService(backend)
        result = await service.append_rows("Ali", [["سورة البقرة (5-10)", ...]])
        records = await service.recent_records("Ali")
    """

    def __init__(self, backend: SheetBackend):
        self.backend = backend

    def sheet_url(self, sheet_id: int) -> str:
        return (
            f"https://docs.google.com/spreadsheets/d/{self.backend.spreadsheet_id}"
            f"/edit#gid={sheet_id}"
        )

    async def append_rows(self, student: str, rows: List[List[Any]]) -> AppendResult:
        """
        Append rows below the last filled row of a student's sheet.

        Args:
            student: Sheet title (exact student name)
            rows: Records of 9 cells each

        Returns:
            AppendResult with the number of rows written

        Raises:
            SheetNotFoundError: If the student has no sheet
            SpreadsheetError: If the sheet has no free row
        """
        sheet_id = await self.backend.get_sheet_id(student)
        if sheet_id is None:
            log_sheet_action("write", student, success=False, details="sheet not found")
            raise SheetNotFoundError(student)

        existing = await self.backend.read_range(student, SHEET_SCAN_RANGE)
        start_row = find_first_empty_row(existing)
        if start_row is None:
            log_sheet_action("write", student, success=False, details="sheet full")
            raise SpreadsheetError(
                f"Sheet for student {student} has no empty rows left",
                status_code=409,
                details={"student": student},
            )

        writable = rows[:SHEET_MAX_ROWS - start_row]
        if len(writable) < len(rows):
            logger.warning(
                f"Dropping {len(rows) - len(writable)} row(s) past row {SHEET_MAX_ROWS} for {student}"
            )

        await self.backend.write_rows(student, start_row, [to_sheet_row(row) for row in writable])

        log_sheet_action(
            "write", student, success=True,
            details=f"{len(writable)} row(s) starting at row {start_row + 1}",
        )
        return AppendResult(
            rows_added=len(writable),
            start_row=start_row + 1,
            sheet_url=self.sheet_url(sheet_id),
        )

    async def recent_records(
        self,
        student: str,
        limit: int = RECENT_RECORDS_LIMIT
    ) -> List[Dict[str, Any]]:
        """
        Most recent records of a student, newest first.

        Returns an empty list when the student has no sheet.
        """
        sheet_id = await self.backend.get_sheet_id(student)
        if sheet_id is None:
            return []

        rows = await self.backend.read_range(student, SHEET_SCAN_RANGE)
        records = []
        for row_index in range(SHEET_DATA_START_ROW, min(len(rows), SHEET_MAX_ROWS)):
            if _is_blank(_cell(rows, row_index, 0)):
                continue
            records.append({
                key: _cell(rows, row_index, column) for key, column in RECORD_KEYS
            })

        log_sheet_action("read", student, success=True, details=f"{len(records)} record(s)")
        return list(reversed(records[-limit:])) if limit > 0 else []
