"""
Sheets Package

Student sheet persistence: spreadsheet backends, the row writer and record
reader, confirm-time row preparation and the HTTP submission client.
"""

from services.sheets.backends import (
    SheetBackend,
    GoogleSheetsBackend,
    InMemorySheetBackend,
    load_service_account_credentials,
)
from services.sheets.student_sheet import (
    AppendResult,
    StudentSheetService,
    to_sheet_row,
    find_first_empty_row,
)
from services.sheets.row_preparation import prepare_confirmed_rows
from services.sheets.submitter import SheetSubmitter

__all__ = [
    'SheetBackend',
    'GoogleSheetsBackend',
    'InMemorySheetBackend',
    'load_service_account_credentials',
    'AppendResult',
    'StudentSheetService',
    'to_sheet_row',
    'find_first_empty_row',
    'prepare_confirmed_rows',
    'SheetSubmitter',
]
