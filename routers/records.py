"""
Records Router

Persistence endpoints for student recitation sheets.

Endpoints:
    POST /api/process - Append rows to a student's sheet
    GET /api/student-records/{student_name} - Most recent records of a student
"""

from fastapi import APIRouter, Depends, Request

from core.dependencies import get_sheet_service
from core.schemas import ProcessRequest, ProcessResponse, RecordsResponse, StudentRecord
from services.sheets import StudentSheetService, prepare_confirmed_rows
from utils.logging import get_logger
from utils.rate_limit import RATE_LIMITS, limiter

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Records"])

CONFIRM_ACTION = "confirm"


@router.post(
    "/process",
    response_model=ProcessResponse,
    summary="Append rows to a student's sheet",
    responses={
        404: {"description": "Student sheet not found"},
        502: {"description": "Spreadsheet unavailable"},
    }
)
@limiter.limit(RATE_LIMITS["submit"])
async def process_rows(
    request: Request,  # Required for rate limiter
    data: ProcessRequest,
    sheet_service: StudentSheetService = Depends(get_sheet_service)
):
    """
    Write committed rows below the last filled row of the student's sheet.

    Reviewed confirmations (action="confirm") get their pages column
    normalized first.
    """
    rows = data.extracted_data
    if data.action == CONFIRM_ACTION:
        rows = prepare_confirmed_rows(rows)

    logger.info(f"Writing {len(rows)} row(s) for {data.student_name}")
    result = await sheet_service.append_rows(data.student_name, rows)

    return ProcessResponse(
        success=True,
        message=f"تم إضافة {result.rows_added} سجل(ات) بنجاح",
        rows_added=result.rows_added,
        sheet_url=result.sheet_url,
    )


@router.get(
    "/student-records/{student_name}",
    response_model=RecordsResponse,
    summary="Recent records of a student"
)
@limiter.limit(RATE_LIMITS["records"])
async def get_student_records(
    request: Request,  # Required for rate limiter
    student_name: str,
    sheet_service: StudentSheetService = Depends(get_sheet_service)
):
    """
    Last three records of the student's sheet, newest first.

    A student without a sheet has no records (not an error).
    """
    records = await sheet_service.recent_records(student_name)
    return RecordsResponse(
        success=True,
        records=[StudentRecord(**record) for record in records],
    )
