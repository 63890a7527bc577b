from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional


class ProcessRequest(BaseModel):
    """Rows to append to one student's sheet."""
    model_config = ConfigDict(populate_by_name=True)

    student_name: str = Field(..., alias="studentName", min_length=1)
    extracted_data: List[List[Any]] = Field(..., alias="extractedData")
    action: Optional[str] = None


class ProcessResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str
    rows_added: int = Field(..., alias="rowsAdded")
    sheet_url: str = Field(..., alias="sheetUrl")


class StudentRecord(BaseModel):
    """One sheet row as shown in the recent records preview."""
    model_config = ConfigDict(populate_by_name=True)

    plan: Any = None
    actual_date: Any = Field(None, alias="actualDate")
    pages: Any = None
    student_listen: Any = Field(None, alias="studentListen")
    sheikh_listen: Any = Field(None, alias="sheikhListen")
    home_listen: Any = Field(None, alias="homeListen")
    errors: Any = None
    grade: Any = None
    notes: Any = None


class RecordsResponse(BaseModel):
    success: bool = True
    records: List[StudentRecord] = []


class HealthResponse(BaseModel):
    status: str
    version: str
    sheet_backend: str
    components: Dict[str, bool] = {}
