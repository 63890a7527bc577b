"""
Submission Client

Hands committed rows to the persistence endpoint (POST /api/process). Used
by clients that run the voice session away from the sheet service; the
WebSocket route writes through StudentSheetService directly.
"""

import time
from typing import Any, Dict, List, Optional

import httpx

from config.settings import settings
from utils.exceptions import SubmissionError
from utils.logging import get_logger, log_api_call

logger = get_logger(__name__)


class SheetSubmitter:
    """
    Submission boundary over HTTP.

    Usage:
        submitter = SheetSubmitter("Ali")
        assembler = RecordAssembler(controller, submitter.submit)
    """

    SERVICE = "ProcessAPI"

    def __init__(
        self,
        student_name: str,
        url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.student_name = student_name
        self.url = url or settings.SUBMISSION_API_URL
        self.timeout_seconds = timeout_seconds or settings.SUBMISSION_TIMEOUT_SECONDS
        self._client = http_client

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self.timeout_seconds))
        return self._client

    async def submit(self, rows: List[List[Any]], action: Optional[str] = None) -> Dict[str, Any]:
        """
        Send rows for one student.

        Returns:
            Endpoint response body ({success, message, rowsAdded, sheetUrl})

        Raises:
            SubmissionError: On transport failure, non-2xx or success=false
        """
        payload: Dict[str, Any] = {"studentName": self.student_name, "extractedData": rows}
        if action:
            payload["action"] = action

        client = await self._get_client()
        start_time = time.perf_counter()

        try:
            response = await client.post(self.url, json=payload)
        except httpx.HTTPError as e:
            log_api_call(self.SERVICE, self.url, success=False, error=str(e))
            raise SubmissionError(f"Submission request failed: {e}", rows=len(rows)) from e

        duration_ms = (time.perf_counter() - start_time) * 1000

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.status_code >= 400 or not body.get("success"):
            error = body.get("error") or f"HTTP {response.status_code}"
            log_api_call(self.SERVICE, self.url, success=False, duration_ms=duration_ms, error=error)
            raise SubmissionError(
                error, rows=len(rows), details={"status_code": response.status_code}
            )

        log_api_call(self.SERVICE, self.url, success=True, duration_ms=duration_ms)
        logger.info(f"Submitted {len(rows)} row(s) for {self.student_name}")
        return body

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
