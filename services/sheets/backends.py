"""
Spreadsheet Backends

Storage behind the student sheets. GoogleSheetsBackend talks to the Google
Sheets REST API; InMemorySheetBackend keeps sheets in process for local
development and tests.
"""

import asyncio
import json
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request as GoogleAuthRequest
from google.oauth2 import service_account

from utils.exceptions import ConfigurationError, SpreadsheetError
from utils.logging import get_logger, log_api_call

logger = get_logger(__name__)


def a1_range(title: str, cells: str) -> str:
    """Build an A1 range for a sheet title ("Ali", "A1:K10" → "'Ali'!A1:K10")."""
    escaped = title.replace("'", "''")
    return f"'{escaped}'!{cells}"


class SheetBackend(ABC):
    """Minimal spreadsheet capability used by the student sheet service."""

    spreadsheet_id: str = ""

    @abstractmethod
    async def get_sheet_id(self, title: str) -> Optional[int]:
        """Get the numeric sheet id (gid) for a sheet title, or None."""
        pass

    @abstractmethod
    async def read_range(self, title: str, cells: str) -> List[List[Any]]:
        """Read a range as rows of values; trailing empty cells may be absent."""
        pass

    @abstractmethod
    async def write_rows(self, title: str, start_row: int, rows: List[List[Any]]) -> None:
        """
        Write rows starting at a zero-based row index.

        None values leave the existing cell untouched.
        """
        pass

    async def close(self) -> None:
        """Release any held resources."""
        return None


# =============================================================================
# Google Sheets REST API
# =============================================================================

SHEETS_SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


def load_service_account_credentials(raw_json: str) -> service_account.Credentials:
    """
    Build Sheets-scoped credentials from a service account key (JSON text).

    Raises:
        ConfigurationError: If the key is not valid JSON or misses fields
    """
    try:
        info = json.loads(raw_json)
    except ValueError as e:
        raise ConfigurationError(
            "GOOGLE_SERVICE_ACCOUNT_JSON is not valid JSON",
            setting="GOOGLE_SERVICE_ACCOUNT_JSON",
        ) from e
    if not isinstance(info, dict):
        raise ConfigurationError(
            "GOOGLE_SERVICE_ACCOUNT_JSON must be a JSON object",
            setting="GOOGLE_SERVICE_ACCOUNT_JSON",
        )
    try:
        return service_account.Credentials.from_service_account_info(info, scopes=SHEETS_SCOPES)
    except ValueError as e:
        raise ConfigurationError(
            f"Invalid service account key: {e}",
            setting="GOOGLE_SERVICE_ACCOUNT_JSON",
        ) from e


class GoogleSheetsBackend(SheetBackend):
    """
    Google Sheets v4 REST backend.

    Requests are authorized with service account credentials, refreshed
    whenever their token is missing or expired. A fixed access token, when
    given, takes precedence over the credentials.

    Usage:
        credentials = load_service_account_credentials(raw_json)
        backend = GoogleSheetsBackend(spreadsheet_id, credentials=credentials)
        rows = await backend.read_range("Ali", "A1:K1000")
    """

    SERVICE = "GoogleSheets"

    def __init__(
        self,
        spreadsheet_id: Optional[str],
        access_token: Optional[str] = None,
        base_url: str = "https://sheets.googleapis.com/v4",
        http_client: Optional[httpx.AsyncClient] = None,
        credentials: Optional[Any] = None,
    ):
        if not spreadsheet_id:
            raise ConfigurationError(
                "SPREADSHEET_ID environment variable is missing",
                setting="SPREADSHEET_ID",
            )
        self.spreadsheet_id = spreadsheet_id
        self.access_token = access_token
        self.credentials = credentials
        self.base_url = base_url.rstrip("/")
        self._client = http_client

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(30.0))
        return self._client

    async def _get_token(self) -> Optional[str]:
        if self.access_token:
            return self.access_token
        if self.credentials is None:
            return None

        if not self.credentials.valid:
            start_time = time.perf_counter()
            try:
                # google-auth refreshes synchronously
                await asyncio.to_thread(self.credentials.refresh, GoogleAuthRequest())
            except GoogleAuthError as e:
                log_api_call(self.SERVICE, "token refresh", success=False, error=str(e))
                raise SpreadsheetError(
                    f"Unable to obtain a Google access token: {e}"
                ) from e
            duration_ms = (time.perf_counter() - start_time) * 1000
            log_api_call(self.SERVICE, "token refresh", success=True, duration_ms=duration_ms)

        return self.credentials.token

    async def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        token = await self._get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        url = f"{self.base_url}/spreadsheets/{self.spreadsheet_id}{path}"
        client = await self._get_client()
        headers = await self._headers()
        start_time = time.perf_counter()

        try:
            response = await client.request(
                method, url, params=params, json=json, headers=headers
            )
        except httpx.HTTPError as e:
            log_api_call(self.SERVICE, f"{method} {path}", success=False, error=str(e))
            raise SpreadsheetError(f"Spreadsheet request failed: {e}") from e

        duration_ms = (time.perf_counter() - start_time) * 1000
        if response.status_code >= 400:
            log_api_call(
                self.SERVICE, f"{method} {path}", success=False,
                duration_ms=duration_ms, error=response.text[:200],
            )
            raise SpreadsheetError(
                f"Spreadsheet API returned {response.status_code}",
                details={"body": response.text[:500]},
            )

        log_api_call(self.SERVICE, f"{method} {path}", success=True, duration_ms=duration_ms)
        return response.json() if response.content else {}

    async def get_sheet_id(self, title: str) -> Optional[int]:
        data = await self._request("GET", "", params={"fields": "sheets.properties"})
        for sheet in data.get("sheets", []):
            properties = sheet.get("properties", {})
            if properties.get("title") == title:
                return properties.get("sheetId")
        return None

    async def read_range(self, title: str, cells: str) -> List[List[Any]]:
        path = "/values/" + quote(a1_range(title, cells), safe="")
        data = await self._request(
            "GET", path, params={"valueRenderOption": "UNFORMATTED_VALUE"}
        )
        return data.get("values", [])

    async def write_rows(self, title: str, start_row: int, rows: List[List[Any]]) -> None:
        if not rows:
            return
        width = max(len(row) for row in rows)
        end_column = chr(ord("A") + width - 1)
        target = a1_range(title, f"A{start_row + 1}:{end_column}{start_row + len(rows)}")
        await self._request(
            "PUT",
            "/values/" + quote(target, safe=""),
            params={"valueInputOption": "RAW"},
            json={"range": target, "majorDimension": "ROWS", "values": rows},
        )

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


# =============================================================================
# In-Memory
# =============================================================================

class InMemorySheetBackend(SheetBackend):
    """
    Process-local spreadsheet.

    Usage:
        backend = InMemorySheetBackend()
        backend.add_sheet("Ali")
    """

    def __init__(self, spreadsheet_id: str = "local"):
        self.spreadsheet_id = spreadsheet_id
        self._sheets: Dict[str, Dict[str, Any]] = {}

    def add_sheet(self, title: str, rows: Optional[List[List[Any]]] = None) -> int:
        """Create a sheet (optionally pre-filled) and return its id."""
        sheet_id = len(self._sheets)
        self._sheets[title] = {"id": sheet_id, "rows": [list(row) for row in rows or []]}
        return sheet_id

    def rows(self, title: str) -> List[List[Any]]:
        """Raw rows of a sheet (for inspection)."""
        return self._sheets[title]["rows"]

    async def get_sheet_id(self, title: str) -> Optional[int]:
        sheet = self._sheets.get(title)
        return sheet["id"] if sheet else None

    async def read_range(self, title: str, cells: str) -> List[List[Any]]:
        if title not in self._sheets:
            raise SpreadsheetError(f"Unable to parse range: {a1_range(title, cells)}", status_code=400)
        return [list(row) for row in self._sheets[title]["rows"]]

    async def write_rows(self, title: str, start_row: int, rows: List[List[Any]]) -> None:
        sheet_rows = self._sheets[title]["rows"]
        for offset, values in enumerate(rows):
            index = start_row + offset
            while len(sheet_rows) <= index:
                sheet_rows.append([])
            target = sheet_rows[index]
            for column, value in enumerate(values):
                if value is None:
                    continue
                while len(target) <= column:
                    target.append("")
                target[column] = value
