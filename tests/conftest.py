"""
Test Configuration

Pytest configuration and shared fixtures for all tests.
"""

import pytest
from datetime import date
from typing import AsyncGenerator, List, Optional
from httpx import AsyncClient, ASGITransport

from services.voice.recognizer import DeviceClass, DeviceProfile, Recognizer
from services.voice.session import RecognitionSessionController, Scheduler, SessionStatus
from utils.exceptions import RecognizerError


# =============================================================================
# Fakes
# =============================================================================

class FakeRecognizer(Recognizer):
    """Recognizer that only counts the calls it receives."""

    def __init__(self, available: bool = True):
        self.available = available
        self.starts = 0
        self.stops = 0

    @property
    def supported(self) -> bool:
        return self.available

    def start(self) -> None:
        self.starts += 1

    def stop(self) -> None:
        self.stops += 1


class FailingRecognizer(FakeRecognizer):
    """Recognizer whose start() fails once it has been started fail_after times."""

    def __init__(self, fail_after: Optional[int] = 0):
        super().__init__()
        self.fail_after = fail_after

    def start(self) -> None:
        self.starts += 1
        if self.fail_after is not None and self.starts > self.fail_after:
            raise RecognizerError("Client connection closed")


class FakeHandle:
    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler(Scheduler):
    """Records scheduled callbacks; run_pending() fires the live ones."""

    def __init__(self):
        self.handles: List[FakeHandle] = []

    def call_later(self, delay, callback):
        handle = FakeHandle(delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> List[FakeHandle]:
        return [handle for handle in self.handles if not handle.cancelled]

    def run_pending(self) -> None:
        handles, self.handles = self.pending, []
        for handle in handles:
            handle.callback()


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# =============================================================================
# Voice Session Fixtures
# =============================================================================

@pytest.fixture
def recognizer():
    return FakeRecognizer()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def statuses() -> List[SessionStatus]:
    """Status events reported by the controller, in order."""
    return []


@pytest.fixture
def controller(recognizer, scheduler, clock, statuses):
    """Desktop controller with fake timers and a fixed date."""
    return RecognitionSessionController(
        recognizer,
        profile=DeviceProfile.for_device(DeviceClass.DESKTOP),
        on_status=statuses.append,
        scheduler=scheduler,
        clock=clock,
        today=lambda: date(2024, 5, 1),
        commit_row_on_wrap=False,
    )


# =============================================================================
# Sheet Fixtures
# =============================================================================

HEADER_ROWS = [["الخطة"], ["header"], ["header"]]


@pytest.fixture
def sheet_backend():
    """In-memory spreadsheet with one student sheet (header rows only)."""
    from services.sheets import InMemorySheetBackend

    backend = InMemorySheetBackend(spreadsheet_id="test-sheet")
    backend.add_sheet("Ali", rows=HEADER_ROWS)
    return backend


@pytest.fixture
def sheet_service(sheet_backend):
    from services.sheets import StudentSheetService

    return StudentSheetService(sheet_backend)


@pytest.fixture
def sample_record():
    """A fully dictated record as the voice session produces it."""
    return [
        "سورة البقرة (5-10)",
        "12/3/2024",
        "20",
        "TRUE",
        "FALSE",
        "TRUE",
        "2",
        "ممتاز",
        "حفظ جيد",
    ]


# =============================================================================
# API Fixtures
# =============================================================================

@pytest.fixture
def app(sheet_service):
    """Application with the sheet service pointed at the in-memory backend."""
    from main import app
    from core.dependencies import get_sheet_service
    from utils.rate_limit import limiter

    limiter.reset()
    app.dependency_overrides[get_sheet_service] = lambda: sheet_service
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Get async test client for API testing."""
    transport = ASGITransport(app=app)

    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
