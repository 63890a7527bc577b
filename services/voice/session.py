"""
Recognition Session Controller

Owns one voice-capture session: the recognizer lifecycle, the field cursor
and the record being filled. Recognition events are folded into the record
one at a time:

    final result → confidence gate → processing lock → clean
                 → duplicate window → command detection → segment
                 → coerce per field → advance cursor

Interim results only update the live transcript. Timers (auto-restart,
transcript clearing) go through an injectable Scheduler and time through an
injectable clock so the controller runs without a microphone or event loop.
"""

import asyncio
import re
import time
from abc import ABC, abstractmethod
from collections import deque
from datetime import date
from enum import Enum
from typing import Any, Callable, Deque, Dict, List, Optional, Tuple

from config.constants import (
    LIVE_TRANSCRIPT_CLEAR_SECONDS,
    PROCESSING_LOCK_SECONDS,
    RECENT_UTTERANCE_WINDOW,
)
from config.settings import settings
from services.voice.config import (
    COMMAND_KEYWORDS,
    FIELD_COUNT,
    FIELD_SCHEMA,
    SEPARATOR_KEYWORD,
    empty_record,
    field_type_at,
    longest_first,
)
from services.voice.normalization.registry import coerce_field
from services.voice.recognizer import (
    FATAL_ERROR_CODES,
    SILENT_ERROR_CODES,
    DeviceClass,
    DeviceProfile,
    RecognitionEvent,
    Recognizer,
)
from services.voice.segmenter import ADVANCE, Segment, segment
from services.voice.transcript_cleaner import clean_transcript
from utils.exceptions import RecognizerError
from utils.logging import get_logger

logger = get_logger(__name__)


PERMISSION_ERROR_MESSAGE = "يرجى السماح بالميكروفون"
RECOGNIZER_START_ERROR_MESSAGE = "تعذر تشغيل التعرف على الصوت"


class SessionState(str, Enum):
    """Controller lifecycle states."""
    IDLE = "idle"            # Created, never started (or reset)
    LISTENING = "listening"  # Accepting recognition events
    STOPPED = "stopped"      # Stopped by user or fatal error


class SessionStatus(str, Enum):
    """Coarse status events reported to the UI."""
    LISTENING = "listening"
    PROCESSING = "processing"
    SENDING = "sending"
    SUCCESS = "success"
    ERROR = "error"
    UNSUPPORTED = "unsupported"


class ResultOutcome(str, Enum):
    """What the controller did with one recognition event."""
    NOT_LISTENING = "not_listening"
    INTERIM = "interim"
    THROTTLED = "throttled"
    LOW_CONFIDENCE = "low_confidence"
    LOCKED = "locked"
    EMPTY = "empty"
    DUPLICATE = "duplicate"
    APPLIED = "applied"


# =============================================================================
# Scheduling
# =============================================================================

class Scheduler(ABC):
    """Runs a callback after a delay; the returned handle has cancel()."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> Any:
        pass


class AsyncioScheduler(Scheduler):
    """Schedules on the running asyncio event loop."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return asyncio.get_running_loop().call_later(delay, callback)


# =============================================================================
# Command Detection & Cursor Policy
# =============================================================================

_COMMANDS = "|".join(re.escape(keyword) for keyword in longest_first(COMMAND_KEYWORDS))
_COMMAND_ONLY = re.compile(rf"^(?:{_COMMANDS})$", re.IGNORECASE)
_COMMAND_SUFFIX = re.compile(rf"(?:^|\s)(?:{_COMMANDS})$", re.IGNORECASE)


def split_command(text: str) -> Tuple[str, bool]:
    """
    Detect an advance command spoken alone or at the end of an utterance.

    Returns:
        (remaining content, whether to advance after it)

    Example:
        >>> split_command("عشرين صفحة انتهى")
        ('عشرين صفحة', True)
        >>> split_command("خلص")
        ('', True)
    """
    stripped = text.strip()
    if _COMMAND_ONLY.match(stripped):
        return "", True
    suffix = _COMMAND_SUFFIX.search(stripped)
    if suffix:
        return stripped[:suffix.start()].strip(), True
    return stripped, False


def advance_cursor(cursor: int, field_count: int = FIELD_COUNT) -> Tuple[int, bool]:
    """
    Move the cursor to the next field.

    Past the last field the cursor wraps to 0 and the same row keeps being
    filled; the caller decides whether a wrap also commits the row.

    Returns:
        (next cursor, whether it wrapped)
    """
    if cursor >= field_count - 1:
        return 0, True
    return cursor + 1, False


# =============================================================================
# Controller
# =============================================================================

class RecognitionSessionController:
    """
    Voice capture state machine for one record-entry session.

    Usage:
        controller = RecognitionSessionController(recognizer, on_status=notify)
        controller.start()
        # recognizer adapter forwards events:
        controller.handle_result(RecognitionEvent("عشرين صفحة انتهى", 0.9, True))
        controller.handle_end()
    """

    def __init__(
        self,
        recognizer: Optional[Recognizer],
        profile: Optional[DeviceProfile] = None,
        on_status: Optional[Callable[[SessionStatus], None]] = None,
        scheduler: Optional[Scheduler] = None,
        clock: Callable[[], float] = time.monotonic,
        today: Callable[[], date] = date.today,
        commit_row_on_wrap: Optional[bool] = None,
    ):
        self.recognizer = recognizer
        self.profile = profile or DeviceProfile.for_device(
            DeviceClass.DESKTOP, settings.VOICE_MIN_CONFIDENCE
        )
        self.on_status = on_status
        self.on_row_committed: Optional[Callable[[List[str]], None]] = None
        self.scheduler = scheduler or AsyncioScheduler()
        self.clock = clock
        self.today = today
        self.commit_row_on_wrap = (
            settings.VOICE_COMMIT_ROW_ON_WRAP if commit_row_on_wrap is None else commit_row_on_wrap
        )

        self.state = SessionState.IDLE
        self.cursor = 0
        self.record: List[str] = empty_record()
        self.live_transcript = ""
        self.error_message: Optional[str] = None
        self.recent_utterances: Deque[str] = deque(maxlen=RECENT_UTTERANCE_WINDOW)

        self._processing_until: Optional[float] = None
        self._last_interim_at: Optional[float] = None
        self._restart_handle: Any = None
        self._clear_handle: Any = None

    @property
    def is_listening(self) -> bool:
        return self.state == SessionState.LISTENING

    @property
    def supported(self) -> bool:
        return self.recognizer is not None and self.recognizer.supported

    def notify(self, status: SessionStatus) -> None:
        """Report a status event to the UI callback, if any."""
        if self.on_status:
            self.on_status(status)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self) -> bool:
        """
        Start listening.

        Returns:
            True if the controller is listening afterwards
        """
        if not self.supported:
            logger.warning("Speech recognition unsupported on this client")
            self.notify(SessionStatus.UNSUPPORTED)
            return False

        if self.is_listening:
            return True

        self.state = SessionState.LISTENING
        self.error_message = None
        self._processing_until = None
        self._last_interim_at = None
        self.notify(SessionStatus.LISTENING)
        logger.info(f"Voice session listening ({self.profile.device_class.value})")

        self._start_recognizer()
        return self.is_listening

    def stop(self) -> None:
        """
        Stop listening.

        Takes effect immediately: pending restarts are cancelled and any
        result still in flight is discarded when it arrives.
        """
        self._cancel_restart()
        self._cancel_clear()
        self.live_transcript = ""

        if not self.is_listening:
            return

        self.state = SessionState.STOPPED
        self.notify(SessionStatus.PROCESSING)
        logger.info("Voice session stopped")

        try:
            self.recognizer.stop()
        except RecognizerError as e:
            logger.warning(f"Recognizer stop failed: {e.message}")

    def reset(self) -> None:
        """Stop and return to a clean slate (record, cursor, window, errors)."""
        self.stop()
        self.clear_record()
        self.recent_utterances.clear()
        self.live_transcript = ""
        self.error_message = None
        self._processing_until = None
        self._last_interim_at = None
        self.state = SessionState.IDLE

    def clear_record(self) -> None:
        """Blank the current record and move the cursor back to field 0."""
        self.record = empty_record()
        self.cursor = 0

    def _start_recognizer(self) -> None:
        try:
            self.recognizer.start()
        except RecognizerError as e:
            logger.error(f"Recognizer start failed: {e.message}")
            self._cancel_restart()
            self.state = SessionState.STOPPED
            self.error_message = RECOGNIZER_START_ERROR_MESSAGE
            self.notify(SessionStatus.ERROR)

    def _restart(self) -> None:
        self._restart_handle = None
        if self.is_listening:
            logger.debug("Restarting recognizer")
            self._start_recognizer()

    def _cancel_restart(self) -> None:
        if self._restart_handle is not None:
            self._restart_handle.cancel()
            self._restart_handle = None

    def _cancel_clear(self) -> None:
        if self._clear_handle is not None:
            self._clear_handle.cancel()
            self._clear_handle = None

    # -------------------------------------------------------------------------
    # Recognizer events
    # -------------------------------------------------------------------------

    def handle_result(self, event: RecognitionEvent) -> ResultOutcome:
        """
        Process one interim or final recognition result.

        Args:
            event: Result delivered by the recognizer adapter

        Returns:
            What was done with the result
        """
        if not self.is_listening:
            return ResultOutcome.NOT_LISTENING

        now = self.clock()

        if not event.is_final:
            return self._handle_interim(event, now)

        if event.confidence < self.profile.min_confidence:
            logger.warning(
                f"Low confidence ignored: '{event.transcript}' ({event.confidence:.2f})"
            )
            return ResultOutcome.LOW_CONFIDENCE

        if self._processing_until is not None and now < self._processing_until:
            logger.debug("Final result ignored while previous one is processed")
            return ResultOutcome.LOCKED

        cleaned = clean_transcript(event.transcript)
        if not cleaned:
            return ResultOutcome.EMPTY

        if cleaned in self.recent_utterances:
            logger.debug(f"Duplicate utterance ignored: '{cleaned}'")
            return ResultOutcome.DUPLICATE
        self.recent_utterances.append(cleaned)

        self._processing_until = now + PROCESSING_LOCK_SECONDS

        body, advance = split_command(cleaned)
        segments = segment(body)
        if advance:
            segments.append(ADVANCE)

        self.live_transcript = body or SEPARATOR_KEYWORD
        self.apply_segments(segments)
        self._schedule_clear()

        if self.profile.stop_after_final:
            try:
                self.recognizer.stop()
            except RecognizerError as e:
                logger.warning(f"Recognizer stop after final failed: {e.message}")

        return ResultOutcome.APPLIED

    def _handle_interim(self, event: RecognitionEvent, now: float) -> ResultOutcome:
        throttle = self.profile.interim_throttle_seconds
        if throttle and self._last_interim_at is not None and now - self._last_interim_at < throttle:
            return ResultOutcome.THROTTLED

        self._last_interim_at = now
        body, _ = split_command(event.transcript or "")
        self.live_transcript = body or SEPARATOR_KEYWORD
        return ResultOutcome.INTERIM

    def handle_error(self, code: str) -> None:
        """
        Handle a recognizer error code.

        Permission errors stop the session; everything else is transient.
        """
        if code in FATAL_ERROR_CODES:
            logger.error(f"Microphone permission denied ({code})")
            self._cancel_restart()
            self.state = SessionState.STOPPED
            self.error_message = PERMISSION_ERROR_MESSAGE
            self.notify(SessionStatus.ERROR)
        elif code in SILENT_ERROR_CODES:
            logger.debug(f"Recognizer: {code}")
        else:
            logger.warning(f"Speech error: {code}")

    def handle_end(self) -> None:
        """
        Handle the recognizer ending a run.

        While still listening, the recognizer is restarted after a short
        device-dependent delay to emulate continuous listening.
        """
        if not self.is_listening:
            return

        self._cancel_restart()
        self._restart_handle = self.scheduler.call_later(
            self.profile.restart_delay_seconds, self._restart
        )

    def _schedule_clear(self) -> None:
        self._cancel_clear()
        self._clear_handle = self.scheduler.call_later(
            LIVE_TRANSCRIPT_CLEAR_SECONDS, self._clear_live_transcript
        )

    def _clear_live_transcript(self) -> None:
        self._clear_handle = None
        self.live_transcript = ""

    # -------------------------------------------------------------------------
    # Record updates
    # -------------------------------------------------------------------------

    def apply_segments(self, segments: List[Segment]) -> None:
        """Write content segments at the cursor, advancing on each ADVANCE."""
        context = {"today": self.today()}
        for piece in segments:
            if piece.is_advance:
                self._advance()
                continue
            field_type = field_type_at(self.cursor)
            self.record[self.cursor] = coerce_field(field_type, piece.text, context)

    def _advance(self) -> None:
        next_cursor, wrapped = advance_cursor(self.cursor)
        if wrapped and self.commit_row_on_wrap and self.on_row_committed:
            self._commit_row()
        self.cursor = next_cursor

    def _commit_row(self) -> None:
        row = [value.strip() for value in self.record]
        if not any(row):
            return
        self.on_row_committed(row)
        self.record = empty_record()

    def set_cell(self, index: int, value: str) -> None:
        """Manual correction of one cell; cursor and window are untouched."""
        if not 0 <= index < FIELD_COUNT:
            raise IndexError(f"Field index out of range: {index}")
        self.record[index] = value

    def snapshot(self) -> Dict[str, Any]:
        """Serializable view of the session for the UI."""
        return {
            "state": self.state.value,
            "cursor": self.cursor,
            "field": FIELD_SCHEMA[self.cursor].name,
            "record": list(self.record),
            "liveTranscript": self.live_transcript,
            "error": self.error_message,
        }
