"""
Recognition Session Controller Tests

Lifecycle, gating of recognition results and cursor movement, driven by a
fake recognizer, scheduler and clock.

Run: pytest tests/test_session_controller.py -v
"""

import pytest
from datetime import date
from unittest.mock import AsyncMock

from services.voice.config import PAGES_COL_INDEX
from services.voice.recognizer import DeviceClass, DeviceProfile, RecognitionEvent
from services.voice.record_assembler import RecordAssembler
from services.voice.session import (
    PERMISSION_ERROR_MESSAGE,
    RECOGNIZER_START_ERROR_MESSAGE,
    RecognitionSessionController,
    ResultOutcome,
    SessionState,
    SessionStatus,
    advance_cursor,
    split_command,
)
from tests.conftest import FailingRecognizer, FakeRecognizer


def final(text, confidence=0.9):
    return RecognitionEvent(transcript=text, confidence=confidence, is_final=True)


def interim(text):
    return RecognitionEvent(transcript=text, confidence=0.5, is_final=False)


# ============================================================================
# Command Detection & Cursor Policy
# ============================================================================

class TestSplitCommand:
    """Tests for trailing/standalone advance commands."""

    def test_trailing_command(self):
        assert split_command("عشرين صفحة انتهى") == ("عشرين صفحة", True)

    def test_command_alone(self):
        assert split_command("خلص") == ("", True)
        assert split_command("التالي") == ("", True)

    def test_no_command(self):
        assert split_command("سورة البقرة") == ("سورة البقرة", False)

    def test_command_must_be_a_whole_word(self):
        """'ختم' ends with 'تم' but is not the command."""
        assert split_command("ختم") == ("ختم", False)


class TestAdvanceCursor:

    def test_moves_forward(self):
        assert advance_cursor(0) == (1, False)
        assert advance_cursor(7) == (8, False)

    def test_wraps_after_last_field(self):
        assert advance_cursor(8) == (0, True)


# ============================================================================
# Lifecycle
# ============================================================================

class TestLifecycle:
    """Tests for start/stop/restart behaviour."""

    def test_initial_state(self, controller):
        assert controller.state == SessionState.IDLE
        assert controller.cursor == 0
        assert controller.record == [""] * 9

    def test_start(self, controller, recognizer, statuses):
        assert controller.start() is True
        assert controller.state == SessionState.LISTENING
        assert recognizer.starts == 1
        assert statuses == [SessionStatus.LISTENING]

    def test_start_is_idempotent(self, controller, recognizer):
        controller.start()
        controller.start()
        assert recognizer.starts == 1

    def test_unsupported_platform(self, scheduler, clock):
        statuses = []
        controller = RecognitionSessionController(
            FakeRecognizer(available=False),
            on_status=statuses.append,
            scheduler=scheduler,
            clock=clock,
        )

        assert controller.start() is False
        assert controller.state == SessionState.IDLE
        assert statuses == [SessionStatus.UNSUPPORTED]

    def test_stop(self, controller, recognizer, statuses):
        controller.start()
        controller.stop()

        assert controller.state == SessionState.STOPPED
        assert recognizer.stops == 1
        assert statuses[-1] == SessionStatus.PROCESSING

    def test_results_after_stop_are_ignored(self, controller):
        controller.start()
        controller.stop()

        assert controller.handle_result(final("عشرين انتهى")) == ResultOutcome.NOT_LISTENING
        assert controller.record[0] == ""

    def test_restart_after_platform_end(self, controller, recognizer, scheduler):
        """The recognizer is restarted after a short delay while listening."""
        controller.start()
        controller.handle_end()

        assert len(scheduler.pending) == 1
        assert scheduler.pending[0].delay == pytest.approx(0.05)

        scheduler.run_pending()
        assert recognizer.starts == 2

    def test_stop_cancels_pending_restart(self, controller, recognizer, scheduler):
        controller.start()
        controller.handle_end()
        controller.stop()

        scheduler.run_pending()
        assert recognizer.starts == 1

    def test_no_restart_when_stopped(self, controller, scheduler):
        controller.start()
        controller.stop()
        controller.handle_end()

        assert scheduler.pending == []

    def test_permission_error_is_fatal(self, controller, scheduler, statuses):
        controller.start()
        controller.handle_error("not-allowed")

        assert controller.state == SessionState.STOPPED
        assert controller.error_message == PERMISSION_ERROR_MESSAGE
        assert statuses[-1] == SessionStatus.ERROR

        controller.handle_end()
        assert scheduler.pending == []

    def test_recognizer_start_failure_is_reported(self, scheduler, clock):
        statuses = []
        controller = RecognitionSessionController(
            FailingRecognizer(fail_after=0),
            on_status=statuses.append,
            scheduler=scheduler,
            clock=clock,
        )

        assert controller.start() is False
        assert controller.state == SessionState.STOPPED
        assert controller.error_message == RECOGNIZER_START_ERROR_MESSAGE
        assert statuses == [SessionStatus.LISTENING, SessionStatus.ERROR]

    def test_restart_failure_is_reported(self, scheduler, clock):
        statuses = []
        recognizer = FailingRecognizer(fail_after=1)
        controller = RecognitionSessionController(
            recognizer,
            on_status=statuses.append,
            scheduler=scheduler,
            clock=clock,
        )
        controller.start()
        controller.handle_end()
        scheduler.run_pending()

        assert recognizer.starts == 2
        assert controller.state == SessionState.STOPPED
        assert controller.snapshot()["error"] == RECOGNIZER_START_ERROR_MESSAGE
        assert statuses[-1] == SessionStatus.ERROR

    def test_can_start_again_after_start_failure(self, scheduler, clock):
        recognizer = FailingRecognizer(fail_after=0)
        controller = RecognitionSessionController(recognizer, scheduler=scheduler, clock=clock)
        controller.start()

        recognizer.fail_after = None
        assert controller.start() is True
        assert controller.error_message is None

    def test_transient_errors_keep_listening(self, controller):
        controller.start()
        controller.handle_error("no-speech")
        controller.handle_error("network")

        assert controller.is_listening

    def test_reset(self, controller, clock):
        controller.start()
        controller.handle_result(final("سورة البقرة انتهى"))
        controller.reset()

        assert controller.state == SessionState.IDLE
        assert controller.cursor == 0
        assert controller.record == [""] * 9
        assert len(controller.recent_utterances) == 0


# ============================================================================
# Result Gating
# ============================================================================

class TestResultGating:
    """Tests for confidence, lock and duplicate handling."""

    def test_low_confidence_final_is_dropped(self, controller):
        controller.start()

        assert controller.handle_result(final("عشرين", confidence=0.5)) == ResultOutcome.LOW_CONFIDENCE
        assert controller.record[0] == ""
        assert controller.cursor == 0

    def test_threshold_cannot_be_loosened(self):
        profile = DeviceProfile.for_device(DeviceClass.DESKTOP, min_confidence=0.3)
        assert profile.min_confidence == 0.75

    def test_duplicate_final_is_dropped(self, controller, clock):
        controller.start()
        controller.handle_result(final("سورة البقرة"))
        clock.advance(1.0)

        assert controller.handle_result(final("سورة البقرة")) == ResultOutcome.DUPLICATE

    def test_duplicate_after_cleaning(self, controller, clock):
        controller.start()
        controller.handle_result(final("سورة البقرة"))
        clock.advance(1.0)

        outcome = controller.handle_result(final("امم سورة سورة البقرة"))
        assert outcome == ResultOutcome.DUPLICATE

    def test_duplicate_window_holds_five(self, controller, clock):
        controller.start()
        for text in ["اول", "ثاني", "ثالث", "رابع", "خامس", "سادس"]:
            controller.handle_result(final(text))
            clock.advance(1.0)

        # "اول" has been pushed out of the window
        assert controller.handle_result(final("اول")) == ResultOutcome.APPLIED

    def test_processing_lock(self, controller, clock):
        controller.start()
        controller.handle_result(final("سورة البقرة"))
        clock.advance(0.2)

        assert controller.handle_result(final("سورة الكهف")) == ResultOutcome.LOCKED
        assert controller.record[0] == "سورة البقرة"

        clock.advance(0.4)
        assert controller.handle_result(final("سورة الكهف")) == ResultOutcome.APPLIED

    def test_noise_only_final(self, controller):
        controller.start()
        assert controller.handle_result(final("امم")) == ResultOutcome.EMPTY

    def test_interim_updates_live_transcript_only(self, controller):
        controller.start()

        assert controller.handle_result(interim("سورة البقرة انتهى")) == ResultOutcome.INTERIM
        assert controller.live_transcript == "سورة البقرة"
        assert controller.record[0] == ""


class TestMobileProfile:
    """Tests for mobile-specific recognizer handling."""

    @pytest.fixture
    def mobile(self, recognizer, scheduler, clock):
        return RecognitionSessionController(
            recognizer,
            profile=DeviceProfile.for_device(DeviceClass.MOBILE),
            scheduler=scheduler,
            clock=clock,
            today=lambda: date(2024, 5, 1),
        )

    def test_interim_throttle(self, mobile, clock):
        mobile.start()

        assert mobile.handle_result(interim("سورة")) == ResultOutcome.INTERIM
        clock.advance(0.1)
        assert mobile.handle_result(interim("سورة البقرة")) == ResultOutcome.THROTTLED
        clock.advance(0.3)
        assert mobile.handle_result(interim("سورة البقرة من")) == ResultOutcome.INTERIM

    def test_stops_after_each_final(self, mobile, recognizer):
        mobile.start()
        mobile.handle_result(final("سورة البقرة"))

        assert recognizer.stops == 1
        assert mobile.is_listening

    def test_slower_restart(self, mobile, scheduler):
        mobile.start()
        mobile.handle_end()

        assert scheduler.pending[0].delay == pytest.approx(0.2)


# ============================================================================
# Record Filling
# ============================================================================

class TestRecordFilling:
    """Tests for writing coerced values and moving the cursor."""

    def test_dictated_session(self, controller, clock):
        """Plan, date and pages dictated one utterance at a time."""
        controller.start()

        controller.handle_result(final("سورة البقرة من خمسة إلى عشرة انتهى"))
        clock.advance(1.0)
        controller.handle_result(final("12/3 انتهى"))
        clock.advance(1.0)
        controller.handle_result(final("عشرين صفحة انتهى"))

        assert controller.record[:3] == ["سورة البقرة (5-10)", "12/3/2024", "20"]
        assert controller.cursor == 3

    def test_several_fields_in_one_utterance(self, controller):
        controller.start()
        controller.handle_result(final("سورة الملك انتهى ٥/٣ انتهى خمسة انتهى"))

        assert controller.record[:3] == ["سورة الملك", "5/3/2024", "5"]
        assert controller.cursor == 3

    def test_repeated_separator_skips_field(self, controller):
        """Each spoken separator moves one field, so the second one skips the date."""
        controller.start()
        controller.handle_result(final("سورة الملك انتهى انتهى"))

        assert controller.record[0] == "سورة الملك"
        assert controller.record[1] == ""
        assert controller.cursor == 2

    def test_content_without_command_stays_on_field(self, controller, clock):
        controller.start()
        controller.handle_result(final("سورة الملك"))
        clock.advance(1.0)
        controller.handle_result(final("سورة الكهف"))

        assert controller.record[0] == "سورة الكهف"
        assert controller.cursor == 0

    def test_command_alone_advances_without_writing(self, controller):
        controller.cursor = 3
        controller.start()
        controller.handle_result(final("تم"))

        assert controller.record[3] == ""
        assert controller.cursor == 4

    def test_checkbox_answer(self, controller):
        controller.cursor = 3
        controller.start()
        controller.handle_result(final("نعم انتهى"))

        assert controller.record[3] == "TRUE"

    def test_live_transcript_is_cleared_later(self, controller, scheduler):
        controller.start()
        controller.handle_result(final("سورة الملك انتهى"))

        assert controller.live_transcript == "سورة الملك"
        scheduler.run_pending()
        assert controller.live_transcript == ""

    def test_wrap_keeps_row_by_default(self, controller):
        committed = []
        controller.on_row_committed = committed.append
        controller.cursor = 8
        controller.start()
        controller.handle_result(final("يحتاج مراجعة انتهى"))

        assert controller.cursor == 0
        assert controller.record[8] == "يحتاج مراجعة"
        assert committed == []

    def test_wrap_can_commit_row(self, recognizer, scheduler, clock):
        committed = []
        controller = RecognitionSessionController(
            recognizer,
            scheduler=scheduler,
            clock=clock,
            commit_row_on_wrap=True,
        )
        controller.on_row_committed = committed.append
        controller.cursor = 8
        controller.start()
        controller.handle_result(final("يحتاج مراجعة انتهى"))

        assert controller.cursor == 0
        assert committed[0][8] == "يحتاج مراجعة"
        assert controller.record == [""] * 9

    def test_wrap_without_listener_keeps_row(self, recognizer, scheduler, clock):
        controller = RecognitionSessionController(
            recognizer,
            scheduler=scheduler,
            clock=clock,
            commit_row_on_wrap=True,
        )
        controller.cursor = 8
        controller.start()
        controller.handle_result(final("يحتاج مراجعة انتهى"))

        assert controller.cursor == 0
        assert controller.record[8] == "يحتاج مراجعة"

    def test_set_cell(self, controller, clock):
        controller.start()
        controller.handle_result(final("سورة الملك انتهى"))
        controller.set_cell(0, "سورة الكهف (1-10)")

        assert controller.record[0] == "سورة الكهف (1-10)"
        assert controller.cursor == 1

    def test_set_cell_out_of_range(self, controller):
        with pytest.raises(IndexError):
            controller.set_cell(9, "x")

    def test_snapshot(self, controller):
        controller.start()
        snapshot = controller.snapshot()

        assert snapshot["state"] == "listening"
        assert snapshot["cursor"] == 0
        assert snapshot["field"] == "الخطة"
        assert len(snapshot["record"]) == 9


# ============================================================================
# Dictation To Submission
# ============================================================================

class TestDictationToSubmission:
    """A dictated value reaches the submission boundary unchanged."""

    @pytest.mark.asyncio
    async def test_spoken_pages_submitted_as_digits(self, controller):
        submit_rows = AsyncMock(return_value={"success": True, "rowsAdded": 1})
        assembler = RecordAssembler(controller, submit_rows)

        controller.start()
        controller.cursor = PAGES_COL_INDEX
        controller.handle_result(final("عشرين صفحة انتهى"))
        assembler.add_row()
        await assembler.submit()

        submit_rows.assert_awaited_once()
        sent = submit_rows.await_args.args[0]
        assert len(sent) == 1
        assert sent[0][PAGES_COL_INDEX] == "20"
