"""
Record Assembler Tests

Row accumulation and submission through the submission boundary.

Run: pytest tests/test_record_assembler.py -v
"""

import pytest
from unittest.mock import AsyncMock

from services.voice.recognizer import RecognitionEvent
from services.voice.record_assembler import RecordAssembler
from services.voice.session import SessionState, SessionStatus
from utils.exceptions import SubmissionError, TasmeeError


def final(text):
    return RecognitionEvent(transcript=text, confidence=0.95, is_final=True)


class TestRecordAssembler:
    """Tests for committing and submitting rows."""

    @pytest.fixture
    def submit_rows(self):
        return AsyncMock(return_value={"success": True, "rowsAdded": 1})

    @pytest.fixture
    def assembler(self, controller, submit_rows):
        return RecordAssembler(controller, submit_rows)

    def test_add_row(self, assembler, controller):
        controller.start()
        controller.handle_result(final("سورة الملك انتهى"))

        row = assembler.add_row()

        assert row[0] == "سورة الملك"
        assert assembler.rows == [row]
        assert controller.record == [""] * 9
        assert controller.cursor == 0

    def test_total_rows_counts_current_record(self, assembler, controller):
        assert assembler.total_rows == 0

        controller.set_cell(0, "سورة الملك")
        assert assembler.total_rows == 1

        assembler.add_row()
        controller.set_cell(8, "ملاحظة")
        assert assembler.total_rows == 2

    @pytest.mark.asyncio
    async def test_submit_commits_current_record(self, assembler, controller, submit_rows, statuses):
        controller.set_cell(0, "سورة الملك")

        result = await assembler.submit()

        assert result == {"success": True, "rowsAdded": 1}
        sent = submit_rows.await_args.args[0]
        assert len(sent) == 1
        assert sent[0][0] == "سورة الملك"
        assert assembler.rows == []
        assert statuses == [SessionStatus.SENDING, SessionStatus.SUCCESS]

    @pytest.mark.asyncio
    async def test_submit_several_rows(self, assembler, controller, submit_rows):
        controller.set_cell(0, "سورة الملك")
        assembler.add_row()
        controller.set_cell(0, "سورة الكهف")
        assembler.add_row()

        await assembler.submit()

        sent = submit_rows.await_args.args[0]
        assert [row[0] for row in sent] == ["سورة الملك", "سورة الكهف"]

    @pytest.mark.asyncio
    async def test_nothing_to_submit(self, assembler, submit_rows, statuses):
        assert await assembler.submit() is None
        submit_rows.assert_not_awaited()
        assert statuses == []

    @pytest.mark.asyncio
    async def test_failed_submit_keeps_rows(self, controller, statuses):
        submit_rows = AsyncMock(side_effect=SubmissionError("Sheet unavailable", rows=1))
        assembler = RecordAssembler(controller, submit_rows)
        controller.set_cell(0, "سورة الملك")

        with pytest.raises(SubmissionError):
            await assembler.submit()

        assert len(assembler.rows) == 1
        assert controller.error_message == "Sheet unavailable"
        assert statuses == [SessionStatus.SENDING, SessionStatus.ERROR]

    @pytest.mark.asyncio
    async def test_submit_without_target(self, controller):
        assembler = RecordAssembler(controller)
        controller.set_cell(0, "سورة الملك")

        with pytest.raises(TasmeeError):
            await assembler.submit()

    def test_rows_committed_on_wrap(self, recognizer, scheduler, clock):
        from services.voice.session import RecognitionSessionController

        controller = RecognitionSessionController(
            recognizer, scheduler=scheduler, clock=clock, commit_row_on_wrap=True
        )
        assembler = RecordAssembler(controller)
        controller.cursor = 8
        controller.start()
        controller.handle_result(final("ملاحظة انتهى"))

        assert len(assembler.rows) == 1
        assert assembler.rows[0][8] == "ملاحظة"

    def test_reset(self, assembler, controller):
        controller.start()
        controller.set_cell(0, "سورة الملك")
        assembler.add_row()

        assembler.reset()

        assert assembler.rows == []
        assert controller.state == SessionState.IDLE
