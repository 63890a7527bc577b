"""
Record Assembler

Collects the rows committed during one voice session and hands them to the
submission boundary.
"""

from typing import Any, Awaitable, Callable, List, Optional

from services.voice.session import RecognitionSessionController, SessionStatus
from utils.exceptions import TasmeeError
from utils.logging import get_logger

logger = get_logger(__name__)

# Receives committed rows (each an ordered list of 9 strings)
RowSubmitter = Callable[[List[List[str]]], Awaitable[Any]]


class RecordAssembler:
    """
    Row accumulation on top of a session controller.

    Usage:
        assembler = RecordAssembler(controller, submitter.submit)
        assembler.add_row()
        await assembler.submit()
    """

    def __init__(
        self,
        controller: RecognitionSessionController,
        submit_rows: Optional[RowSubmitter] = None,
    ):
        self.controller = controller
        self.submit_rows = submit_rows
        self.rows: List[List[str]] = []
        controller.on_row_committed = self._append_row

    @property
    def total_rows(self) -> int:
        """Committed rows plus the current record if it has content."""
        return len(self.rows) + (1 if self._current_row_has_content() else 0)

    def add_row(self) -> List[str]:
        """Commit the current record and start a blank one at field 0."""
        row = [value.strip() for value in self.controller.record]
        self._append_row(row)
        self.controller.clear_record()
        return row

    def reset(self) -> None:
        """Stop listening and discard everything captured so far."""
        self.controller.reset()
        self.rows.clear()
        logger.info("Voice session reset")

    async def submit(self) -> Optional[Any]:
        """
        Submit all committed rows.

        A current record with any content is committed first. Nothing is
        sent when there are no rows. Rows are consumed on success and kept
        on failure so the user can retry.

        Returns:
            Submission boundary result, or None when there was nothing to send

        Raises:
            TasmeeError: If the submission boundary fails
        """
        if self._current_row_has_content():
            self.add_row()

        if not self.rows:
            return None

        if self.submit_rows is None:
            raise TasmeeError("No submission target configured")

        rows = [list(row) for row in self.rows]
        self.controller.notify(SessionStatus.SENDING)
        logger.info(f"Submitting {len(rows)} row(s)")

        try:
            result = await self.submit_rows(rows)
        except TasmeeError as e:
            logger.error(f"Submission failed: {e.message}")
            self.controller.error_message = e.message
            self.controller.notify(SessionStatus.ERROR)
            raise

        self.rows.clear()
        self.controller.notify(SessionStatus.SUCCESS)
        return result

    def _append_row(self, row: List[str]) -> None:
        self.rows.append(row)
        logger.debug(f"Row committed ({len(self.rows)} total)")

    def _current_row_has_content(self) -> bool:
        return any(value.strip() for value in self.controller.record)
