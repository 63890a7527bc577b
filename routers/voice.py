"""
Voice Session Router

WebSocket hosting one recognition session per connection. The browser runs
the platform speech recognizer and acts as the Recognizer: it forwards
recognition events here and obeys the recognizer control messages sent back.

Client → server:
    {"type": "result", "transcript": str, "confidence": float, "isFinal": bool}
    {"type": "error", "error": "<recognizer error code>"}
    {"type": "end"}
    {"type": "start"} | {"type": "stop"} | {"type": "add_row"} | {"type": "reset"}
    {"type": "submit", "studentName": str}
    {"type": "edit_cell", "index": int, "value": str}

Server → client:
    {"type": "recognizer", "action": "start" | "stop" | "abort", ...}
    {"type": "status", "status": "<SessionStatus>"}
    {"type": "state", ...session snapshot, "rows": int, "totalRows": int}
    {"type": "submitted", "rowsAdded": int, "sheetUrl": str}
    {"type": "error", "error": str}
"""

import asyncio
import json
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect

from config.settings import settings
from core.dependencies import get_sheet_service
from services.sheets import StudentSheetService
from services.voice import (
    DeviceClass,
    DeviceProfile,
    RecognitionEvent,
    RecognitionSessionController,
    RecordAssembler,
    Recognizer,
    detect_device_class,
)
from utils.exceptions import TasmeeError
from utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Voice"])


class WebSocketRecognizer(Recognizer):
    """Recognizer whose start/stop/abort are relayed to the browser."""

    def __init__(self, outbox: "asyncio.Queue[Dict[str, Any]]", available: bool = True):
        self.outbox = outbox
        self.available = available
        self.language = settings.VOICE_LANGUAGE
        self.alternate_languages = tuple(settings.voice_alternate_languages_list)

    @property
    def supported(self) -> bool:
        return self.available

    def start(self) -> None:
        self.outbox.put_nowait({
            "type": "recognizer",
            "action": "start",
            "language": self.language,
            "alternateLanguages": list(self.alternate_languages),
        })

    def stop(self) -> None:
        self.outbox.put_nowait({"type": "recognizer", "action": "stop"})

    def abort(self) -> None:
        self.outbox.put_nowait({"type": "recognizer", "action": "abort"})


class VoiceConnection:
    """Controller, assembler and outbound queue of one WebSocket client."""

    def __init__(
        self,
        sheet_service: StudentSheetService,
        device_class: DeviceClass,
        student_name: Optional[str] = None,
        supported: bool = True,
    ):
        self.sheet_service = sheet_service
        self.student_name = student_name
        self.outbox: "asyncio.Queue[Dict[str, Any]]" = asyncio.Queue()
        self.recognizer = WebSocketRecognizer(self.outbox, available=supported)
        self.controller = RecognitionSessionController(
            self.recognizer,
            profile=DeviceProfile.for_device(device_class, settings.VOICE_MIN_CONFIDENCE),
            on_status=lambda status: self.send({"type": "status", "status": status.value}),
        )
        self.assembler = RecordAssembler(self.controller, self._write_rows)

    def send(self, message: Dict[str, Any]) -> None:
        self.outbox.put_nowait(message)

    def send_state(self) -> None:
        self.send({
            "type": "state",
            **self.controller.snapshot(),
            "rows": len(self.assembler.rows),
            "totalRows": self.assembler.total_rows,
        })

    async def _write_rows(self, rows):
        return await self.sheet_service.append_rows(self.student_name, rows)

    async def handle(self, message: Dict[str, Any]) -> None:
        """Dispatch one client message."""
        kind = message.get("type")

        if kind == "result":
            self.controller.handle_result(RecognitionEvent(
                transcript=str(message.get("transcript") or ""),
                confidence=float(message.get("confidence", 1.0)),
                is_final=bool(message.get("isFinal", False)),
            ))
        elif kind == "error":
            self.controller.handle_error(str(message.get("error") or ""))
        elif kind == "end":
            self.controller.handle_end()
        elif kind == "start":
            self.controller.start()
        elif kind == "stop":
            self.controller.stop()
        elif kind == "add_row":
            self.assembler.add_row()
        elif kind == "reset":
            self.assembler.reset()
        elif kind == "edit_cell":
            self.controller.set_cell(int(message["index"]), str(message.get("value") or ""))
        elif kind == "submit":
            await self._submit(message.get("studentName"))
        else:
            self.send({"type": "error", "error": f"Unknown message type: {kind}"})
            return

        self.send_state()

    async def _submit(self, student_name: Optional[str]) -> None:
        if student_name:
            self.student_name = student_name
        if not self.student_name:
            self.send({"type": "error", "error": "studentName is required to submit"})
            return

        try:
            result = await self.assembler.submit()
        except TasmeeError as e:
            self.send({"type": "error", "error": e.message})
            return

        if result is None:
            self.send({"type": "error", "error": "No rows to submit"})
            return

        self.send({
            "type": "submitted",
            "rowsAdded": result.rows_added,
            "sheetUrl": result.sheet_url,
        })


async def _pump(websocket: WebSocket, outbox: "asyncio.Queue[Dict[str, Any]]") -> None:
    while True:
        message = await outbox.get()
        await websocket.send_json(message)


@router.websocket("/ws/voice")
async def voice_session(
    websocket: WebSocket,
    device: Optional[DeviceClass] = Query(None, description="Client device class"),
    student_name: Optional[str] = Query(None, alias="studentName"),
    supported: bool = Query(True, description="Whether the browser has speech recognition"),
    sheet_service: StudentSheetService = Depends(get_sheet_service),
):
    """
    Live voice entry session.

    The device class defaults to the one detected from the User-Agent.
    """
    await websocket.accept()
    device_class = device or detect_device_class(websocket.headers.get("user-agent"))
    logger.info(f"Voice session connected: {websocket.client} ({device_class.value})")

    connection = VoiceConnection(sheet_service, device_class, student_name, supported)
    pump = asyncio.create_task(_pump(websocket, connection.outbox))
    connection.send_state()

    try:
        while True:
            data = await websocket.receive_text()
            try:
                message = json.loads(data)
            except ValueError:
                connection.send({"type": "error", "error": "Invalid JSON message"})
                continue
            if not isinstance(message, dict):
                connection.send({"type": "error", "error": "Message must be a JSON object"})
                continue

            try:
                await connection.handle(message)
            except (KeyError, TypeError, ValueError, IndexError) as e:
                logger.warning(f"Bad voice message {message.get('type')}: {e}")
                connection.send({"type": "error", "error": f"Invalid message: {e}"})

    except WebSocketDisconnect:
        logger.info(f"Voice session disconnected: {websocket.client}")
    finally:
        connection.controller.reset()
        pump.cancel()
