"""WebSocket endpoint pushing controller state to a UI shell."""

import asyncio
import json
from typing import Any, Optional

import structlog
from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from zumu_translator.errors import TranslatorError
from zumu_translator.models.events import (
    ErrorMessage,
    SendTextMessage,
    StartSessionMessage,
)
from zumu_translator.routes.api import build_status
from zumu_translator.services.session_controller import SessionController

logger = structlog.get_logger()

router = APIRouter()


class ConnectionHandler:
    """Handles a single WebSocket connection."""

    def __init__(self, websocket: WebSocket, controller: SessionController):
        self.websocket = websocket
        self.controller = controller
        self._send_lock = asyncio.Lock()
        self._dirty: asyncio.Queue = asyncio.Queue()
        self._status_task: Optional[asyncio.Task] = None
        self._unsubscribers: list = []

    async def handle(self) -> None:
        """Main handler for the WebSocket connection."""
        await self.websocket.accept()
        logger.info("WebSocket connected")

        try:
            self._status_task = asyncio.create_task(self._status_loop())

            # Subscribing delivers the current values, which sends the initial status
            self._subscribe_state()

            await self._message_loop()

        except WebSocketDisconnect:
            logger.info("WebSocket disconnected")
        except Exception as e:
            logger.error("WebSocket error", error=str(e))
            await self._send_error(str(e))
        finally:
            await self._cleanup()

    async def _message_loop(self) -> None:
        """Process incoming WebSocket messages."""
        while True:
            message = await self.websocket.receive()

            if message["type"] == "websocket.disconnect":
                break

            if message.get("text") is not None:
                await self._handle_control(message["text"])

    async def _handle_control(self, text: str) -> None:
        """Handle control message."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.error("Invalid JSON message", error=str(e))
            await self._send_error("Invalid JSON")
            return

        msg_type = data.get("type") if isinstance(data, dict) else None

        try:
            if msg_type == "start_session":
                command = StartSessionMessage.model_validate(data)
                await self.controller.start_session(command.config)
            elif msg_type == "end_session":
                await self.controller.end_session()
            elif msg_type == "toggle_mute":
                self.controller.toggle_mute()
            elif msg_type == "send_message":
                command = SendTextMessage.model_validate(data)
                await self.controller.send_message(command.text)
            elif msg_type == "reset":
                self.controller.reset_state()
            else:
                logger.warning("Unknown message type", msg_type=msg_type)
                await self._send_error(f"Unknown message type: {msg_type}")

        except ValidationError as e:
            await self._send_error(f"Invalid {msg_type} message: {e.error_count()} invalid fields")
        except TranslatorError as e:
            await self._send_error(e.message, code=e.kind.value)

    def _subscribe_state(self) -> None:
        """Subscribe to every controller observable."""
        for observable in (self.controller.state, self.controller.messages, self.controller.is_muted):
            self._unsubscribers.append(observable.subscribe(self._on_change))

    def _on_change(self, _value: Any) -> None:
        """Mark the status as stale so the status loop resends it."""
        self._dirty.put_nowait(None)

    async def _status_loop(self) -> None:
        """Send a status snapshot after each batch of changes."""
        while True:
            await self._dirty.get()
            while not self._dirty.empty():
                self._dirty.get_nowait()
            await self._send_status()

    async def _send_status(self) -> None:
        """Send session status."""
        status = build_status(self.controller)
        await self._send_json(status.model_dump(mode="json"))

    async def _send_error(self, message: str, code: Optional[str] = None) -> None:
        """Send error message."""
        error = ErrorMessage(message=message, code=code)
        await self._send_json(error.model_dump())

    async def _send_json(self, data: dict) -> None:
        """Send JSON message with lock."""
        async with self._send_lock:
            try:
                await self.websocket.send_json(data)
            except Exception as e:
                logger.error("Failed to send message", error=str(e))

    async def _cleanup(self) -> None:
        """Cleanup on disconnect."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

        if self._status_task:
            self._status_task.cancel()
            try:
                await self._status_task
            except asyncio.CancelledError:
                pass
            self._status_task = None


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """WebSocket endpoint for UI state updates and commands."""
    controller = websocket.app.state.controller
    handler = ConnectionHandler(websocket, controller)
    await handler.handle()
