# arena_server/services/websocket_service.py
"""WebSocket connection management and message handling."""

import asyncio
import json
import logging
import uuid
from typing import Optional

from fastapi import WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from .broadcast import BroadcastCoordinator
from .game_service import GameSession

logger = logging.getLogger(__name__)


class WebSocketService:
    """Manages WebSocket connections and message routing."""

    def __init__(self, session: GameSession, coordinator: Optional[BroadcastCoordinator] = None):
        self.session = session
        self.coordinator = coordinator if coordinator is not None else BroadcastCoordinator()

    async def handle_connection(self, websocket: WebSocket):
        """Run one connection from accept to cleanup."""
        await websocket.accept()
        connection_id = str(uuid.uuid4())
        logger.info("WebSocket connection accepted for %s as %s", websocket.client, connection_id)

        # Attach before connect so init is the first message queued.
        queue = self.coordinator.attach(connection_id)
        self.coordinator.publish_all(self.session.connect(connection_id))
        writer = asyncio.create_task(self._drain_queue(websocket, connection_id, queue))

        try:
            await self._handle_client_messages(websocket, connection_id)
        except WebSocketDisconnect:
            pass
        except Exception:
            logger.exception("WebSocket error for player %s", connection_id)
        finally:
            await self._handle_disconnect(websocket, connection_id, writer)

    async def _handle_client_messages(self, websocket: WebSocket, connection_id: str):
        """Handle incoming messages until the client leaves."""
        while True:
            data = await self._receive_message(websocket, connection_id)
            if data is None:
                continue
            if data.get("type") == "disconnect":
                return
            self.coordinator.publish_all(self.session.handle_message(connection_id, data))

    async def _receive_message(self, websocket: WebSocket, connection_id: str) -> Optional[dict]:
        """Read one frame as a JSON object, or None if it is not one."""
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            raise WebSocketDisconnect(message.get("code", 1000))

        raw = message.get("text")
        if raw is None and message.get("bytes") is not None:
            raw = message["bytes"].decode("utf-8", errors="replace")
        try:
            data = json.loads(raw) if raw is not None else None
        except ValueError:
            logger.debug("Dropping non-JSON frame from %s", connection_id)
            return None

        if not isinstance(data, dict):
            logger.debug("Dropping non-object message from %s", connection_id)
            return None
        return data

    async def _drain_queue(self, websocket: WebSocket, connection_id: str, queue: asyncio.Queue):
        """Single writer for a connection, preserving emission order."""
        while True:
            message = await queue.get()
            try:
                if message is BroadcastCoordinator.CLOSE_SENTINEL:
                    logger.warning("Closing %s, it is not keeping up", connection_id)
                    await websocket.close(code=1008)
                    return
                await websocket.send_json(message)
            except (OSError, RuntimeError, WebSocketDisconnect) as e:
                logger.warning("Send to %s failed, detaching: %s", connection_id, e)
                self.coordinator.detach(connection_id)
                return

    async def _handle_disconnect(self, websocket: WebSocket, connection_id: str, writer: asyncio.Task):
        """Handle client disconnection."""
        self.coordinator.detach(connection_id)
        self.coordinator.publish_all(self.session.disconnect(connection_id))

        writer.cancel()
        try:
            await writer
        except asyncio.CancelledError:
            pass

        if (
            websocket.application_state == WebSocketState.CONNECTED
            and websocket.client_state == WebSocketState.CONNECTED
        ):
            await websocket.close()
