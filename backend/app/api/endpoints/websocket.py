"""
WebSocket endpoint for index notifications
"""
import asyncio
import json
from datetime import datetime, timezone
from typing import Dict, Set, Any

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from loguru import logger

router = APIRouter()

SEND_TIMEOUT_SECONDS = 5.0


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class ConnectionManager:
    """
    Tracks connected listeners and fans out index events to all of them.

    ``publish`` is fire-and-forget: it schedules a broadcast on the running
    loop and returns. A listener whose send fails or exceeds
    ``send_timeout`` seconds is dropped.
    """

    def __init__(self, send_timeout: float = SEND_TIMEOUT_SECONDS):
        self.send_timeout = send_timeout
        self._connections: Set[WebSocket] = set()
        self._lock = asyncio.Lock()
        self._pending: Set[asyncio.Task] = set()

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    async def connect(self, websocket: WebSocket) -> None:
        """Accept a new WebSocket connection and greet it"""
        await websocket.accept()
        async with self._lock:
            self._connections.add(websocket)
        logger.info(f"WebSocket connected. Total connections: {len(self._connections)}")
        await websocket.send_json({
            "type": "connected",
            "message": "Connected to Prompt Index live updates",
            "timestamp": _now_iso(),
        })

    async def disconnect(self, websocket: WebSocket) -> None:
        async with self._lock:
            self._connections.discard(websocket)
        logger.info(f"WebSocket disconnected. Total connections: {len(self._connections)}")

    async def _send_to_client(self, websocket: WebSocket, data: Dict[str, Any]) -> bool:
        """Send data to a specific client; False when the send failed"""
        try:
            await asyncio.wait_for(websocket.send_json(data), timeout=self.send_timeout)
            return True
        except asyncio.TimeoutError:
            logger.warning(f"Client send timed out after {self.send_timeout}s, dropping it")
            return False
        except Exception as e:
            logger.warning(f"Error sending to client, dropping it: {e}")
            return False

    async def broadcast(self, data: Dict[str, Any]) -> None:
        """Broadcast data to all connected clients"""
        async with self._lock:
            listeners = list(self._connections)

        results = await asyncio.gather(*(self._send_to_client(ws, data) for ws in listeners))

        failed = [ws for ws, ok in zip(listeners, results) if not ok]
        if failed:
            async with self._lock:
                for ws in failed:
                    self._connections.discard(ws)

    def publish(self, event: Dict[str, Any]) -> None:
        """Schedule a broadcast of ``event`` without waiting for it."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(f"No running event loop, dropping {event.get('type')} event")
            return

        task = loop.create_task(self.broadcast(event))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)


# Singleton connection manager
manager = ConnectionManager()


@router.websocket("/ws")
async def websocket_events(websocket: WebSocket):
    """
    WebSocket endpoint for live index events.

    Protocol:
    - Server greets: {"type": "connected", "message": ..., "timestamp": ...}
    - Server pushes: {"type": "new_index" | "index_updated", "data": {...}}
    - Client can send: {"action": "ping"} to keep alive
    - Anything else is echoed back as {"type": "echo", "data": ..., "timestamp": ...}
    """
    await manager.connect(websocket)

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                message = json.loads(raw)
            except json.JSONDecodeError:
                message = raw

            if isinstance(message, dict) and message.get("action") == "ping":
                await websocket.send_json({"type": "pong"})
            else:
                await websocket.send_json({"type": "echo", "data": message, "timestamp": _now_iso()})

    except WebSocketDisconnect:
        await manager.disconnect(websocket)
    except Exception as e:
        logger.error(f"WebSocket error: {e}")
        await manager.disconnect(websocket)
