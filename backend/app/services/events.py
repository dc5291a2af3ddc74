"""
Event sink for index lifecycle notifications.

The pipeline only knows ``publish(event)``; delivery (WebSocket broadcast)
happens in the background and never blocks or fails the caller.
"""
from typing import Dict, Any, Protocol

NEW_INDEX = "new_index"
INDEX_UPDATED = "index_updated"


class EventPublisher(Protocol):
    def publish(self, event: Dict[str, Any]) -> None:
        ...


def make_event(event_type: str, data: Dict[str, Any]) -> Dict[str, Any]:
    return {"type": event_type, "data": data}


def get_event_publisher() -> EventPublisher:
    """FastAPI dependency: the process-wide WebSocket connection manager."""
    from app.api.endpoints.websocket import manager
    return manager
