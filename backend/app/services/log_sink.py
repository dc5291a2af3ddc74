"""
In-process log sink for loguru: keeps the most recent structured entries in a
fixed-size ring buffer so GET /logs can serve them without external storage.

Usage (in main.py):
    from app.services.log_sink import setup_logging
    setup_logging()
"""
import sys
import threading
from collections import deque
from typing import Deque, Dict, Any, List

from loguru import logger

MAX_LOG_ENTRIES = 5000

_buffer: Deque[Dict[str, Any]] = deque(maxlen=MAX_LOG_ENTRIES)
_lock = threading.Lock()


def ring_buffer_sink(message):
    """Loguru custom sink: append a structured entry, newest last."""
    record = message.record
    entry = {
        "ts": record["time"].strftime("%Y-%m-%d %H:%M:%S.%f")[:-3],
        "level": record["level"].name,
        "msg": str(record["message"]),
        "module": record["module"],
        "func": record["function"],
        "line": record["line"],
    }
    with _lock:
        _buffer.append(entry)


def recent_logs(limit: int = MAX_LOG_ENTRIES) -> List[Dict[str, Any]]:
    """Up to ``limit`` entries, newest first."""
    with _lock:
        entries = list(_buffer)
    entries.reverse()
    return entries[:limit]


def clear_logs():
    with _lock:
        _buffer.clear()


def setup_logging(level: str = "INFO"):
    """Route loguru to stderr at ``level`` and to the ring buffer."""
    logger.remove()
    logger.add(sys.stderr, level=level)
    logger.add(ring_buffer_sink, level=level, format="{message}")
