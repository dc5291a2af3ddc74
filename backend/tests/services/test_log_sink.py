"""
Tests for the in-process loguru ring buffer.
"""
from collections import deque

from loguru import logger

from app.services import log_sink


def setup_function():
    # Exactly one ring-buffer handler, whatever other tests configured
    log_sink.setup_logging("INFO")
    log_sink.clear_logs()


def test_entries_newest_first():
    logger.info("first message")
    logger.warning("second message")

    entries = log_sink.recent_logs()
    assert [e["msg"] for e in entries] == ["second message", "first message"]
    assert entries[0]["level"] == "WARNING"
    assert entries[0]["module"] == "test_log_sink"
    assert entries[0]["func"] == "test_entries_newest_first"
    assert set(entries[0]) == {"ts", "level", "msg", "module", "func", "line"}


def test_below_level_not_recorded():
    logger.debug("hidden")
    assert log_sink.recent_logs() == []


def test_buffer_is_bounded(monkeypatch):
    monkeypatch.setattr(log_sink, "_buffer", deque(maxlen=3))
    for i in range(5):
        logger.info(f"msg {i}")

    assert [e["msg"] for e in log_sink.recent_logs()] == ["msg 4", "msg 3", "msg 2"]
    assert [e["msg"] for e in log_sink.recent_logs(limit=1)] == ["msg 4"]
