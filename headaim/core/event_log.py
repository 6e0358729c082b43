import threading
import time
from collections import deque
from itertools import count
from typing import Any, Deque, Dict, List, Optional


class EventLog:
    """Bounded in-memory event log, newest entries win."""

    def __init__(self, maxlen: int = 500):
        self._lock = threading.Lock()
        self._events: Deque[Dict[str, Any]] = deque(maxlen=maxlen)
        self._ids = count(1)

    def insert_event(self, level: str, source: str, event_type: str, ref: str, details: Optional[Dict[str, Any]] = None):
        with self._lock:
            self._events.append({
                "id": next(self._ids),
                "ts_ms": int(time.time() * 1000),
                "level": level,
                "source": source,
                "event_type": event_type,
                "ref": ref,
                "details": dict(details or {}),
            })

    def list_events(self, limit: int = 100) -> List[Dict[str, Any]]:
        with self._lock:
            events = list(self._events)
        events.reverse()
        return events[:max(0, limit)]

    def __len__(self):
        with self._lock:
            return len(self._events)


# module-level singleton
_event_log: Optional[EventLog] = None


def get_event_log() -> EventLog:
    global _event_log
    if _event_log is None:
        _event_log = EventLog()
    return _event_log
