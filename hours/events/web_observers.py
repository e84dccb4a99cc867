"""Web-facing observers for schedule events.

Subscribes to the GLOBAL_EVENT_BUS for save/conflict events and keeps a
small in-memory ring buffer that the dashboard polls to show the
"saving / saved / failed" status without reloading.

Each event gets an auto-increment id (cursor) so clients can ask only for
newer events (since=<last_id_seen>). The buffer is per-process.
"""
from __future__ import annotations
from typing import List, Dict, Any
from threading import Lock
from datetime import datetime, timezone

from .Event_Bus import (
    GLOBAL_EVENT_BUS, SCHEDULE_SAVED, SCHEDULE_SAVE_FAILED, SCHEDULE_CONFLICTS_DETECTED
)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
MAX_EVENTS = 300
_started = False


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    with _lock:
        evt = {
            'id': _next_id,
            'type': event_name,
            'ts': datetime.now(timezone.utc).isoformat(),
        }
        if isinstance(payload, dict):
            for k in ('restaurant_id', 'error', 'message', 'count', 'special_days'):
                if k in payload:
                    evt[k] = payload[k]
        _events.append(evt)
        _next_id += 1
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    for name in (SCHEDULE_SAVED, SCHEDULE_SAVE_FAILED, SCHEDULE_CONFLICTS_DETECTED):
        GLOBAL_EVENT_BUS.subscribe(name, _record)
    _started = True


def get_events(since: int | None = None, restaurant_id: str | None = None) -> Dict[str, Any]:
    """Return events newer than 'since' (exclusive), optionally for one restaurant.

    Response includes next_cursor (largest id) so client can poll with since=next_cursor.
    """
    with _lock:
        data = list(_events) if since is None else [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    if restaurant_id is not None:
        data = [e for e in data if e.get('restaurant_id') == restaurant_id]
    return {'events': data, 'next_cursor': next_cursor}


__all__ = ['start', 'get_events']
