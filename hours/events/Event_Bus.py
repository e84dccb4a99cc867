"""Simple Event Bus / Observer implementation for schedule save notifications.

Event names used so far:
  schedule.saved -> payload {"restaurant_id": str, "special_days": int}
  schedule.save_failed -> payload {"restaurant_id": str, "error": str}
  schedule.conflicts_detected -> payload {"restaurant_id": str, "message": str, "count": int}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
from collections import defaultdict
from typing import Callable, Any, Dict, List
import logging

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
SCHEDULE_SAVED = "schedule.saved"
SCHEDULE_SAVE_FAILED = "schedule.save_failed"
SCHEDULE_CONFLICTS_DETECTED = "schedule.conflicts_detected"


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any):
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception("Error delivering %s to %s", event_name, cb)


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()


def publish(event_name: str, payload: Any = None) -> None:
	"""Publish an event on the global bus (sugar function)."""
	GLOBAL_EVENT_BUS.publish(event_name, payload)


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS', 'publish',
	'SCHEDULE_SAVED', 'SCHEDULE_SAVE_FAILED', 'SCHEDULE_CONFLICTS_DETECTED'
]
