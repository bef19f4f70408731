"""Simple Event Bus / Observer implementation for subscription and testimonial activity.

Event names:
  subscription.created        -> payload {"subscription": dict, "actor_id": str}
  subscription.status_changed -> payload {"subscription": dict, "actor_id": str, "from_status": str, "to_status": str}
  testimonial.submitted       -> payload {"testimonial": dict, "actor_id": str}
  testimonial.approved        -> payload {"testimonial": dict, "actor_id": str}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
SUBSCRIPTION_CREATED = "subscription.created"
SUBSCRIPTION_STATUS_CHANGED = "subscription.status_changed"
TESTIMONIAL_SUBMITTED = "testimonial.submitted"
TESTIMONIAL_APPROVED = "testimonial.approved"


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
		# A failing listener must not undo the action that raised the event
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception("Error delivering %s to %r", event_name, cb)


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS',
	'SUBSCRIPTION_CREATED', 'SUBSCRIPTION_STATUS_CHANGED', 'TESTIMONIAL_SUBMITTED', 'TESTIMONIAL_APPROVED',
]
