"""Admin activity feed built from bus events.

Subscribes an ActivityFeed to subscription and testimonial events and keeps a
bounded in-memory buffer that the admin dashboard polls with a cursor:

  * each event gets an auto-increment integer id so clients can ask only for
    newer events (since=<last_id_seen>);
  * a Lock guards the buffer (uvicorn may serve requests from several threads);
    with several processes each keeps its own feed, acceptable for a
    non-critical activity view;
  * MAX_EVENTS caps memory use.
"""
from __future__ import annotations
from typing import List, Dict, Any, Optional
from threading import Lock
from datetime import datetime, timezone

from .Event_Bus import (
    EventBus, SUBSCRIPTION_CREATED, SUBSCRIPTION_STATUS_CHANGED, TESTIMONIAL_SUBMITTED, TESTIMONIAL_APPROVED,
)

MAX_EVENTS = 300  # keep a few hundred recent events


class ActivityFeed:
    def __init__(self, max_events: int = MAX_EVENTS):
        self._lock = Lock()
        self._events: List[Dict[str, Any]] = []
        self._next_id = 1
        self._max_events = max_events
        self._started = False

    def record(self, event_name: str, payload: Any):  # signature expected by EventBus
        evt: Dict[str, Any] = {
            'type': event_name,
            'ts': datetime.now(timezone.utc).isoformat(),
        }
        if isinstance(payload, dict):
            evt['actor_id'] = payload.get('actor_id')
            sub = payload.get('subscription')
            if isinstance(sub, dict):
                evt['subscription_id'] = sub.get('id')
                evt['plan'] = sub.get('plan')
                evt['status'] = sub.get('status')
            for k in ('from_status', 'to_status'):
                if k in payload:
                    evt[k] = payload[k]
            testimonial = payload.get('testimonial')
            if isinstance(testimonial, dict):
                evt['testimonial_id'] = testimonial.get('id')
                evt['rating'] = testimonial.get('rating')
        with self._lock:
            evt['id'] = self._next_id
            self._next_id += 1
            self._events.append(evt)
            if len(self._events) > self._max_events:
                del self._events[: len(self._events) - self._max_events]

    def start(self, bus: EventBus):
        """Idempotent start: subscribe once."""
        if self._started:
            return
        for name in (SUBSCRIPTION_CREATED, SUBSCRIPTION_STATUS_CHANGED, TESTIMONIAL_SUBMITTED, TESTIMONIAL_APPROVED):
            bus.subscribe(name, self.record)
        self._started = True

    def get_events(self, since: Optional[int] = None) -> Dict[str, Any]:
        """Return events newer than 'since' (exclusive), plus next_cursor for the following poll."""
        with self._lock:
            if since is None:
                data = list(self._events)
            else:
                data = [e for e in self._events if e['id'] > since]
            next_cursor = self._events[-1]['id'] if self._events else since or 0
        return {'events': data, 'next_cursor': next_cursor}


__all__ = ['ActivityFeed', 'MAX_EVENTS']
