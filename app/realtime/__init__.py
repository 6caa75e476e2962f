"""
Realtime module - authenticated socket event bus.

- bus: EventBus, Connection, Event and event names
- notifier: post-commit hooks used by the job routes
- socket_routes: the /ws endpoint
"""

from app.realtime.bus import EventBus, Connection, Event, NEW_APPLICATION, JOB_EXPIRED
from app.realtime.notifier import JobEventNotifier, get_notifier

__all__ = [
    "EventBus", "Connection", "Event", "NEW_APPLICATION", "JOB_EXPIRED",
    "JobEventNotifier", "get_notifier",
]
