"""
Event Bus - in-process publish/subscribe for authenticated socket clients.

Each live socket is a Connection owned by one Principal and a member of two
groups: its role group ("HR" / "USER") and its identity group ("user-<id>").

Delivery is best effort and at most once:
- publish() never awaits; it drops the event into each connection's outbox
  and the socket endpoint drains the outbox in order
- nothing is kept for connections that join later
- a connection whose outbox is full misses the event

All mutation happens on the server's event loop, so the registry needs no
lock. Running the bus from several threads would need one.
"""

import asyncio
import json
import logging
import uuid
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, Iterable, Optional, Set

from app.core.auth import Principal, verify_credential
from app.core.errors import EventPayloadError

logger = logging.getLogger(__name__)

# Event names on the wire
NEW_APPLICATION = "new-application"
JOB_EXPIRED = "job-expired"
PING = "ping"
PONG = "pong"


@dataclass(frozen=True)
class Event:
    """A named notification. Built once, delivered once, then forgotten."""
    name: str
    payload: Dict[str, Any]

    def to_message(self) -> dict:
        return {"event": self.name, "data": self.payload}


@dataclass(eq=False)
class Connection:
    """A live socket registered with the bus."""
    principal: Principal
    groups: FrozenSet[str]
    outbox: "asyncio.Queue[Event]"
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    active: bool = True

    def deliver(self, event: Event) -> bool:
        """Queue an event for this connection without waiting. False if it was dropped."""
        if not self.active:
            return False
        try:
            self.outbox.put_nowait(event)
        except asyncio.QueueFull:
            logger.warning("Outbox full for connection %s, dropping %s", self.id, event.name)
            return False
        return True


class EventBus:
    """
    Connection registry plus group membership.

    Built once at startup and handed to whoever needs it
    (see app.main lifespan and app.realtime.notifier.get_notifier).
    """

    def __init__(self, verify: Callable[[Optional[str]], Principal] = verify_credential,
                 outbox_size: int = 100):
        self._verify = verify
        self._outbox_size = outbox_size
        self._connections: Dict[str, Connection] = {}
        self._groups: Dict[str, Set[str]] = defaultdict(set)

    # ------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------

    def connect(self, credential: Optional[str]) -> Connection:
        """
        Authenticate and register a connection.

        Raises:
            AuthenticationError: the credential was rejected; nothing is registered
        """
        principal = self._verify(credential)

        groups = frozenset({principal.role.value, principal.identity_group})
        connection = Connection(
            principal=principal,
            groups=groups,
            outbox=asyncio.Queue(maxsize=self._outbox_size),
        )
        self._connections[connection.id] = connection
        for group in groups:
            self._groups[group].add(connection.id)

        logger.info("Socket %s connected as %s (%s)", connection.id, principal.identity_group, principal.role.value)
        return connection

    def disconnect(self, connection: Connection) -> None:
        """Remove a connection and its memberships. Safe to call twice."""
        connection.active = False
        if self._connections.pop(connection.id, None) is None:
            return

        for group in connection.groups:
            members = self._groups.get(group)
            if members is None:
                continue
            members.discard(connection.id)
            if not members:
                del self._groups[group]

        logger.info("Socket %s disconnected", connection.id)

    def members(self, group: str) -> FrozenSet[str]:
        return frozenset(self._groups.get(group, ()))

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    # ------------------------------------------------------------
    # Delivery
    # ------------------------------------------------------------

    def publish(self, event_name: str, payload: Dict[str, Any]) -> int:
        """
        Broadcast to every connected socket, whatever its groups.

        Returns the number of connections the event was queued for.
        With nobody connected the event is simply dropped.
        """
        event = self._build_event(event_name, payload)
        return self._fan_out(event, list(self._connections.values()))

    def publish_to(self, group: str, event_name: str, payload: Dict[str, Any]) -> int:
        """Deliver only to members of one group."""
        event = self._build_event(event_name, payload)
        targets = [self._connections[cid] for cid in self.members(group) if cid in self._connections]
        return self._fan_out(event, targets)

    def _build_event(self, event_name: str, payload: Dict[str, Any]) -> Event:
        try:
            json.dumps(payload)
        except (TypeError, ValueError) as e:
            raise EventPayloadError(f"Payload for '{event_name}' is not JSON serializable: {e}")
        return Event(name=event_name, payload=payload)

    def _fan_out(self, event: Event, targets: Iterable[Connection]) -> int:
        delivered = sum(1 for connection in targets if connection.deliver(event))
        logger.debug("Event %s queued for %d connection(s)", event.name, delivered)
        return delivered
