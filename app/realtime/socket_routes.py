"""
Socket Routes

WS /ws - Authenticated real-time event stream

Handshake: pass the JWT as `?token=<jwt>` or an `Authorization: Bearer <jwt>`
header. Rejected handshakes are closed before accept with code 1008.

Messages are JSON objects {"event": <name>, "data": <payload>}:
- server -> client: "new-application", "job-expired", "pong"
- client -> server: "ping"
"""

import asyncio
import json
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect, status

from app.core.auth import extract_bearer
from app.core.errors import AuthenticationError
from app.realtime.bus import Connection, Event, PING, PONG

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Realtime"])


async def _pump_events(websocket: WebSocket, connection: Connection) -> None:
    """Send queued events to the socket in the order they were published."""
    try:
        while True:
            event = await connection.outbox.get()
            await websocket.send_json(event.to_message())
    except (WebSocketDisconnect, RuntimeError):
        # socket closed under us; the receive loop cleans up
        logger.debug("Stopped sending to %s", connection.id)


def _pong() -> Event:
    return Event(PONG, {
        "message": "Server is alive",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    })


@router.websocket("/ws")
async def event_socket(websocket: WebSocket, token: Optional[str] = Query(None)):
    bus = getattr(websocket.app.state, "event_bus", None)
    if bus is None:
        await websocket.close(code=status.WS_1011_INTERNAL_ERROR, reason="Real-time delivery unavailable")
        return

    credential = token or extract_bearer(websocket.headers.get("authorization"))
    try:
        connection = bus.connect(credential)
    except AuthenticationError as e:
        logger.warning("Socket authentication error: %s", e.message)
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason=f"Authentication error: {e.message}")
        return

    await websocket.accept()
    sender = asyncio.create_task(_pump_events(websocket, connection))
    try:
        while True:
            frame = await websocket.receive()
            if frame["type"] == "websocket.disconnect":
                break

            raw = frame.get("text")
            if raw is None:
                logger.debug("Ignoring binary socket frame from %s", connection.id)
                continue
            try:
                message = json.loads(raw)
            except ValueError:
                logger.debug("Ignoring malformed socket message from %s", connection.id)
                continue

            if isinstance(message, dict) and message.get("event") == PING:
                # Sent directly so a full outbox cannot swallow the reply
                await websocket.send_json(_pong().to_message())
    except WebSocketDisconnect:
        pass
    finally:
        sender.cancel()
        bus.disconnect(connection)
