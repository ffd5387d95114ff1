"""
Server-Sent Events (SSE) for real-time project notifications.
Used to tell open dashboards when a design project is saved or deleted (e.g., to refresh a designer's project list).
"""

import asyncio
import json
import logging
from typing import AsyncGenerator

logger = logging.getLogger(__name__)

PROJECT_EVENTS = {"project_saved", "project_deleted"}

# Connected SSE clients
_clients: set[asyncio.Queue] = set()


def format_event(event: dict) -> str:
    return f"event: {event['type']}\ndata: {json.dumps(event['data'])}\n\n"


async def subscribe() -> AsyncGenerator[str, None]:
    """
    Subscribe to project events. Yields formatted SSE messages.
    """
    queue: asyncio.Queue = asyncio.Queue()
    _clients.add(queue)
    logger.info(f"SSE client connected. Total clients: {len(_clients)}")

    try:
        while True:
            event = await queue.get()
            yield format_event(event)
    except asyncio.CancelledError:
        pass
    finally:
        _clients.discard(queue)
        logger.info(f"SSE client disconnected. Total clients: {len(_clients)}")


def publish(event_type: str, data: dict):
    """
    Publish a project event to all connected SSE clients.
    Non-blocking - queues the event for each client.
    """
    if event_type not in PROJECT_EVENTS:
        logger.warning(f"Unknown event type: {event_type}")
    if not _clients:
        return

    event = {"type": event_type, "data": data}
    for queue in _clients:
        try:
            queue.put_nowait(event)
        except asyncio.QueueFull:
            logger.warning("SSE client queue full, dropping event")
