# arena_server/services/broadcast.py
"""Outbound event shapes and per-connection delivery queues."""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from arena_server.config.settings import OUTBOUND_QUEUE_SIZE

logger = logging.getLogger(__name__)


class Target(Enum):
    """Which connections receive a broadcast."""

    SENDER = "sender"
    OTHERS = "others"
    ALL = "all"


@dataclass
class Broadcast:
    """A server-to-client notification of a state change."""

    type: str
    data: Any
    target: Target = Target.ALL
    origin: Optional[str] = None

    def to_message(self) -> dict:
        return {"type": self.type, "data": self.data}


def to_sender(event_type: str, data: Any, origin: str) -> Broadcast:
    return Broadcast(event_type, data, Target.SENDER, origin)


def to_others(event_type: str, data: Any, origin: str) -> Broadcast:
    return Broadcast(event_type, data, Target.OTHERS, origin)


def to_all(event_type: str, data: Any, origin: Optional[str] = None) -> Broadcast:
    return Broadcast(event_type, data, Target.ALL, origin)


class BroadcastCoordinator:
    """Routes broadcasts into one bounded outbound queue per connection.

    publish() never awaits, so the events produced while handling one
    inbound message are enqueued before the next message is processed.
    Each queue has a single writer, which keeps per-connection order.
    A connection whose queue fills up is detached and its writer is told
    to close it with CLOSE_SENTINEL.
    """

    CLOSE_SENTINEL = None

    def __init__(self, max_queue_size: int = OUTBOUND_QUEUE_SIZE):
        self.max_queue_size = max_queue_size
        self._queues: Dict[str, asyncio.Queue] = {}

    def attach(self, connection_id: str) -> asyncio.Queue:
        """Create the outbound queue for a new connection."""
        queue: asyncio.Queue = asyncio.Queue(maxsize=self.max_queue_size)
        self._queues[connection_id] = queue
        return queue

    def detach(self, connection_id: str):
        """Stop delivering to a connection. No error if it is unknown."""
        self._queues.pop(connection_id, None)

    def __contains__(self, connection_id: str) -> bool:
        return connection_id in self._queues

    def __len__(self) -> int:
        return len(self._queues)

    def recipients(self, broadcast: Broadcast) -> List[str]:
        """Resolve the target set of a broadcast against live connections."""
        if broadcast.target is Target.SENDER:
            if broadcast.origin in self._queues:
                return [broadcast.origin]
            return []
        if broadcast.target is Target.OTHERS:
            return [cid for cid in self._queues if cid != broadcast.origin]
        return list(self._queues)

    def publish(self, broadcast: Broadcast):
        """Enqueue a broadcast for every recipient."""
        message = broadcast.to_message()
        for connection_id in self.recipients(broadcast):
            try:
                self._queues[connection_id].put_nowait(message)
            except asyncio.QueueFull:
                logger.warning("Outbound queue full for %s, detaching", connection_id)
                self._drop_slow_connection(connection_id)

    def publish_all(self, broadcasts: Iterable[Broadcast]):
        for broadcast in broadcasts:
            logger.debug("Publishing %s to %s", broadcast.type, broadcast.target.value)
            self.publish(broadcast)

    def _drop_slow_connection(self, connection_id: str):
        queue = self._queues.pop(connection_id)
        while not queue.empty():
            queue.get_nowait()
        queue.put_nowait(self.CLOSE_SENTINEL)
