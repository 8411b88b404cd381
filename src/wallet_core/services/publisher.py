import asyncio
import logging
from typing import Any, Set

logger = logging.getLogger(__name__)


class Publisher:
    """A simple asyncio-based fan-out publisher."""
    def __init__(self, maxsize: int = 0):
        self.subscribers: Set[asyncio.Queue] = set()
        self._maxsize = maxsize

    def subscribe(self) -> asyncio.Queue:
        """Adds a new subscriber and returns the queue for it."""
        queue = asyncio.Queue(maxsize=self._maxsize)
        self.subscribers.add(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue):
        """Removes a subscriber."""
        self.subscribers.discard(queue)

    async def publish(self, message: Any):
        """Publishes a message to all subscribers."""
        self.publish_nowait(message)

    def publish_nowait(self, message: Any):
        for queue in self.subscribers:
            try:
                queue.put_nowait(message)
            except asyncio.QueueFull:
                logger.warning("Subscriber queue full, dropping %r", message)


# Carries WalletJournalUpdated events to open chart windows.
wallet_journal_publisher = Publisher()
