"""
Single-slot frame channel between the capture task and the classifier.
"""
import asyncio
import logging
from typing import Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SlotClosed(Exception):
    """Raised by FrameSlot.get() once the slot is closed and empty."""


class FrameSlot(Generic[T]):
    """
    Holds at most one pending item.

    Putting into a full slot overwrites the pending item, so the consumer
    always gets the newest frame and never works through a backlog.
    """

    def __init__(self):
        self._item: Optional[T] = None
        self._full = False
        self._closed = False
        self._event = asyncio.Event()
        self.dropped = 0

    @property
    def closed(self) -> bool:
        return self._closed

    def pending(self) -> bool:
        return self._full

    def put(self, item: T) -> bool:
        """
        Offer an item to the consumer.

        Args:
            item: The new frame

        Returns:
            True if an unconsumed item was overwritten
        """
        if self._closed:
            raise SlotClosed("put on closed slot")

        overwrote = self._full
        if overwrote:
            self.dropped += 1
            logger.debug("Dropped unconsumed frame (%d dropped so far)", self.dropped)

        self._item = item
        self._full = True
        self._event.set()
        return overwrote

    async def get(self) -> T:
        """Wait for the next item and take it out of the slot."""
        while not self._full:
            if self._closed:
                raise SlotClosed("slot closed")
            self._event.clear()
            await self._event.wait()

        item = self._item
        self._item = None
        self._full = False
        return item

    def clear(self) -> None:
        """Discard the pending item, if any."""
        self._item = None
        self._full = False

    def close(self) -> None:
        """Wake any waiting consumer. A pending item can still be taken."""
        self._closed = True
        self._event.set()
