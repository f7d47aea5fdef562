from __future__ import annotations

import asyncio
import dataclasses
from collections import deque
from typing import Deque, Generic, TypeVar

T = TypeVar("T")


@dataclasses.dataclass
class AsyncMessageBuffer(Generic[T]):
    """FIFO buffer between the channel reader and the consumer of a session.

    Items are delivered exactly once, in the order they were pushed. Once `set_done()`
    is called, `get()` drains what's left and then stops."""

    items: Deque[T] = dataclasses.field(default_factory=deque)
    message_event: asyncio.Event = dataclasses.field(default_factory=asyncio.Event)
    done: bool = False

    def push(self, item: T) -> None:
        """Push a new item. Must be called from the event loop thread."""
        assert not self.done, "Tried to push to a finished buffer."
        self.items.append(item)

        # Pulse message event to notify consumers that a new item is available.
        self.message_event.set()

    def set_done(self) -> None:
        """Set the done flag. `get()` stops once buffered items are drained."""
        self.done = True

        # Pulse message event to make sure we aren't waiting for a new item.
        self.message_event.set()

    async def get(self) -> T:
        """Wait for the next item. Raises `StopAsyncIteration` when the buffer is
        done and empty.

        Cancelling a pending `get()` never loses an item: items are only popped after
        the wait has finished."""
        while not self.items:
            if self.done:
                raise StopAsyncIteration
            self.message_event.clear()
            await self.message_event.wait()
        return self.items.popleft()
