from __future__ import annotations

import asyncio
from typing import List, Optional, Union

from .._exceptions import ChannelClosed

Frame = Union[str, bytes]


class MemoryChannel:
    """In-process `Channel` for tests. Frames fed with `feed()` are returned by
    `recv()` in order; frames written by the session are appended to `sent`.

    Args:
        fail_sends: Make every `send()` fail as if the connection had dropped.
    """

    def __init__(self, fail_sends: bool = False) -> None:
        self.sent: List[str] = []
        self.fail_sends = fail_sends
        self.closed = False
        self._inbound: asyncio.Queue[Optional[Frame]] = asyncio.Queue()

    def feed(self, frame: Frame) -> None:
        """Queue a frame from the host."""
        self._inbound.put_nowait(frame)

    def close_remote(self) -> None:
        """Simulate the host closing the connection. Frames fed before this call
        are still delivered."""
        self._inbound.put_nowait(None)

    async def send(self, frame: str) -> None:
        if self.closed or self.fail_sends:
            self.closed = True
            raise ChannelClosed("memory channel is closed")
        self.sent.append(frame)

    async def recv(self) -> Frame:
        if self.closed:
            raise ChannelClosed("memory channel is closed")
        frame = await self._inbound.get()
        if frame is None:
            self.closed = True
            raise ChannelClosed("memory channel closed by host")
        return frame

    async def close(self) -> None:
        if not self.closed:
            self.closed = True
            # Wake up a pending recv().
            self._inbound.put_nowait(None)
