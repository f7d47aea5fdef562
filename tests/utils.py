import asyncio
import json
from typing import Any, Awaitable, Dict, Optional, Tuple, TypeVar

from streamdeck_plugin import PluginSession
from streamdeck_plugin.testing import MemoryChannel

T = TypeVar("T")

REGISTER_EVENT = "registerPlugin"
PLUGIN_UUID = "8A3C0A7D8C3F4B6A9F3E2A1B0C9D8E7F"


def run(coro: Awaitable[T], timeout: float = 5.0) -> T:
    """Run a coroutine on a fresh event loop. A hung session fails the test
    instead of blocking it."""

    async def inner() -> T:
        return await asyncio.wait_for(coro, timeout)

    return asyncio.run(inner())


async def registered_session(
    channel: Optional[MemoryChannel] = None,
) -> Tuple[PluginSession, MemoryChannel]:
    """Create a session on a memory channel, and register it."""
    if channel is None:
        channel = MemoryChannel()
    session = PluginSession(channel)
    await session.register(REGISTER_EVENT, PLUGIN_UUID)
    return session, channel


def key_event(
    event: str = "keyDown",
    context: str = "c1",
    state: Optional[int] = None,
    **payload: Any,
) -> str:
    """JSON frame for a key event."""
    body: Dict[str, Any] = {
        "settings": {},
        "coordinates": {"column": 0, "row": 0},
        "isInMultiAction": False,
        **payload,
    }
    if state is not None:
        body["state"] = state
    return json.dumps(
        {
            "event": event,
            "action": "com.example.plugin.action",
            "context": context,
            "device": "d1",
            "payload": body,
        }
    )
