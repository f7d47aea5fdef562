"""Utilities for testing plugins without the Stream Deck application.

`MemoryChannel` feeds frames straight into a session, on the same event loop.
`MockHost` is a real websocket server that a plugin process can connect to."""

from ._memory import MemoryChannel as MemoryChannel
from ._mock_host import MockHost as MockHost
from ._mock_host import default_info as default_info
