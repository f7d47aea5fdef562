"""Exception types raised by :mod:`streamdeck_plugin`."""

from __future__ import annotations

from typing import Optional


class StreamDeckError(Exception):
    """Base class for every error raised by this package."""


class ArgumentError(StreamDeckError):
    """The launch arguments passed by the Stream Deck application could not be
    used. Fatal to startup: a plugin should exit before trying to connect."""

    def __init__(self, name: str, message: str) -> None:
        super().__init__(message)
        self.name = name


class MissingArgument(ArgumentError):
    """A required launch flag was not present."""

    def __init__(self, name: str) -> None:
        super().__init__(name, f"missing required argument -{name}")


class InvalidValue(ArgumentError):
    """A launch flag was present, but its value could not be interpreted."""

    def __init__(self, name: str, raw: str, reason: str = "") -> None:
        message = f"invalid value for -{name}: {raw!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(name, message)
        self.raw = raw


class ConnectError(StreamDeckError):
    """The websocket to the Stream Deck application could not be opened."""


class ProtocolError(StreamDeckError):
    """A frame could not be decoded into a message.

    Raised for frames that are not JSON objects, and for known events whose
    required fields are missing or have the wrong type. Unknown event names are
    never a protocol error."""

    def __init__(self, message: str, event_name: Optional[str] = None) -> None:
        super().__init__(message)
        self.event_name = event_name


class NotRegistered(StreamDeckError):
    """A command was sent before the registration handshake completed."""


class ChannelClosed(StreamDeckError):
    """The channel to the Stream Deck application has been closed."""
