from __future__ import annotations

import dataclasses
from typing import Optional, Type, TypeVar, Union

from .._exceptions import ProtocolError
from ._messages import Message

TMessage = TypeVar("TMessage", bound=Message)


@dataclasses.dataclass(frozen=True)
class MalformedMessage:
    """Stream item for a frame that could not be decoded.

    Yielded in place of a message so that a single bad frame doesn't end the
    session."""

    raw: Union[str, bytes]
    error: ProtocolError
    event_name: Optional[str] = None


def encode(message: Message) -> str:
    """Serialize a message into a JSON text frame."""
    return message.serialize()


def decode(frame: Union[str, bytes], message_class: Type[TMessage]) -> TMessage:
    """Deserialize a JSON text frame into a message.

    Event names that aren't registered under `message_class` produce its catch-all
    message; they never raise. `ProtocolError` is raised for frames that aren't JSON
    objects with an `event` string, and for known events with missing or mistyped
    required fields."""
    return message_class.deserialize(frame)


def decode_or_malformed(
    frame: Union[str, bytes], message_class: Type[TMessage]
) -> Union[TMessage, MalformedMessage]:
    """Like `decode()`, but returns a `MalformedMessage` instead of raising."""
    try:
        return decode(frame, message_class)
    except ProtocolError as e:
        return MalformedMessage(raw=frame, error=e, event_name=e.event_name)
