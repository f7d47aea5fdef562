"""Message types for the property inspector side of the protocol.

A property inspector registers the same way a plugin does, with one extra launch
argument describing the action instance it's editing. It then exchanges a smaller
set of messages with the Stream Deck application:

    async with PropertyInspectorSession(channel) as session:
        await session.register(register_event, inspector_uuid)
        await session.send(GetSettings(context))
        async for message in session:
            ...
"""

from __future__ import annotations

import dataclasses
import json
from typing import Any, Dict, Optional, Type

from . import infra
from ._exceptions import ProtocolError
from ._messages import Coordinates, KeyPayload
from ._messages import GlobalSettingsPayload as GlobalSettingsPayload
from ._messages import LogMessagePayload as LogMessagePayload
from ._messages import UrlPayload as UrlPayload


@dataclasses.dataclass
class ActionInfoPayload:
    settings: Dict[str, Any] = dataclasses.field(default_factory=dict)
    coordinates: Optional[Coordinates] = None


@dataclasses.dataclass
class ActionInfo:
    """The action instance a property inspector was opened for."""

    action: str
    context: str
    device: str
    payload: ActionInfoPayload = dataclasses.field(default_factory=ActionInfoPayload)

    @classmethod
    def from_json(cls, text: str) -> ActionInfo:
        """Parse the action info launch argument. Raises `ValueError` if it isn't
        a JSON object describing an action instance."""
        try:
            blob = json.loads(text)
        except RecursionError as e:
            raise ValueError("action info is nested too deeply") from e
        try:
            return infra.structure(cls, blob, "actionInfo")
        except ProtocolError as e:
            raise ValueError(str(e)) from e


class PropertyInspectorEvent(infra.Message):
    """Base class for messages received by a property inspector."""


class PropertyInspectorCommand(infra.Message):
    """Base class for messages sent by a property inspector."""


@dataclasses.dataclass
class Unknown(infra.UnknownMessage, PropertyInspectorEvent, catch_all=True):
    """An event this library doesn't know about."""


@dataclasses.dataclass
class DidReceiveSettings(PropertyInspectorEvent, event="didReceiveSettings"):
    context: str
    device: str
    payload: KeyPayload
    action: Optional[str] = None


@dataclasses.dataclass
class DidReceiveGlobalSettings(PropertyInspectorEvent, event="didReceiveGlobalSettings"):
    payload: GlobalSettingsPayload


@dataclasses.dataclass
class SendToPropertyInspector(PropertyInspectorEvent, event="sendToPropertyInspector"):
    """Message sent by the plugin."""

    action: str
    context: str
    payload: Dict[str, Any] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass
class GetSettings(PropertyInspectorCommand, event="getSettings"):
    context: str


@dataclasses.dataclass
class SetSettings(PropertyInspectorCommand, event="setSettings"):
    context: str
    payload: Dict[str, Any] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass
class GetGlobalSettings(PropertyInspectorCommand, event="getGlobalSettings"):
    context: str


@dataclasses.dataclass
class SetGlobalSettings(PropertyInspectorCommand, event="setGlobalSettings"):
    context: str
    payload: Dict[str, Any] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass
class OpenUrl(PropertyInspectorCommand, event="openUrl"):
    payload: UrlPayload


@dataclasses.dataclass
class LogMessage(PropertyInspectorCommand, event="logMessage"):
    payload: LogMessagePayload


@dataclasses.dataclass
class SendToPlugin(PropertyInspectorCommand, event="sendToPlugin"):
    """Send data to the plugin. It arrives there as a `sendToPlugin` event."""

    action: str
    context: str
    payload: Dict[str, Any] = dataclasses.field(default_factory=dict)


class PropertyInspectorSession(infra.Session[PropertyInspectorEvent]):
    """Session that decodes inbound frames as property inspector events."""

    def __init__(
        self,
        channel: infra.Channel,
        message_class: Type[PropertyInspectorEvent] = PropertyInspectorEvent,
        verbose: bool = False,
    ) -> None:
        super().__init__(channel, message_class, verbose=verbose)
