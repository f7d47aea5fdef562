"""Message type definitions for the plugin side of the Stream Deck protocol.

Inbound messages subclass `Event`, outbound messages subclass `Command`. The
`event` argument in each class statement is the event name used on the wire."""

from __future__ import annotations

import dataclasses
import enum
import re
from typing import Any, Dict, Optional, Tuple, Type, TypeVar, Union

from . import infra

TEnum = TypeVar("TEnum", bound=enum.Enum)
TMessage = TypeVar("TMessage", bound=infra.Message)


def _unknown_member(cls: Type[TEnum], value: Any) -> TEnum:
    """Create (or reuse) a pseudo-member for a value the enum doesn't list. New
    hardware and new locales show up over time; we keep their raw values around
    instead of failing."""
    member_map = cls._value2member_map_
    if value not in member_map:
        data_type = int if issubclass(cls, int) else str
        member = data_type.__new__(cls, value)  # type: ignore
        member._name_ = f"UNKNOWN_{value}"
        member._value_ = value
        member_map[value] = member
    return member_map[value]  # type: ignore


class DeviceType(enum.IntEnum):
    """Hardware class of a device. Values that aren't listed here are kept as
    `UNKNOWN_<n>` pseudo-members."""

    STREAM_DECK = 0
    STREAM_DECK_MINI = 1
    STREAM_DECK_XL = 2
    STREAM_DECK_MOBILE = 3
    CORSAIR_G_KEYS = 4
    STREAM_DECK_PEDAL = 5
    CORSAIR_VOYAGER = 6
    STREAM_DECK_PLUS = 7

    @classmethod
    def _missing_(cls, value: object) -> Optional[DeviceType]:
        if isinstance(value, int) and not isinstance(value, bool):
            return _unknown_member(cls, value)
        return None


class Target(enum.IntEnum):
    """Which display a title or image update applies to."""

    BOTH = 0
    HARDWARE = 1
    SOFTWARE = 2


class Alignment(str, enum.Enum):
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


_HEX_COLOR = re.compile(r"#([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})?")


@dataclasses.dataclass(frozen=True)
class Color:
    """An RGB or RGBA color, written as `#rrggbb` or `#rrggbbaa`."""

    r: int
    g: int
    b: int
    a: Optional[int] = None

    @classmethod
    def from_json(cls, value: Any) -> Color:
        if not isinstance(value, str):
            raise TypeError(f"expected a hex color string, got {value!r}")
        match = _HEX_COLOR.fullmatch(value)
        if match is None:
            raise ValueError(f"{value!r} is not a #rrggbb or #rrggbbaa color")
        r, g, b, a = match.groups()
        return cls(int(r, 16), int(g, 16), int(b, 16), None if a is None else int(a, 16))

    def to_json(self) -> str:
        out = f"#{self.r:02x}{self.g:02x}{self.b:02x}"
        if self.a is not None:
            out += f"{self.a:02x}"
        return out


@dataclasses.dataclass(frozen=True)
class Coordinates:
    column: int
    row: int


@dataclasses.dataclass(frozen=True)
class DeviceSize:
    columns: int
    rows: int


@dataclasses.dataclass
class DeviceInfo:
    size: DeviceSize
    name: Optional[str] = None
    type: Optional[DeviceType] = None


@dataclasses.dataclass
class KeyPayload:
    """Payload of key events and `didReceiveSettings`.

    `state` is None for actions without states. Zero is a valid state index."""

    settings: Dict[str, Any] = dataclasses.field(default_factory=dict)
    coordinates: Optional[Coordinates] = None
    state: Optional[int] = None
    user_desired_state: Optional[int] = None
    is_in_multi_action: Optional[bool] = None


@dataclasses.dataclass
class VisibilityPayload:
    settings: Dict[str, Any] = dataclasses.field(default_factory=dict)
    coordinates: Optional[Coordinates] = None
    state: Optional[int] = None
    is_in_multi_action: Optional[bool] = None
    controller: Optional[str] = None


@dataclasses.dataclass
class TitleParameters:
    font_family: Optional[str] = None
    font_size: Optional[int] = None
    font_style: Optional[str] = None
    font_underline: Optional[bool] = None
    show_title: Optional[bool] = None
    title_alignment: Optional[Alignment] = None
    title_color: Optional[str] = None


@dataclasses.dataclass
class TitleParametersPayload:
    title: str
    title_parameters: TitleParameters
    settings: Dict[str, Any] = dataclasses.field(default_factory=dict)
    coordinates: Optional[Coordinates] = None
    state: Optional[int] = None


@dataclasses.dataclass
class GlobalSettingsPayload:
    settings: Dict[str, Any] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass
class ApplicationPayload:
    application: str


@dataclasses.dataclass
class TouchTapPayload:
    tap_pos: Tuple[int, int]
    hold: bool
    settings: Dict[str, Any] = dataclasses.field(default_factory=dict)
    coordinates: Optional[Coordinates] = None


@dataclasses.dataclass
class DialPayload:
    settings: Dict[str, Any] = dataclasses.field(default_factory=dict)
    coordinates: Optional[Coordinates] = None


@dataclasses.dataclass
class DialRotatePayload:
    ticks: int
    pressed: bool
    settings: Dict[str, Any] = dataclasses.field(default_factory=dict)
    coordinates: Optional[Coordinates] = None


class Event(infra.Message):
    """Base class for messages received from the Stream Deck application.

    Events about an action instance identify it by `context`. The action UUID in
    `action` isn't sent in every case, so it's optional."""


class Command(infra.Message):
    """Base class for messages sent to the Stream Deck application."""


@dataclasses.dataclass
class Unknown(infra.UnknownMessage, Event, catch_all=True):
    """An event this library doesn't know about. Carries the event name and the raw
    payload so newer host versions never break the message stream."""


@dataclasses.dataclass
class KeyDown(Event, event="keyDown"):
    """A key has been pressed."""

    context: str
    device: str
    payload: KeyPayload
    action: Optional[str] = None


@dataclasses.dataclass
class KeyUp(Event, event="keyUp"):
    """A key has been released."""

    context: str
    device: str
    payload: KeyPayload
    action: Optional[str] = None


@dataclasses.dataclass
class WillAppear(Event, event="willAppear"):
    """An instance of an action is now visible, either on a key or inside a
    multi-action."""

    context: str
    payload: VisibilityPayload
    device: Optional[str] = None
    action: Optional[str] = None


@dataclasses.dataclass
class WillDisappear(Event, event="willDisappear"):
    """An instance of an action is no longer visible."""

    context: str
    payload: VisibilityPayload
    device: Optional[str] = None
    action: Optional[str] = None


@dataclasses.dataclass
class TitleParametersDidChange(Event, event="titleParametersDidChange"):
    """The user changed the title or title parameters of an action instance."""

    context: str
    payload: TitleParametersPayload
    device: Optional[str] = None
    action: Optional[str] = None


@dataclasses.dataclass
class DidReceiveSettings(Event, event="didReceiveSettings"):
    """Persisted settings of an action instance, sent after `getSettings` or after
    the property inspector changed them."""

    context: str
    device: str
    payload: KeyPayload
    action: Optional[str] = None


@dataclasses.dataclass
class DidReceiveGlobalSettings(Event, event="didReceiveGlobalSettings"):
    payload: GlobalSettingsPayload


@dataclasses.dataclass
class DeviceDidConnect(Event, event="deviceDidConnect"):
    device: str
    device_info: DeviceInfo


@dataclasses.dataclass
class DeviceDidDisconnect(Event, event="deviceDidDisconnect"):
    device: str


@dataclasses.dataclass
class ApplicationDidLaunch(Event, event="applicationDidLaunch"):
    """A monitored application was launched."""

    payload: ApplicationPayload


@dataclasses.dataclass
class ApplicationDidTerminate(Event, event="applicationDidTerminate"):
    """A monitored application was terminated."""

    payload: ApplicationPayload


@dataclasses.dataclass
class SystemDidWakeUp(Event, event="systemDidWakeUp"):
    """The computer woke up from sleep."""


@dataclasses.dataclass
class SendToPlugin(Event, event="sendToPlugin"):
    """Message sent by the property inspector."""

    context: str
    payload: Dict[str, Any] = dataclasses.field(default_factory=dict)
    action: Optional[str] = None


@dataclasses.dataclass
class PropertyInspectorDidAppear(Event, event="propertyInspectorDidAppear"):
    context: str
    device: str
    action: Optional[str] = None


@dataclasses.dataclass
class PropertyInspectorDidDisappear(Event, event="propertyInspectorDidDisappear"):
    context: str
    device: str
    action: Optional[str] = None


@dataclasses.dataclass
class TouchTap(Event, event="touchTap"):
    """The touch screen of a Stream Deck+ was tapped."""

    context: str
    device: str
    payload: TouchTapPayload
    action: Optional[str] = None


@dataclasses.dataclass
class DialDown(Event, event="dialDown"):
    context: str
    device: str
    payload: DialPayload
    action: Optional[str] = None


@dataclasses.dataclass
class DialUp(Event, event="dialUp"):
    context: str
    device: str
    payload: DialPayload
    action: Optional[str] = None


@dataclasses.dataclass
class DialRotate(Event, event="dialRotate"):
    """A dial was rotated. `ticks` is negative for counter-clockwise rotation."""

    context: str
    device: str
    payload: DialRotatePayload
    action: Optional[str] = None


@dataclasses.dataclass
class TitlePayload:
    title: Optional[str] = None
    """None resets the title to the one set by the user."""
    target: Target = Target.BOTH
    state: Optional[int] = None


@dataclasses.dataclass
class ImagePayload:
    image: Optional[str] = None
    """Base64 data URL or SVG string. None resets the image."""
    target: Target = Target.BOTH
    state: Optional[int] = None


@dataclasses.dataclass
class StatePayload:
    state: int


@dataclasses.dataclass
class ProfilePayload:
    profile: str
    page: Optional[int] = None


@dataclasses.dataclass
class UrlPayload:
    url: str


@dataclasses.dataclass
class LogMessagePayload:
    message: str


@dataclasses.dataclass
class FeedbackLayoutPayload:
    layout: str


@dataclasses.dataclass
class TriggerDescriptionPayload:
    long_touch: Optional[str] = None
    push: Optional[str] = None
    rotate: Optional[str] = None
    touch: Optional[str] = None


@dataclasses.dataclass
class SetTitle(Command, event="setTitle"):
    context: str
    payload: TitlePayload = dataclasses.field(default_factory=TitlePayload)


@dataclasses.dataclass
class SetImage(Command, event="setImage"):
    context: str
    payload: ImagePayload = dataclasses.field(default_factory=ImagePayload)


@dataclasses.dataclass
class SetState(Command, event="setState"):
    context: str
    payload: StatePayload


@dataclasses.dataclass
class ShowAlert(Command, event="showAlert"):
    """Temporarily show an alert icon on the key."""

    context: str


@dataclasses.dataclass
class ShowOk(Command, event="showOk"):
    """Temporarily show a checkmark on the key."""

    context: str


@dataclasses.dataclass
class GetSettings(Command, event="getSettings"):
    """Request the persisted settings of an action instance. The answer arrives as
    `DidReceiveSettings`."""

    context: str


@dataclasses.dataclass
class SetSettings(Command, event="setSettings"):
    context: str
    payload: Dict[str, Any] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass
class GetGlobalSettings(Command, event="getGlobalSettings"):
    """Request the plugin-wide settings. `context` is the plugin UUID."""

    context: str


@dataclasses.dataclass
class SetGlobalSettings(Command, event="setGlobalSettings"):
    context: str
    payload: Dict[str, Any] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass
class SendToPropertyInspector(Command, event="sendToPropertyInspector"):
    action: str
    context: str
    payload: Dict[str, Any] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass
class SwitchToProfile(Command, event="switchToProfile"):
    """`context` is the plugin UUID."""

    context: str
    device: str
    payload: ProfilePayload


@dataclasses.dataclass
class OpenUrl(Command, event="openUrl"):
    payload: UrlPayload


@dataclasses.dataclass
class LogMessage(Command, event="logMessage"):
    """Write a line to the Stream Deck application's plugin log."""

    payload: LogMessagePayload


@dataclasses.dataclass
class SetFeedback(Command, event="setFeedback"):
    context: str
    payload: Dict[str, Any] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass
class SetFeedbackLayout(Command, event="setFeedbackLayout"):
    context: str
    payload: FeedbackLayoutPayload


@dataclasses.dataclass
class SetTriggerDescription(Command, event="setTriggerDescription"):
    context: str
    payload: TriggerDescriptionPayload = dataclasses.field(
        default_factory=TriggerDescriptionPayload
    )


def decode(
    frame: Union[str, bytes], message_class: Type[TMessage] = Event  # type: ignore
) -> TMessage:
    """Decode an inbound frame. See `infra.decode()`."""
    return infra.decode(frame, message_class)
