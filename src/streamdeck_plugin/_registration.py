"""Launch parameters passed to a plugin by the Stream Deck application.

The application starts each plugin as a subprocess with:

    -port <uint16> -pluginUUID <string> -registerEvent <string> -info <json>

Flags may appear in any order. Flags we don't recognize are skipped, so that newer
versions of the application can add launch options without breaking plugins."""

from __future__ import annotations

import dataclasses
import enum
import json
import re
import sys
from typing import Any, Dict, List, Optional, Sequence

from . import infra
from ._exceptions import InvalidValue, MissingArgument, ProtocolError
from ._messages import Color, DeviceSize, DeviceType, _unknown_member

_PORT = re.compile(r"\+?[0-9]+")


class Language(str, enum.Enum):
    ENGLISH = "en"
    FRENCH = "fr"
    GERMAN = "de"
    SPANISH = "es"
    JAPANESE = "ja"
    CHINESE_CHINA = "zh_CN"

    @classmethod
    def _missing_(cls, value: object) -> Optional[Language]:
        if isinstance(value, str):
            # The application has sent both "zh_CN" and "zh_cn".
            folded = value.lower()
            for member in cls:
                if member.value.lower() == folded:
                    return member
            return _unknown_member(cls, value)
        return None


class Platform(str, enum.Enum):
    MAC = "mac"
    WINDOWS = "windows"

    @classmethod
    def _missing_(cls, value: object) -> Optional[Platform]:
        if isinstance(value, str):
            return _unknown_member(cls, value)
        return None


@dataclasses.dataclass
class ApplicationInfo:
    language: Language
    platform: Platform
    version: str
    platform_version: Optional[str] = None


@dataclasses.dataclass
class PluginInfo:
    uuid: str
    version: str


@dataclasses.dataclass
class DeviceRecord:
    """A device attached when the plugin was launched."""

    id: str
    size: DeviceSize
    name: Optional[str] = None
    type: Optional[DeviceType] = None


@dataclasses.dataclass
class UserColors:
    button_pressed_background_color: Optional[Color] = None
    button_pressed_border_color: Optional[Color] = None
    button_pressed_text_color: Optional[Color] = None
    disabled_color: Optional[Color] = None
    highlight_color: Optional[Color] = None
    mouse_down_color: Optional[Color] = None


@dataclasses.dataclass
class RegistrationInfo:
    """Typed view of the `-info` blob. The blob itself is kept, untouched, in `raw`."""

    application: ApplicationInfo
    plugin: PluginInfo
    device_pixel_ratio: Optional[int] = None
    devices: List[DeviceRecord] = dataclasses.field(default_factory=list)
    colors: UserColors = dataclasses.field(default_factory=UserColors)
    raw: Dict[str, Any] = dataclasses.field(
        default_factory=dict, compare=False, repr=False, metadata={"wire": False}
    )

    @classmethod
    def from_json(cls, text: str) -> RegistrationInfo:
        """Parse the `-info` argument. Raises `ValueError` for anything that isn't
        a JSON object with at least the application and plugin descriptions."""
        try:
            blob = json.loads(text)
        except RecursionError as e:
            raise ValueError("info is nested too deeply") from e
        if not isinstance(blob, dict):
            raise ValueError("expected a JSON object")
        try:
            info = infra.structure(cls, blob, "info")
        except ProtocolError as e:
            raise ValueError(str(e)) from e
        info.raw = blob
        return info


_FLAGS = {
    "-port": "port",
    "-pluginUUID": "pluginUUID",
    "-registerEvent": "registerEvent",
    "-info": "info",
}


@dataclasses.dataclass(frozen=True)
class RegistrationParams:
    """Connection parameters for a single plugin process."""

    port: int
    """Local TCP port the Stream Deck application is listening on."""
    plugin_uuid: str
    """Identifier of this plugin instance. Echoed back verbatim when registering."""
    register_event: str
    """Event name to register with. Depends on the protocol version, so we never
    validate it."""
    info: RegistrationInfo
    """Application, device and user preference metadata."""

    @classmethod
    def parse(cls, args: Sequence[str]) -> RegistrationParams:
        """Parse launch arguments, not including the program name.

        Raises:
            MissingArgument: a required flag was absent, or had no value after it.
            InvalidValue: the port or info value couldn't be interpreted.
        """
        raw: Dict[str, str] = {}
        i = 0
        while i < len(args):
            name = _FLAGS.get(args[i])
            if name is not None and i + 1 < len(args):
                raw[name] = args[i + 1]
                i += 2
            else:
                i += 1

        for name in ("port", "pluginUUID", "registerEvent", "info"):
            if name not in raw:
                raise MissingArgument(name)

        port_text = raw["port"]
        if (
            _PORT.fullmatch(port_text) is None
            or len(port_text) > 16
            or int(port_text) > 0xFFFF
        ):
            raise InvalidValue("port", port_text, "expected an integer in 0..65535")

        try:
            info = RegistrationInfo.from_json(raw["info"])
        except ValueError as e:
            raise InvalidValue("info", raw["info"], str(e)) from e

        return cls(
            port=int(port_text),
            plugin_uuid=raw["pluginUUID"],
            register_event=raw["registerEvent"],
            info=info,
        )

    @classmethod
    def from_argv(cls) -> RegistrationParams:
        """Parse the arguments of the current process."""
        return cls.parse(sys.argv[1:])
