import json

import pytest

from streamdeck_plugin import Coordinates, decode, encode
from streamdeck_plugin import property_inspector as pi


def test_action_info() -> None:
    info = pi.ActionInfo.from_json(
        json.dumps(
            {
                "action": "com.example.action",
                "context": "c1",
                "device": "d1",
                "payload": {
                    "settings": {"count": 2},
                    "coordinates": {"column": 1, "row": 2},
                },
            }
        )
    )
    assert info.action == "com.example.action"
    assert info.payload.settings == {"count": 2}
    assert info.payload.coordinates == Coordinates(1, 2)


@pytest.mark.parametrize("text", ["nope", "[]", '{"action": "a"}'])
def test_invalid_action_info(text: str) -> None:
    with pytest.raises(ValueError):
        pi.ActionInfo.from_json(text)


def test_inbound() -> None:
    message = decode(
        '{"event":"didReceiveGlobalSettings","payload":{"settings":{"a":1}}}',
        pi.PropertyInspectorEvent,
    )
    assert message == pi.DidReceiveGlobalSettings(pi.GlobalSettingsPayload({"a": 1}))

    message = decode('{"event":"willAppear"}', pi.PropertyInspectorEvent)
    assert isinstance(message, pi.Unknown)


@pytest.mark.parametrize(
    "command",
    [
        pi.GetSettings("c1"),
        pi.SetSettings("c1", {"a": 1}),
        pi.GetGlobalSettings("pi-uuid"),
        pi.SetGlobalSettings("pi-uuid", {"b": 2}),
        pi.OpenUrl(pi.UrlPayload("https://example.com")),
        pi.LogMessage(pi.LogMessagePayload("hi")),
        pi.SendToPlugin("com.example.action", "c1", {"x": 1}),
    ],
    ids=lambda c: type(c).__name__,
)
def test_command_round_trip(command: pi.PropertyInspectorCommand) -> None:
    assert decode(encode(command), pi.PropertyInspectorCommand) == command
