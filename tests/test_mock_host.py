import asyncio
import socket
import time

import pytest

import streamdeck_plugin as sd
from streamdeck_plugin import (
    ChannelClosed,
    ConnectError,
    MalformedMessage,
    RegistrationParams,
    infra,
)
from streamdeck_plugin.infra import _infra
from streamdeck_plugin.testing import MemoryChannel, MockHost

from .utils import PLUGIN_UUID, key_event, run


def test_host_port_is_freed() -> None:
    host = MockHost()
    host.start()
    original_port = host.get_port()

    # Assert that the port is not free.
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    result = sock.connect_ex(("127.0.0.1", original_port))
    assert result == 0
    sock.close()
    host.stop()

    time.sleep(0.05)

    # Assert that the port is now free.
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    result = sock.connect_ex(("127.0.0.1", original_port))
    assert result != 0
    sock.close()


def test_connect_and_exchange_messages() -> None:
    with MockHost() as host:
        params = RegistrationParams.parse(host.launch_args(PLUGIN_UUID))
        assert params.port == host.get_port()

        async def main() -> None:
            session = await sd.connect(params)
            assert session.state is sd.SessionState.REGISTERED

            loop = asyncio.get_running_loop()
            registration = await loop.run_in_executor(None, host.wait_for_registration)
            assert registration == {"event": "registerPlugin", "uuid": PLUGIN_UUID}

            await session.show_ok("c1")
            frame = await loop.run_in_executor(None, host.wait_for_frame)
            assert frame == {"event": "showOk", "context": "c1"}

            await loop.run_in_executor(None, host.send, key_event(state=0))
            message = await session.recv()
            assert isinstance(message, sd.KeyDown)
            assert message.payload.state == 0

            await loop.run_in_executor(None, host.send, sd.SystemDidWakeUp())
            assert await session.recv() == sd.SystemDidWakeUp()

            await loop.run_in_executor(None, host.send, "{not json")
            assert isinstance(await session.recv(), MalformedMessage)

            await session.close()

        run(main())


def test_host_disconnect_ends_stream() -> None:
    with MockHost() as host:
        params = RegistrationParams.parse(host.launch_args(PLUGIN_UUID))

        async def main() -> None:
            session = await sd.connect(params)
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(None, host.wait_for_registration)

            await loop.run_in_executor(None, host.send, {"event": "somethingNew"})
            await loop.run_in_executor(None, host.disconnect)

            items = [item async for item in session]
            assert len(items) == 1
            assert isinstance(items[0], sd.Unknown)
            assert session.state is sd.SessionState.CLOSED
            with pytest.raises(sd.ChannelClosed):
                await session.show_ok("c1")

        run(main())


def test_connect_error() -> None:
    # Grab a port, then release it so nothing is listening there.
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()

    async def main() -> None:
        with pytest.raises(ConnectError):
            await sd.PluginSession.open(port, "registerPlugin", PLUGIN_UUID, sd.Event)

    run(main())


def test_websocket_has_no_timeouts_or_proxy(monkeypatch: pytest.MonkeyPatch) -> None:
    seen = {}

    async def fake_connect(url: str, **kwargs):
        seen["url"] = url
        seen.update(kwargs)
        return object()

    monkeypatch.setattr(_infra, "connect", fake_connect)
    run(infra.WebsocketChannel.open("ws://127.0.0.1:1234"))

    assert seen["url"] == "ws://127.0.0.1:1234"
    for key in ("open_timeout", "ping_interval", "ping_timeout", "proxy"):
        assert key in seen and seen[key] is None, key


def test_failed_registration_closes_channel(monkeypatch: pytest.MonkeyPatch) -> None:
    class RecordingChannel(MemoryChannel):
        close_calls = 0

        async def close(self) -> None:
            self.close_calls += 1
            await super().close()

    channel = RecordingChannel(fail_sends=True)

    async def fake_open(url: str) -> MemoryChannel:
        return channel

    monkeypatch.setattr(infra.WebsocketChannel, "open", fake_open)

    async def main() -> None:
        with pytest.raises(ChannelClosed):
            await sd.PluginSession.open(1234, "registerPlugin", PLUGIN_UUID, sd.Event)
        assert channel.close_calls == 1

    run(main())
