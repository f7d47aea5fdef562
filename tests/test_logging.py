import asyncio
import json
import logging

import streamdeck_plugin as sd
from streamdeck_plugin import KeyValueFormatter, StreamDeckLogHandler
from streamdeck_plugin.testing import MemoryChannel

from .utils import registered_session, run


def make_record(msg: str, name: str = "plugin", **extra) -> logging.LogRecord:
    record = logging.LogRecord(name, logging.WARNING, __file__, 1, msg, (), None)
    record.__dict__.update(extra)
    return record


def test_formatter() -> None:
    formatter = KeyValueFormatter()
    assert formatter.format(make_record("hello")) == "WARNING hello"
    assert (
        formatter.format(make_record("hello", context="c1", count=3))
        == "WARNING hello, context: c1, count: 3"
    )


def test_handler_forwards_records() -> None:
    async def main() -> None:
        session, channel = await registered_session()
        logger = logging.getLogger("streamdeck_plugin.tests.forward")
        logger.propagate = False
        handler = StreamDeckLogHandler(session)
        logger.addHandler(handler)
        try:
            logger.warning("button %s pressed", "A", extra={"context": "c1"})
            logging.getLogger("websockets.client").addHandler(handler)
            logging.getLogger("websockets.client").warning("ignored")
            # Sends are scheduled on the loop; let them run.
            for _ in range(10):
                await asyncio.sleep(0)
        finally:
            logger.removeHandler(handler)
            logging.getLogger("websockets.client").removeHandler(handler)

        assert [json.loads(f) for f in channel.sent[1:]] == [
            {
                "event": "logMessage",
                "payload": {"message": "WARNING button A pressed, context: c1"},
            }
        ]
        await session.close()

    run(main())


def test_handler_drops_records_when_not_registered() -> None:
    async def main() -> None:
        channel = MemoryChannel()
        session = sd.PluginSession(channel)
        handler = StreamDeckLogHandler(session)
        handler.handle(make_record("too early"))

        await session.register("registerPlugin", "uuid")
        await session.close()
        handler.handle(make_record("too late"))
        await asyncio.sleep(0)

        assert len(channel.sent) == 1

    run(main())
