"""Handlers

Instead of matching on messages in a loop, callbacks can be registered per message
type. Python logging is forwarded to the Stream Deck application's log.
"""

import asyncio
import logging

import streamdeck_plugin as sd

logger = logging.getLogger("example")


async def main() -> None:
    params = sd.RegistrationParams.from_argv()
    session = await sd.connect(params)

    logging.basicConfig(level=logging.INFO)
    logging.getLogger().addHandler(sd.StreamDeckLogHandler(session))

    async def on_key_down(message: sd.KeyDown) -> None:
        logger.info("key down", extra={"context": message.context})
        await session.show_ok(message.context)

    def on_dial_rotate(message: sd.DialRotate) -> None:
        logger.info("dial rotated by %d", message.payload.ticks)

    def on_unknown(message: sd.Unknown) -> None:
        logger.warning("unhandled event %s", message.event_name)

    session.register_handler(sd.KeyDown, on_key_down)
    session.register_handler(sd.DialRotate, on_dial_rotate)
    session.register_handler(sd.Unknown, on_unknown)

    async with session:
        await session.run()


if __name__ == "__main__":
    asyncio.run(main())
