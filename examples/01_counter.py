"""Counter

A plugin that counts key presses. The count is stored in the settings of each
action instance, so it survives restarts of the Stream Deck application.

The Stream Deck application launches the plugin with its connection parameters.
To try it without the application, see `mock_host.py`.
"""

import asyncio

import streamdeck_plugin as sd


async def main() -> None:
    params = sd.RegistrationParams.from_argv()

    async with await sd.connect(params, verbose=True) as session:
        counts: dict = {}

        async for message in session:
            if isinstance(message, sd.WillAppear):
                counts[message.context] = message.payload.settings.get("count", 0)
                await session.set_title(message.context, str(counts[message.context]))

            elif isinstance(message, sd.KeyUp):
                count = counts.get(message.context, 0) + 1
                counts[message.context] = count
                await session.set_settings(message.context, {"count": count})
                await session.set_title(message.context, str(count))

            elif isinstance(message, sd.WillDisappear):
                counts.pop(message.context, None)

            elif isinstance(message, sd.MalformedMessage):
                await session.log_message(f"Could not decode frame: {message.error}")


if __name__ == "__main__":
    asyncio.run(main())
