""":mod:`streamdeck_plugin.infra` provides the protocol infrastructure.

We implement abstractions for:
- Defining dataclass-based message types, keyed by event name.
- Encoding and decoding JSON envelopes, with a catch-all for unknown events.
- Registering a session over a websocket channel.
- Asynchronous, ordered message sending and receiving.
- Registering callbacks for incoming messages.

These are what the plugin and property inspector APIs run on under-the-hood.
"""

from ._async_message_buffer import AsyncMessageBuffer as AsyncMessageBuffer
from ._codec import MalformedMessage as MalformedMessage
from ._codec import decode as decode
from ._codec import decode_or_malformed as decode_or_malformed
from ._codec import encode as encode
from ._infra import Channel as Channel
from ._infra import MessageHandler as MessageHandler
from ._infra import Session as Session
from ._infra import SessionState as SessionState
from ._infra import WebsocketChannel as WebsocketChannel
from ._infra import error_print_wrapper as error_print_wrapper
from ._messages import Message as Message
from ._messages import UnknownMessage as UnknownMessage
from ._messages import structure as structure
from ._messages import unstructure as unstructure
