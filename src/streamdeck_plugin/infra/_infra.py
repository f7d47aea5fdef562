from __future__ import annotations

import asyncio
import concurrent.futures
import enum
import inspect
import json
import traceback
import warnings
from asyncio.events import AbstractEventLoop
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    Generic,
    List,
    Optional,
    Protocol,
    Type,
    TypeVar,
    Union,
)

import rich
import websockets.exceptions
from websockets.asyncio.client import ClientConnection, connect

from .._exceptions import ChannelClosed, ConnectError, NotRegistered
from ._async_message_buffer import AsyncMessageBuffer
from ._codec import MalformedMessage, decode_or_malformed, encode
from ._messages import Message

TMessage = TypeVar("TMessage", bound=Message)
THandled = TypeVar("THandled")

Frame = Union[str, bytes]


class Channel(Protocol):
    """A duplex channel that carries whole websocket frames.

    `recv()` and `send()` raise `ChannelClosed` once the channel has terminated,
    regardless of which end closed it."""

    async def send(self, frame: str) -> None: ...

    async def recv(self) -> Frame: ...

    async def close(self) -> None: ...


class WebsocketChannel:
    """`Channel` backed by a `websockets` client connection."""

    def __init__(self, connection: ClientConnection) -> None:
        self._connection = connection

    @classmethod
    async def open(cls, url: str) -> WebsocketChannel:
        """Open a websocket connection. Raises `ConnectError` on failure."""
        try:
            connection = await connect(
                url,
                compression=None,
                max_size=None,
                open_timeout=None,
                ping_interval=None,
                ping_timeout=None,
                proxy=None,
            )
        except (OSError, asyncio.TimeoutError, websockets.exceptions.WebSocketException) as e:
            raise ConnectError(f"could not connect to {url}: {e}") from e
        return cls(connection)

    async def send(self, frame: str) -> None:
        try:
            await self._connection.send(frame)
        except websockets.exceptions.ConnectionClosed as e:
            raise ChannelClosed(str(e)) from e

    async def recv(self) -> Frame:
        try:
            return await self._connection.recv()
        except websockets.exceptions.ConnectionClosed as e:
            raise ChannelClosed(str(e)) from e

    async def close(self) -> None:
        await self._connection.close()


class MessageHandler:
    """Mix-in for dispatching inbound messages to callbacks by message type."""

    def __init__(self) -> None:
        self._incoming_handlers: Dict[type, List[Callable[[Any], Any]]] = {}

    def register_handler(
        self,
        message_cls: Type[THandled],
        callback: Callable[[THandled], Union[None, Awaitable[None]]],
    ) -> None:
        """Register a handler for a particular message type. Callbacks can be plain
        functions or coroutine functions."""
        if message_cls not in self._incoming_handlers:
            self._incoming_handlers[message_cls] = []
        self._incoming_handlers[message_cls].append(callback)

    def unregister_handler(
        self,
        message_cls: Type[THandled],
        callback: Optional[Callable[[THandled], Union[None, Awaitable[None]]]] = None,
    ) -> None:
        """Unregister a handler for a particular message type."""
        assert (
            message_cls in self._incoming_handlers
        ), "Tried to unregister a handler that hasn't been registered."
        if callback is None:
            self._incoming_handlers.pop(message_cls)
        else:
            self._incoming_handlers[message_cls].remove(callback)

    async def _handle_incoming_message(self, message: Any) -> None:
        """Handle incoming messages. A failing callback doesn't stop the others."""
        for cb in self._incoming_handlers.get(type(message), []):
            await error_print_wrapper(cb, message)


class SessionState(enum.Enum):
    CONNECTING = "connecting"
    REGISTERING = "registering"
    REGISTERED = "registered"
    CLOSED = "closed"


class Session(MessageHandler, Generic[TMessage]):
    """Registered connection to the Stream Deck application.

    Owns a `Channel`. After `register()`, commands can be sent with `send()` and
    inbound messages read with `async for`. Inbound frames that fail to decode are
    yielded as `MalformedMessage` items instead of ending the stream.

    Args:
        channel: Pre-opened channel to the application.
        message_class: Base class of inbound messages. Event names are looked up
            among its subclasses.
        verbose: Print connection status lines.
    """

    def __init__(
        self,
        channel: Channel,
        message_class: Type[TMessage],
        verbose: bool = False,
    ) -> None:
        super().__init__()
        self._channel = channel
        self._message_class = message_class
        self._verbose = verbose

        self._state = SessionState.CONNECTING
        self._buffer: AsyncMessageBuffer[Union[TMessage, MalformedMessage]] = (
            AsyncMessageBuffer()
        )
        self._write_lock = asyncio.Lock()
        self._reader_task: Optional[asyncio.Task[None]] = None
        self._reader_exception: Optional[BaseException] = None
        self._event_loop: Optional[AbstractEventLoop] = None

    @classmethod
    async def open(
        cls,
        port: int,
        register_event: str,
        plugin_uuid: str,
        message_class: Type[TMessage],
        host: str = "127.0.0.1",
        verbose: bool = False,
    ) -> Session[TMessage]:
        """Open a websocket to the application and register."""
        channel = await WebsocketChannel.open(f"ws://{host}:{port}")
        session = cls(channel, message_class, verbose=verbose)
        try:
            await session.register(register_event, plugin_uuid)
        except BaseException:
            await session.close()
            raise
        return session

    @property
    def state(self) -> SessionState:
        return self._state

    async def register(self, register_event: str, plugin_uuid: str) -> None:
        """Send the registration envelope. Returns once it has been written; the
        application doesn't acknowledge registration."""
        if self._state is SessionState.CLOSED:
            raise ChannelClosed("session is closed")
        assert self._state is SessionState.CONNECTING, "Session is already registered."

        self._event_loop = asyncio.get_running_loop()

        # Start reading before we register: the application may send events right
        # away, and they should be buffered, not dropped.
        self._reader_task = asyncio.create_task(self._read_loop())
        self._state = SessionState.REGISTERING
        await self._write(json.dumps({"event": register_event, "uuid": plugin_uuid}))

        if self._state is SessionState.REGISTERING:
            self._state = SessionState.REGISTERED
            if self._verbose:
                rich.print(
                    f"[bold](streamdeck)[/bold] Registered {plugin_uuid} with"
                    f" {register_event!r}"
                )

    async def send(self, message: Message) -> None:
        """Encode and send a message.

        Raises:
            ChannelClosed: the session has been closed.
            NotRegistered: registration hasn't completed. Nothing is sent.
        """
        if self._state is SessionState.CLOSED:
            raise ChannelClosed("session is closed")
        if self._state is not SessionState.REGISTERED:
            raise NotRegistered(f"cannot send while {self._state.value}")
        await self._write(encode(message))

    def send_threadsafe(self, message: Message) -> concurrent.futures.Future[None]:
        """Schedule `send()` on the session's event loop. Safe to call from any
        thread."""
        if self._event_loop is None:
            raise NotRegistered("session has not been registered")
        return asyncio.run_coroutine_threadsafe(self.send(message), self._event_loop)

    async def recv(self) -> Union[TMessage, MalformedMessage]:
        """Wait for the next inbound item. Raises `ChannelClosed` once the stream is
        exhausted."""
        try:
            return await self.__anext__()
        except StopAsyncIteration:
            raise ChannelClosed("session is closed") from None

    def __aiter__(self) -> Session[TMessage]:
        return self

    async def __anext__(self) -> Union[TMessage, MalformedMessage]:
        try:
            return await self._buffer.get()
        except StopAsyncIteration:
            if self._reader_exception is not None:
                exc, self._reader_exception = self._reader_exception, None
                raise exc from None
            raise

    async def run(self) -> None:
        """Dispatch inbound items to registered handlers until the session closes.
        Handlers run one at a time, in arrival order."""
        async for message in self:
            await self._handle_incoming_message(message)

    async def close(self) -> None:
        """Close the session and its channel. Buffered inbound items are dropped."""
        self._mark_closed()
        self._buffer.items.clear()

        reader = self._reader_task
        if reader is not None and reader is not asyncio.current_task():
            reader.cancel()
            await asyncio.gather(reader, return_exceptions=True)
        await self._channel.close()
        if self._verbose:
            rich.print("[bold](streamdeck)[/bold] Session closed")

    async def __aenter__(self) -> Session[TMessage]:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _write(self, frame: str) -> None:
        # Frames are written one at a time, so they're never interleaved.
        async with self._write_lock:
            if self._state is SessionState.CLOSED:
                raise ChannelClosed("session is closed")
            try:
                await self._channel.send(frame)
            except ChannelClosed:
                self._mark_closed()
                raise

    async def _read_loop(self) -> None:
        """Infinite loop waiting for, decoding, and buffering incoming frames."""
        try:
            while self._state is not SessionState.CLOSED:
                raw = await self._channel.recv()
                if isinstance(raw, bytes):
                    warnings.warn("[streamdeck] Ignoring binary websocket frame")
                    continue
                if self._state is SessionState.CLOSED:
                    break
                self._buffer.push(decode_or_malformed(raw, self._message_class))
        except ChannelClosed:
            if self._verbose and self._state is not SessionState.CLOSED:
                rich.print("[bold](streamdeck)[/bold] Connection closed by host")
        except Exception as e:
            self._reader_exception = e
        finally:
            self._mark_closed()

    def _mark_closed(self) -> None:
        if self._state is SessionState.CLOSED:
            return
        self._state = SessionState.CLOSED
        self._buffer.set_done()


async def error_print_wrapper(inner: Callable[[Any], Any], message: Any) -> None:
    """Call a handler, awaiting it if needed, and print the error if it raises."""
    try:
        result = inner(message)
        if inspect.isawaitable(result):
            await result
    except Exception as e:
        traceback.print_exception(type(e), e, e.__traceback__, limit=100)
