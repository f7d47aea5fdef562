"""Forwarding of Python log records to the Stream Deck application's plugin log."""

from __future__ import annotations

import functools
import logging
from typing import Any

from . import infra
from ._exceptions import ChannelClosed, NotRegistered
from ._messages import LogMessage, LogMessagePayload
from ._threadpool_exceptions import print_threadpool_errors

_RECORD_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", (), None))
) | {"message", "asctime"}


class KeyValueFormatter(logging.Formatter):
    """Formatter that appends the `extra` fields of a record as `, key: value`."""

    def __init__(self, fmt: str = "%(levelname)s %(message)s", **kwargs: Any) -> None:
        super().__init__(fmt, **kwargs)

    def formatMessage(self, record: logging.LogRecord) -> str:
        parts = [super().formatMessage(record)]
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRIBUTES and not key.startswith("_"):
                parts.append(f"{key}: {value}")
        return ", ".join(parts)


def _not_from_websockets(record: logging.LogRecord) -> bool:
    return not (record.name == "websockets" or record.name.startswith("websockets."))


class StreamDeckLogHandler(logging.Handler):
    """Send log records to the Stream Deck application as `logMessage` commands.

    Safe to use from any thread. Records emitted while the session isn't registered
    (before registration, or after the session closed) are dropped.

    Example:

        logging.getLogger().addHandler(StreamDeckLogHandler(session))
    """

    def __init__(self, session: infra.Session[Any], level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self._session = session
        self.setFormatter(KeyValueFormatter())
        self.addFilter(_not_from_websockets)

    def emit(self, record: logging.LogRecord) -> None:
        if self._session.state is not infra.SessionState.REGISTERED:
            return
        try:
            message = self.format(record)
            future = self._session.send_threadsafe(
                LogMessage(LogMessagePayload(message))
            )
        except Exception:
            self.handleError(record)
            return
        future.add_done_callback(
            functools.partial(
                print_threadpool_errors, ignore=(ChannelClosed, NotRegistered)
            )
        )
