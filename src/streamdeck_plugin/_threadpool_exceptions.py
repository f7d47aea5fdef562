from __future__ import annotations

import sys
import traceback
from concurrent.futures import Future
from typing import Any, Tuple, Type


def print_threadpool_errors(
    future: Future[Any], ignore: Tuple[Type[BaseException], ...] = ()
) -> None:
    """Print errors from a Future returned by `Session.send_threadsafe()`, should be
    used with `add_done_callback`. Exceptions of the `ignore` types are dropped."""
    if future.cancelled():
        print("Send was cancelled", file=sys.stderr)
        return

    exc = future.exception()
    if exc is not None and not isinstance(exc, ignore):
        print("Send failed with exception:", file=sys.stderr)
        traceback.print_exception(type(exc), exc, exc.__traceback__)
