import asyncio
import functools
import inspect
import signal
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Callable, Iterator, Optional


async def run_sync(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """Run a blocking function in the default thread pool executor.

    Boto3 calls and pagination block; running them off the event loop lets a
    cancelled task stop waiting on them.

    Args:
        func: The function to run in the thread pool.
        *args: Positional arguments for ``func``.
        **kwargs: Keyword arguments for ``func``.

    Returns:
        The return value of ``func``.
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, functools.partial(func, *args, **kwargs))


async def call_maybe_async(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """
    Call ``func`` on the calling thread and await its result if it is awaitable.

    Selectors are called this way so an interactive prompt runs on the main
    thread, where Ctrl-C reaches it.
    """
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        return await result
    return result


@contextmanager
def interruptible() -> Iterator[None]:
    """
    Let SIGINT raise ``KeyboardInterrupt`` inside a blocking read.

    ``asyncio.run`` replaces the SIGINT handler with one that only cancels the
    main task and leaves a blocking ``readline`` waiting. The default handler is
    installed for the duration of the block on the main thread.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return
    previous = signal.signal(signal.SIGINT, signal.default_int_handler)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """
    Format a datetime as RFC 3339 in UTC with a ``Z`` suffix.

    Naive datetimes are assumed to already be UTC.

    Example:
        >>> format_timestamp(datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc))
        '2024-01-02T03:04:05Z'
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
