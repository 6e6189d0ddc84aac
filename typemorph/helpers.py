# helpers.py

import asyncio
import inspect
from typing import Any, Callable, Optional, Set

from .errors import CallbackError


def _callback_name(callback: Callable) -> str:
    return getattr(callback, '__name__', None) or type(callback).__name__


def _report(logger, callback: Callable, error: BaseException) -> None:
    wrapped = CallbackError(_callback_name(callback), error)
    if logger:
        logger.warning(f"User callback error: {wrapped}")


async def safe_callback(callback: Optional[Callable], *args: Any, logger=None) -> None:
    """
    Invoke a user callback, awaiting it when it returns an awaitable.

    Non-callables are ignored and anything the callback raises is logged.
    """
    if not callable(callback):
        return
    try:
        result = callback(*args)
        if inspect.isawaitable(result):
            await result
    except Exception as e:
        _report(logger, callback, e)


def fire_callback(callback: Optional[Callable], *args: Any, tasks: Set[asyncio.Task],
                  logger=None) -> None:
    """
    Synchronous counterpart of ``safe_callback`` for code that cannot await.

    An awaitable result is scheduled on the running loop; without a running
    loop it is discarded with a warning.

    Args:
        callback: User callback, ignored when not callable
        *args: Arguments passed to the callback
        tasks: Owner-held set keeping scheduled callback tasks alive until done
        logger: Optional logger for callback failures
    """
    if not callable(callback):
        return
    try:
        result = callback(*args)
    except Exception as e:
        _report(logger, callback, e)
        return
    if not inspect.isawaitable(result):
        return

    async def _drain():
        try:
            await result
        except Exception as e:
            _report(logger, callback, e)

    try:
        asyncio.get_running_loop()
    except RuntimeError:
        if inspect.iscoroutine(result):
            result.close()
        if logger:
            logger.warning(f"Dropped async callback {_callback_name(callback)}: no running event loop")
        return
    tasks.add(task := asyncio.ensure_future(_drain()))
    task.add_done_callback(tasks.discard)
