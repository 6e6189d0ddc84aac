# scheduling/scheduler.py

import asyncio
from typing import Awaitable, Callable, Optional

from .timers import CancellationToken, TimerRegistry

Operation = Callable[[CancellationToken], Awaitable[None]]


class OperationScheduler:
    """
    Runs at most one operation at a time.

    A new submission cancels the active token, waits for the previous
    operation to settle, then runs under a fresh token. Cancellation resolves
    normally; any other error is logged and re-raised to the awaiter of the
    operation that failed, after bookkeeping has been cleared.
    """
    def __init__(self, timers: TimerRegistry, logger=None):
        self.timers = timers
        self.logger = logger
        self.typing = False
        self._token: Optional[CancellationToken] = None
        self._task: Optional[asyncio.Task] = None
        self._generation = 0
        self._closed = False

    @property
    def token(self) -> Optional[CancellationToken]:
        return self._token

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    def cancel_current(self) -> Optional[asyncio.Task]:
        """Cancel the active token and return the task still settling, if any."""
        if self._token is not None:
            self._token.cancel()
        return self._task if self.active else None

    def close(self) -> Optional[asyncio.Task]:
        """Cancel the current operation and refuse to start any other."""
        self._closed = True
        return self.cancel_current()

    async def settle(self) -> None:
        """Wait until the in-flight operation, if any, has finished."""
        while (task := self.cancel_current()) is not None:
            # asyncio.wait never raises the task's own error; its awaiter gets that
            await asyncio.wait({task})

    async def submit(self, operation: Operation, label: str = "") -> None:
        """
        Run ``operation`` once everything submitted before it has settled.

        Args:
            operation: Coroutine function called with a fresh CancellationToken
            label: Name used in log messages

        Raises:
            Exception: Whatever ``operation`` raised, other than cancellation
        """
        self._generation += 1
        generation = self._generation
        await self.settle()
        if self._closed or generation != self._generation:
            if self.logger:
                self.logger.debug(f"Operation {label or 'anonymous'} superseded before it started")
            return

        token = self.timers.token(label)
        self._token = token
        task = self._task = asyncio.ensure_future(self._run(operation, token, label))
        await task

    async def _run(self, operation: Operation, token: CancellationToken, label: str) -> None:
        self.typing = True
        try:
            await operation(token)
        except asyncio.CancelledError:
            token.cancel()
            raise
        except Exception as e:
            if self.logger:
                self.logger.error(f"Operation {label or 'anonymous'} failed: {e}", exc_info=True)
            raise
        finally:
            if self._token is token:
                self._token = None
                self.typing = False
