# scheduling/timers.py

import asyncio
import itertools
from dataclasses import dataclass
from typing import Dict, Optional


class CancellationToken:
    """
    Lifetime handle of one operation.

    Cancelling is one-way and synchronously releases every timer the token
    owns in its registry, which also wakes the sleeper waiting on it.
    """
    def __init__(self, registry: "TimerRegistry", label: str = ""):
        self._registry = registry
        self._cancelled = False
        self.label = label

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        self._registry.cancel_for(self)

    def __repr__(self) -> str:
        state = "cancelled" if self._cancelled else "live"
        return f"<CancellationToken {self.label or hex(id(self))} {state}>"


@dataclass
class TimerHandle:
    key: int
    token: CancellationToken
    handle: asyncio.TimerHandle
    waiter: asyncio.Future


class TimerRegistry:
    """
    Bookkeeping for every pending timed continuation of a session.

    Each handle leaves the registry exactly once: when it fires or when it is
    cancelled, whichever comes first.
    """
    def __init__(self):
        self._handles: Dict[int, TimerHandle] = {}
        self._keys = itertools.count(1)

    def __len__(self) -> int:
        return len(self._handles)

    def token(self, label: str = "") -> CancellationToken:
        return CancellationToken(self, label)

    async def sleep(self, seconds: float, token: CancellationToken) -> bool:
        """
        Wait ``seconds`` unless ``token`` is cancelled first.

        Never raises for cancellation; returns True when the full delay
        elapsed and False when the token cut it short.
        """
        if token.cancelled:
            return False
        loop = asyncio.get_running_loop()
        key = next(self._keys)
        waiter = loop.create_future()
        handle = loop.call_later(max(0.0, seconds), self._fire, key)
        self._handles[key] = TimerHandle(key, token, handle, waiter)
        try:
            await waiter
        finally:
            # Task cancellation from outside still has to release the handle
            self._release(key)
        return not token.cancelled

    def _fire(self, key: int) -> None:
        entry = self._handles.pop(key, None)
        if entry is not None and not entry.waiter.done():
            entry.waiter.set_result(None)

    def _release(self, key: int) -> Optional[TimerHandle]:
        entry = self._handles.pop(key, None)
        if entry is None:
            return None
        entry.handle.cancel()
        if not entry.waiter.done():
            entry.waiter.set_result(None)
        return entry

    def cancel_for(self, token: CancellationToken) -> int:
        """Clear every timer owned by ``token``; returns how many were pending."""
        keys = [key for key, entry in self._handles.items() if entry.token is token]
        for key in keys:
            self._release(key)
        return len(keys)

    def clear(self) -> int:
        keys = list(self._handles)
        for key in keys:
            self._release(key)
        return len(keys)
