# scheduling/__init__.py

from .timers import CancellationToken, TimerHandle, TimerRegistry
from .scheduler import OperationScheduler

__all__ = ['CancellationToken', 'TimerHandle', 'TimerRegistry', 'OperationScheduler']
