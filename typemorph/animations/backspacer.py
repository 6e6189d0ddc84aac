# animations/backspacer.py

from typing import Optional

from ..display import NodeId, RenderSurface
from ..scheduling import CancellationToken, TimerRegistry
from .cursor import CursorManager
from .scroller import ScrollFollower


class _Budget:
    """Characters still allowed to be removed; ``None`` means unbounded."""
    def __init__(self, limit: Optional[int]):
        self.remaining = limit
        self.removed = 0

    @property
    def exhausted(self) -> bool:
        return self.remaining is not None and self.remaining <= 0

    def allowance(self, chunk_size: int) -> int:
        if self.remaining is None:
            return chunk_size
        return min(chunk_size, self.remaining)

    def consume(self, count: int) -> None:
        self.removed += count
        if self.remaining is not None:
            self.remaining -= count


class Backspacer:
    """
    Removes trailing content from a target node, chunk by chunk.

    Walks children last to first. Text nodes shrink from the end and are
    detached once empty; elements are emptied first and detached once they
    hold nothing but the caret, which then moves to the last remaining
    text. The tree stays well formed after every step, so a cancelled or
    budget-limited run leaves a valid partial tree.
    """
    def __init__(self, surface: RenderSurface, cursor: CursorManager,
                 scroller: ScrollFollower, timers: TimerRegistry, logger=None):
        self.surface = surface
        self.cursor = cursor
        self.scroller = scroller
        self.timers = timers
        self.logger = logger

    async def backspace(self, root: NodeId, limit: Optional[int], config,
                        token: CancellationToken) -> int:
        """
        Remove trailing characters from ``root``.

        Args:
            root: Node whose content is erased
            limit: Maximum characters to remove, None for everything
            config: Options supplying ``chunk_size`` and ``backspace_speed``
            token: Cancellation token checked before every removal

        Returns:
            Number of characters removed
        """
        budget = _Budget(limit)
        if budget.exhausted or self._halted(root, token):
            return 0
        self.cursor.relocate(root)
        await self._backspace_children(root, root, budget, config, token)
        if self.logger:
            self.logger.debug(f"Backspaced {budget.removed} character(s)")
        return budget.removed

    def _halted(self, root: NodeId, token: CancellationToken) -> bool:
        return token.cancelled or not self.surface.is_connected(root)

    async def _backspace_children(self, root: NodeId, parent: NodeId, budget: _Budget,
                                  config, token: CancellationToken) -> None:
        for child in reversed(self.surface.children(parent)):
            if self._halted(root, token) or budget.exhausted:
                break
            if self.cursor.is_marker(child) or self.surface.parent_of(child) != parent:
                continue

            if self.surface.is_text(child):
                await self._strip_text(root, child, budget, config, token)
                if not self.surface.get_text(child) and self.surface.parent_of(child) == parent:
                    self.surface.release(child)
            else:
                await self._backspace_children(root, child, budget, config, token)
                if self._halted(root, token):
                    break
                if self.cursor.is_empty(child) and self.surface.parent_of(child) == parent:
                    self._remove_element(root, child)

        self._sweep_empty_text(parent)

    async def _strip_text(self, root: NodeId, node: NodeId, budget: _Budget,
                          config, token: CancellationToken) -> None:
        chars = list(self.surface.get_text(node))
        while chars:
            if self._halted(root, token):
                return
            take = budget.allowance(config.chunk_size)
            if take <= 0:
                return
            take = min(take, len(chars))
            del chars[-take:]
            self.surface.set_text(node, "".join(chars))
            budget.consume(take)
            self.scroller.tick()
            await self.timers.sleep(config.backspace_speed, token)
        self.scroller.follow()

    def _remove_element(self, root: NodeId, element: NodeId) -> None:
        if self.cursor.contains(element):
            self.cursor.detach()
        self.surface.release(element)
        if self.cursor.node is not None:
            self.cursor.relocate(root)

    def _sweep_empty_text(self, parent: NodeId) -> None:
        if not self.surface.is_connected(parent):
            return
        for child in self.surface.children(parent):
            if self.surface.is_text(child) and not self.surface.get_text(child):
                self.surface.release(child)
