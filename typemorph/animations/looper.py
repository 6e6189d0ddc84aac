# animations/looper.py

import math
from typing import Sequence

from ..content import ContentNode
from ..display import NodeId, RenderSurface
from ..scheduling import CancellationToken, TimerRegistry
from .backspacer import Backspacer
from .cursor import CursorManager
from .typer import ContentTyper


class LoopController:
    """
    Sequences repeated typing passes over the same content.

    Typing -> end delay -> clear or backspace -> start delay -> typing, until
    ``loop_count`` passes have completed. The last pass either keeps its
    content or is cleared once more, per ``loop_final_behavior``. Only a
    typing pass that ran to completion counts as an iteration.
    """
    def __init__(self, surface: RenderSurface, typer: ContentTyper, backspacer: Backspacer,
                 cursor: CursorManager, timers: TimerRegistry, logger=None):
        self.surface = surface
        self.typer = typer
        self.backspacer = backspacer
        self.cursor = cursor
        self.timers = timers
        self.logger = logger
        self.iteration = 0

    def _halted(self, root: NodeId, token: CancellationToken) -> bool:
        return token.cancelled or not self.surface.is_connected(root)

    def clear(self, root: NodeId) -> None:
        """Wipe ``root`` in one step, keeping the caret in it."""
        # The caret may sit inside content that is about to be freed
        self.cursor.detach()
        self.surface.clear_children(root)
        if self.cursor.node is not None:
            self.cursor.attach(root)

    async def _clear(self, root: NodeId, config, token: CancellationToken) -> None:
        if config.loop_type == "clear":
            self.clear(root)
        else:
            await self.backspacer.backspace(root, None, config, token)

    async def run(self, root: NodeId, nodes: Sequence[ContentNode], config,
                  token: CancellationToken) -> bool:
        """
        Type ``nodes`` into ``root`` for ``config.loop_count`` passes.

        Args:
            root: Node the passes are typed into
            nodes: Content typed on every pass
            config: Loop, typing and backspace options
            token: Cancellation token

        Returns:
            True when every pass completed, False when cancelled or detached
        """
        self.iteration = 0
        count = config.loop_count
        if count == 0:
            return True

        while True:
            if self._halted(root, token):
                return False
            if self.iteration > 0 and config.loop_start_delay:
                if not await self.timers.sleep(config.loop_start_delay, token):
                    return False

            await self.typer.type_nodes(root, nodes, config, token)
            if self._halted(root, token):
                return False
            self.iteration += 1
            if self.logger:
                total = "inf" if math.isinf(count) else int(count)
                self.logger.debug(f"Loop iteration {self.iteration}/{total} typed")

            last = self.iteration >= count
            if last and config.loop_final_behavior == "keep":
                return True

            if config.loop_end_delay:
                if not await self.timers.sleep(config.loop_end_delay, token):
                    return False
            await self._clear(root, config, token)
            if self._halted(root, token):
                return False
            if last:
                return True
