# animations/scroller.py

from typing import Optional

from ..display import NodeId, RenderSurface

BOTTOM_TOLERANCE = 5


class ScrollFollower:
    """
    Keeps the newest content in view while an operation runs.

    Bound to one scroll target per operation. Following pauses when the user
    scrolls away from the bottom and resumes once they come back within
    ``BOTTOM_TOLERANCE``. Never touches content.
    """
    def __init__(self, surface: RenderSurface, logger=None):
        self.surface = surface
        self.logger = logger
        self.target: Optional[NodeId] = None
        self.enabled = False
        self.interval = 1
        self.paused = False
        self._flushes = 0

    def begin(self, target: NodeId, enabled: bool = True, interval: int = 1) -> None:
        """
        Bind to a scroll target for one operation.

        Args:
            target: Node whose scroll offset is followed
            enabled: False leaves the target untouched and unsubscribed
            interval: Flushes between two follows
        """
        self.end()
        self.enabled = enabled
        self.interval = interval
        self.paused = False
        self._flushes = 0
        if not enabled:
            return
        self.target = target
        self.surface.add_scroll_listener(target, self._on_user_scroll)

    def end(self) -> None:
        if self.target is not None:
            self.surface.remove_scroll_listener(self.target, self._on_user_scroll)
        self.target = None
        self.enabled = False

    def _distance_from_bottom(self) -> float:
        surface, target = self.surface, self.target
        return surface.scroll_height(target) - surface.client_height(target) - surface.get_scroll_top(target)

    def _on_user_scroll(self, node: NodeId) -> None:
        was_paused = self.paused
        self.paused = self._distance_from_bottom() > BOTTOM_TOLERANCE
        if self.logger and was_paused != self.paused:
            self.logger.debug("Auto-scroll paused by user" if self.paused else "Auto-scroll resumed")

    def tick(self) -> bool:
        """Count one flush; follow every ``interval`` flushes. Returns whether it scrolled."""
        if not self.enabled:
            return False
        self._flushes += 1
        if self._flushes < self.interval:
            return False
        self._flushes = 0
        return self.follow()

    def follow(self) -> bool:
        """
        Scroll the target to its bottom unless paused or disabled.

        Returns:
            Whether the scroll offset was set
        """
        if not self.enabled or self.paused or self.target is None:
            return False
        try:
            if not self.surface.is_connected(self.target):
                return False
            overflow = self.surface.scroll_height(self.target) - self.surface.client_height(self.target)
            if overflow <= 0:
                return False
            self.surface.set_scroll_top(self.target, overflow)
            return True
        except Exception as e:
            if self.logger:
                self.logger.warning(f"Auto-scroll failed: {e}")
            return False
