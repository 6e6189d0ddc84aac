# animations/__init__.py

from .cursor import CursorManager, CURSOR_ATTRIBUTE, CURSOR_CLASS, CURSOR_STYLE_KEY
from .scroller import ScrollFollower, BOTTOM_TOLERANCE
from .typer import ContentTyper
from .backspacer import Backspacer
from .looper import LoopController

class SessionAnimations:
    """
    Wires the animation components of one session together.

    Component Hierarchy:
    CursorManager, ScrollFollower (leaves) → ContentTyper, Backspacer → LoopController
    """
    def __init__(self, surface, timers, logger=None):
        """Initialize components in dependency order."""
        self.surface = surface
        self.cursor = CursorManager(surface, logger)
        self.scroller = ScrollFollower(surface, logger)
        self.typer = ContentTyper(surface, self.cursor, self.scroller, timers, logger)
        self.backspacer = Backspacer(surface, self.cursor, self.scroller, timers, logger)
        self.looper = LoopController(surface, self.typer, self.backspacer, self.cursor, timers, logger)

    def release(self) -> None:
        """Drop the caret and any scroll subscription."""
        self.scroller.end()
        self.cursor.remove()

__all__ = [
    'SessionAnimations', 'CursorManager', 'ScrollFollower', 'ContentTyper',
    'Backspacer', 'LoopController', 'CURSOR_ATTRIBUTE', 'CURSOR_CLASS',
    'CURSOR_STYLE_KEY', 'BOTTOM_TOLERANCE',
]
