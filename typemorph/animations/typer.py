# animations/typer.py

from typing import Iterable, Optional

from ..content import ContentNode, Element, TextRun
from ..display import NodeId, RenderSurface
from ..scheduling import CancellationToken, TimerRegistry
from .cursor import CursorManager
from .scroller import ScrollFollower


class ContentTyper:
    """
    Writes content nodes into a target node chunk by chunk.

    Walks the content depth first; elements are recreated empty and filled
    recursively, text runs are flushed ``chunk_size`` characters at a time
    with one cancellable delay after each flush. A cancelled token or a
    target detached from the surface stops the walk without raising.
    """
    def __init__(self, surface: RenderSurface, cursor: CursorManager,
                 scroller: ScrollFollower, timers: TimerRegistry, logger=None):
        self.surface = surface
        self.cursor = cursor
        self.scroller = scroller
        self.timers = timers
        self.logger = logger

    def _halted(self, target: NodeId, token: CancellationToken) -> bool:
        return token.cancelled or not self.surface.is_connected(target)

    async def type_nodes(self, target: NodeId, nodes: Iterable[ContentNode],
                         config, token: CancellationToken) -> int:
        """
        Type ``nodes`` into ``target`` depth first.

        Args:
            target: Node the content is appended to
            nodes: Content tree to reproduce
            config: Options supplying ``chunk_size`` and ``speed``
            token: Cancellation token checked before every flush and descent

        Returns:
            Number of chunk flushes performed
        """
        flushes = 0
        for node in nodes:
            if self._halted(target, token):
                break
            if isinstance(node, TextRun):
                flushes += await self.type_text(node.text, target, config, token)
            elif isinstance(node, Element):
                element = self._reconstruct(node)
                self._insert(target, element)
                flushes += await self.type_nodes(element, node.children, config, token)
        return flushes

    def _reconstruct(self, node: Element) -> NodeId:
        element = self.surface.create_element(node.tag)
        for name, value in node.attributes:
            try:
                self.surface.set_attribute(element, name, value)
            except Exception as e:
                if self.logger:
                    self.logger.warning(f"Failed to set attribute {name!r} on <{node.tag}>: {e}")
        return element

    def _insert(self, parent: NodeId, node: NodeId) -> None:
        # Keep the caret after anything added to its own parent
        if self.cursor.parent == parent:
            self.surface.insert_before(parent, node, self.cursor.node)
        else:
            self.surface.append_child(parent, node)

    async def type_text(self, text: str, parent: NodeId, config,
                        token: CancellationToken) -> int:
        """
        Reveal ``text`` at the end of ``parent``, ``chunk_size`` characters at a time.

        Args:
            text: Characters to append
            parent: Element receiving the text
            config: Options supplying ``chunk_size`` and ``speed``
            token: Cancellation token

        Returns:
            Number of chunk flushes performed
        """
        if not text or self._halted(parent, token):
            return 0

        self.cursor.attach(parent)
        chars = list(text)
        size = config.chunk_size
        flushes = 0

        for start in range(0, len(chars), size):
            if self._halted(parent, token):
                break
            self._append_text(parent, "".join(chars[start:start + size]))
            flushes += 1
            self.scroller.tick()
            await self.timers.sleep(config.speed, token)

        self.scroller.follow()
        return flushes

    def _trailing_text(self, parent: NodeId) -> Optional[NodeId]:
        if self.cursor.parent == parent:
            previous = self.cursor.previous_sibling()
        else:
            children = self.surface.children(parent)
            previous = children[-1] if children else None
        if previous is not None and self.surface.is_text(previous):
            return previous
        return None

    def _append_text(self, parent: NodeId, text: str) -> None:
        trailing = self._trailing_text(parent)
        if trailing is not None:
            self.surface.set_text(trailing, self.surface.get_text(trailing) + text)
        else:
            self._insert(parent, self.surface.create_text(text))
        self.cursor.attach(parent)
