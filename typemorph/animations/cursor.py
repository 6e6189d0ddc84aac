# animations/cursor.py

from typing import Optional

from ..display import NodeId, RenderSurface

CURSOR_CLASS = "typemorph-cursor"
CURSOR_ATTRIBUTE = "data-typemorph-cursor"
CURSOR_STYLE_KEY = "typemorph-cursor-style"
CURSOR_RULES = {CURSOR_CLASS: "blink"}


class CursorManager:
    """
    Owns the caret marker of one session.

    The marker is a ``span`` holding the caret character. It is attached to
    at most one parent at a time and every query that measures content
    skips it.
    """
    def __init__(self, surface: RenderSurface, logger=None):
        self.surface = surface
        self.logger = logger
        self.node: Optional[NodeId] = None
        self._text: Optional[NodeId] = None

    def ensure(self, show: bool, char: str) -> Optional[NodeId]:
        """
        Create the marker (or update its character); remove it when hidden.

        Args:
            show: Whether a caret is wanted at all
            char: Character shown inside the marker

        Returns:
            The marker node, or None when hidden
        """
        if not show:
            self.remove()
            return None
        if self.node is not None:
            self.surface.set_text(self._text, char)
            return self.node

        self.surface.register_style(CURSOR_STYLE_KEY, CURSOR_RULES)
        self.node = self.surface.create_element("span")
        self.surface.set_attribute(self.node, "class", CURSOR_CLASS)
        self.surface.set_attribute(self.node, CURSOR_ATTRIBUTE, "true")
        self._text = self.surface.create_text(char)
        self.surface.append_child(self.node, self._text)
        if self.logger:
            self.logger.debug("Cursor created")
        return self.node

    @property
    def parent(self) -> Optional[NodeId]:
        return self.surface.parent_of(self.node) if self.node is not None else None

    def is_marker(self, node: NodeId) -> bool:
        return self.node is not None and node == self.node

    def contains(self, node: NodeId) -> bool:
        """Whether ``node`` is the marker or one of its ancestors."""
        current = self.node
        while current is not None:
            if current == node:
                return True
            current = self.surface.parent_of(current)
        return False

    def detach(self) -> None:
        parent = self.parent
        if parent is not None:
            self.surface.remove_child(parent, self.node)

    def attach(self, parent: NodeId) -> None:
        """Move the marker to the end of ``parent``."""
        if self.node is None:
            return
        siblings = self.surface.children(parent)
        if siblings and siblings[-1] == self.node:
            return
        self.detach()
        self.surface.append_child(parent, self.node)

    def previous_sibling(self) -> Optional[NodeId]:
        parent = self.parent
        if parent is None:
            return None
        siblings = self.surface.children(parent)
        index = siblings.index(self.node)
        return siblings[index - 1] if index else None

    def remove(self) -> None:
        if self.node is None:
            return
        self.surface.release(self.node)
        self.node = None
        self._text = None
        if self.logger:
            self.logger.debug("Cursor removed")

    def hide_if(self, hide_on_finish: bool) -> None:
        if hide_on_finish:
            self.remove()

    def last_text_node(self, node: NodeId) -> Optional[NodeId]:
        """Deepest trailing non-empty text node under ``node``, skipping the marker."""
        for child in reversed(self.surface.children(node)):
            if self.is_marker(child):
                continue
            if self.surface.is_text(child):
                if self.surface.get_text(child):
                    return child
            else:
                found = self.last_text_node(child)
                if found is not None:
                    return found
        return None

    def relocate(self, root: NodeId) -> None:
        """Put the marker right after the last text under ``root``, or at the end of ``root``."""
        if self.node is None:
            return
        last = self.last_text_node(root)
        target = self.surface.parent_of(last) if last is not None else root
        self.attach(target)

    def is_empty(self, node: NodeId) -> bool:
        """True when ``node`` holds no characters outside the marker."""
        for child in self.surface.children(node):
            if self.is_marker(child):
                continue
            if self.surface.is_text(child):
                if self.surface.get_text(child):
                    return False
            elif not self.is_empty(child):
                return False
        return True
