# display/memory.py

import html
import itertools
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Mapping, Optional

from .surface import NodeId, RenderSurface, ScrollListener

VOID_TAGS = frozenset({
    'area', 'base', 'br', 'col', 'embed', 'hr', 'img', 'input',
    'link', 'meta', 'source', 'track', 'wbr',
})

# Same characters an HTML parser refuses in attribute names
_ATTRIBUTE_NAME = re.compile(r'^[^\s"\'>/=\x00-\x1f\x7f]+$')


@dataclass
class Node:
    """One node of the in-memory arena; ``tag`` is None for text nodes."""
    node_id: NodeId
    tag: Optional[str]
    text: str = ""
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List[NodeId] = field(default_factory=list)
    parent: Optional[NodeId] = None
    scroll_top: float = 0.0
    scroll_height: Optional[float] = None
    client_height: Optional[float] = None


class MemorySurface(RenderSurface):
    """
    Headless render surface backed by an id-indexed node arena.

    Used by tests and as the base of the console surface. Containers are
    created under ``root``; a node is connected while its ancestor chain
    reaches ``root``.
    """
    def __init__(self):
        self._nodes: Dict[NodeId, Node] = {}
        self._ids = itertools.count()
        self._listeners: Dict[NodeId, List[ScrollListener]] = {}
        self.styles: Dict[str, Dict[str, str]] = {}
        self.root = self._new('body')

    def _new(self, tag: Optional[str], text: str = "") -> NodeId:
        node_id = next(self._ids)
        self._nodes[node_id] = Node(node_id, tag, text)
        return node_id

    def _node(self, node: NodeId) -> Node:
        try:
            return self._nodes[node]
        except KeyError:
            raise ValueError(f"Unknown node {node!r}") from None

    def _changed(self, node: NodeId) -> None:
        """Hook called after every mutation; subclasses repaint here."""

    # Helpers outside the RenderSurface interface

    def create_container(self, tag: str = 'div', element_id: Optional[str] = None,
                         parent: Optional[NodeId] = None) -> NodeId:
        node = self.create_element(tag)
        if element_id is not None:
            self.set_attribute(node, 'id', element_id)
        self.append_child(self.root if parent is None else parent, node)
        return node

    def detach(self, node: NodeId) -> None:
        parent = self._node(node).parent
        if parent is not None:
            self.remove_child(parent, node)

    def iter_subtree(self, node: NodeId) -> Iterator[NodeId]:
        yield node
        for child in list(self._node(node).children):
            yield from self.iter_subtree(child)

    def text_content(self, node: NodeId, skip: Optional[Callable[[NodeId], bool]] = None) -> str:
        entry = self._node(node)
        if skip is not None and skip(node):
            return ""
        if entry.tag is None:
            return entry.text
        return "".join(self.text_content(child, skip) for child in entry.children)

    def to_markup(self, node: NodeId, skip: Optional[Callable[[NodeId], bool]] = None) -> str:
        """Serialize the children of ``node`` the way innerHTML would."""
        return "".join(self._serialize(child, skip) for child in self._node(node).children)

    def _serialize(self, node: NodeId, skip) -> str:
        if skip is not None and skip(node):
            return ""
        entry = self._node(node)
        if entry.tag is None:
            return html.escape(entry.text, quote=False)
        attrs = "".join(f' {k}="{html.escape(v)}"' for k, v in entry.attributes.items())
        if entry.tag in VOID_TAGS:
            return f"<{entry.tag}{attrs}>"
        inner = "".join(self._serialize(child, skip) for child in entry.children)
        return f"<{entry.tag}{attrs}>{inner}</{entry.tag}>"

    def set_extents(self, node: NodeId, scroll_height: float, client_height: float) -> None:
        entry = self._node(node)
        entry.scroll_height = scroll_height
        entry.client_height = client_height

    def user_scroll(self, node: NodeId, top: float) -> None:
        """Scroll ``node`` as a user would, notifying scroll listeners."""
        self.set_scroll_top(node, top)
        for listener in list(self._listeners.get(node, ())):
            listener(node)

    def listener_count(self, node: Optional[NodeId] = None) -> int:
        if node is not None:
            return len(self._listeners.get(node, ()))
        return sum(len(v) for v in self._listeners.values())

    def node_count(self) -> int:
        """Number of live nodes in the arena, connected or not."""
        return len(self._nodes)

    # RenderSurface

    def create_element(self, tag: str) -> NodeId:
        if not tag or not isinstance(tag, str):
            raise ValueError(f"Invalid tag name {tag!r}")
        return self._new(tag.lower())

    def create_text(self, text: str) -> NodeId:
        return self._new(None, text)

    def _contains(self, ancestor: NodeId, node: Optional[NodeId]) -> bool:
        while node is not None:
            if node == ancestor:
                return True
            node = self._nodes[node].parent
        return False

    def insert_before(self, parent: NodeId, child: NodeId, reference: Optional[NodeId]) -> None:
        parent_entry, child_entry = self._node(parent), self._node(child)
        if parent_entry.tag is None:
            raise ValueError("Text nodes cannot have children")
        if self._contains(child, parent):
            raise ValueError("Cannot insert a node into its own subtree")
        if reference is not None and reference not in parent_entry.children:
            raise ValueError(f"Node {reference} is not a child of {parent}")
        if child_entry.parent is not None:
            self._nodes[child_entry.parent].children.remove(child)
        if reference is None:
            parent_entry.children.append(child)
        else:
            parent_entry.children.insert(parent_entry.children.index(reference), child)
        child_entry.parent = parent
        self._changed(parent)

    def append_child(self, parent: NodeId, child: NodeId) -> None:
        self.insert_before(parent, child, None)

    def remove_child(self, parent: NodeId, child: NodeId) -> None:
        parent_entry, child_entry = self._node(parent), self._node(child)
        if child_entry.parent != parent:
            raise ValueError(f"Node {child} is not a child of {parent}")
        parent_entry.children.remove(child)
        child_entry.parent = None
        self._changed(parent)

    def clear_children(self, parent: NodeId) -> None:
        entry = self._node(parent)
        for child in list(entry.children):
            entry.children.remove(child)
            self._nodes[child].parent = None
            self._evict(child)
        self._changed(parent)

    def release(self, node: NodeId) -> None:
        if node not in self._nodes:
            return
        self.detach(node)
        self._evict(node)

    def _evict(self, node: NodeId) -> None:
        for entry in list(self.iter_subtree(node)):
            del self._nodes[entry]
            self._listeners.pop(entry, None)

    def set_attribute(self, node: NodeId, name: str, value: str) -> None:
        entry = self._node(node)
        if entry.tag is None:
            raise ValueError("Text nodes have no attributes")
        if not isinstance(name, str) or not _ATTRIBUTE_NAME.match(name):
            raise ValueError(f"Invalid attribute name {name!r}")
        entry.attributes[name.lower()] = str(value)
        self._changed(node)

    def get_attribute(self, node: NodeId, name: str) -> Optional[str]:
        return self._node(node).attributes.get(name.lower())

    def get_text(self, node: NodeId) -> str:
        entry = self._node(node)
        return entry.text if entry.tag is None else self.text_content(node)

    def set_text(self, node: NodeId, text: str) -> None:
        entry = self._node(node)
        if entry.tag is None:
            entry.text = text
        else:
            self.clear_children(node)
            if text:
                self.append_child(node, self.create_text(text))
        self._changed(node)

    def is_text(self, node: NodeId) -> bool:
        return self._node(node).tag is None

    def tag_of(self, node: NodeId) -> Optional[str]:
        return self._node(node).tag

    def children(self, node: NodeId) -> List[NodeId]:
        return list(self._node(node).children)

    def parent_of(self, node: NodeId) -> Optional[NodeId]:
        return self._node(node).parent

    def is_connected(self, node: NodeId) -> bool:
        return node in self._nodes and self._contains(self.root, node)

    def get_element_by_id(self, identifier: str) -> Optional[NodeId]:
        for node in self.iter_subtree(self.root):
            if self._nodes[node].attributes.get('id') == identifier:
                return node
        return None

    def get_scroll_top(self, node: NodeId) -> float:
        return self._node(node).scroll_top

    def set_scroll_top(self, node: NodeId, value: float) -> None:
        limit = max(0.0, self.scroll_height(node) - self.client_height(node))
        self._node(node).scroll_top = min(max(0.0, value), limit)
        self._changed(node)

    def scroll_height(self, node: NodeId) -> float:
        return self._node(node).scroll_height or 0.0

    def client_height(self, node: NodeId) -> float:
        return self._node(node).client_height or 0.0

    def add_scroll_listener(self, node: NodeId, listener: ScrollListener) -> None:
        self._listeners.setdefault(node, []).append(listener)

    def remove_scroll_listener(self, node: NodeId, listener: ScrollListener) -> None:
        listeners = self._listeners.get(node, [])
        if listener in listeners:
            listeners.remove(listener)
        if not listeners:
            self._listeners.pop(node, None)

    def register_style(self, key: str, rules: Mapping[str, str]) -> bool:
        if key in self.styles:
            return False
        self.styles[key] = dict(rules)
        return True
