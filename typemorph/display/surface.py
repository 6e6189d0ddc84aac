# display/surface.py

from abc import ABC, abstractmethod
from typing import Callable, List, Mapping, Optional

NodeId = int
ScrollListener = Callable[[NodeId], None]


class RenderSurface(ABC):
    """
    Everything the engine needs from the place it draws into.

    Nodes are addressed by integer ids; the surface owns the nodes and their
    parent/child relations, the engine only ever holds ids.
    """

    # Node creation and tree mutation

    @abstractmethod
    def create_element(self, tag: str) -> NodeId: ...

    @abstractmethod
    def create_text(self, text: str) -> NodeId: ...

    @abstractmethod
    def append_child(self, parent: NodeId, child: NodeId) -> None:
        """Append ``child`` to ``parent``, detaching it from any previous parent."""

    @abstractmethod
    def insert_before(self, parent: NodeId, child: NodeId, reference: Optional[NodeId]) -> None: ...

    @abstractmethod
    def remove_child(self, parent: NodeId, child: NodeId) -> None: ...

    @abstractmethod
    def clear_children(self, parent: NodeId) -> None:
        """Remove and free every child of ``parent``."""

    @abstractmethod
    def release(self, node: NodeId) -> None:
        """
        Free ``node`` and its subtree for good.

        Detaches it first if needed. Ids of released nodes are no longer
        valid; releasing an unknown id is a no-op.
        """

    @abstractmethod
    def set_attribute(self, node: NodeId, name: str, value: str) -> None:
        """Set an attribute; raises ValueError for names the surface rejects."""

    @abstractmethod
    def get_attribute(self, node: NodeId, name: str) -> Optional[str]: ...

    @abstractmethod
    def get_text(self, node: NodeId) -> str: ...

    @abstractmethod
    def set_text(self, node: NodeId, text: str) -> None: ...

    # Queries

    @abstractmethod
    def is_text(self, node: NodeId) -> bool: ...

    @abstractmethod
    def tag_of(self, node: NodeId) -> Optional[str]: ...

    @abstractmethod
    def children(self, node: NodeId) -> List[NodeId]: ...

    @abstractmethod
    def parent_of(self, node: NodeId) -> Optional[NodeId]: ...

    @abstractmethod
    def is_connected(self, node: NodeId) -> bool:
        """Whether ``node`` is still reachable from the surface root."""

    @abstractmethod
    def get_element_by_id(self, identifier: str) -> Optional[NodeId]: ...

    # Scrolling

    @abstractmethod
    def get_scroll_top(self, node: NodeId) -> float: ...

    @abstractmethod
    def set_scroll_top(self, node: NodeId, value: float) -> None: ...

    @abstractmethod
    def scroll_height(self, node: NodeId) -> float: ...

    @abstractmethod
    def client_height(self, node: NodeId) -> float: ...

    @abstractmethod
    def add_scroll_listener(self, node: NodeId, listener: ScrollListener) -> None:
        """Subscribe to scrolls of ``node`` made by the user."""

    @abstractmethod
    def remove_scroll_listener(self, node: NodeId, listener: ScrollListener) -> None: ...

    # Presentation

    @abstractmethod
    def register_style(self, key: str, rules: Mapping[str, str]) -> bool:
        """
        Register shared presentation rules once per surface.

        ``rules`` maps a class name to a style description. Returns False
        when ``key`` was already registered.
        """
