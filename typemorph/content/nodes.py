# content/nodes.py

from dataclasses import dataclass, field
from typing import Iterable, Tuple, Union


@dataclass(frozen=True)
class TextRun:
    """A run of plain characters."""
    text: str


@dataclass(frozen=True)
class Element:
    """A tagged node with ordered attributes and children."""
    tag: str
    attributes: Tuple[Tuple[str, str], ...] = ()
    children: Tuple["ContentNode", ...] = field(default_factory=tuple)


ContentNode = Union[TextRun, Element]


def plain_text(nodes: Iterable[ContentNode]) -> str:
    """Concatenate every text run in document order."""
    parts = []
    for node in nodes:
        if isinstance(node, TextRun):
            parts.append(node.text)
        else:
            parts.append(plain_text(node.children))
    return "".join(parts)
