# content/parser.py

from html.parser import HTMLParser
from typing import List, Optional, Tuple

from ..display.memory import VOID_TAGS
from .nodes import ContentNode, Element, TextRun


class _Frame:
    def __init__(self, tag: Optional[str], attributes: Tuple[Tuple[str, str], ...] = ()):
        self.tag = tag
        self.attributes = attributes
        self.children: List[ContentNode] = []

    def add_text(self, data: str) -> None:
        if self.children and isinstance(self.children[-1], TextRun):
            self.children[-1] = TextRun(self.children[-1].text + data)
        else:
            self.children.append(TextRun(data))

    def build(self) -> Element:
        return Element(self.tag, self.attributes, tuple(_drop_blank_runs(self.children)))


def _drop_blank_runs(children: List[ContentNode]) -> List[ContentNode]:
    # Whitespace-only runs are layout noise between elements
    return [c for c in children if not (isinstance(c, TextRun) and not c.text.strip())]


class ContentTreeBuilder(HTMLParser):
    """
    Builds ContentNode trees from (already sanitized) markup.

    Tolerates unclosed and stray end tags the way browsers do for inline
    content: an end tag closes the nearest open element with that name and
    everything opened after it.
    """
    def __init__(self):
        super().__init__(convert_charrefs=True)
        self._stack: List[_Frame] = [_Frame(None)]

    @staticmethod
    def _attributes(attrs) -> Tuple[Tuple[str, str], ...]:
        return tuple((name, value if value is not None else "") for name, value in attrs)

    def handle_starttag(self, tag, attrs):
        frame = _Frame(tag, self._attributes(attrs))
        if tag in VOID_TAGS:
            self._stack[-1].children.append(frame.build())
        else:
            self._stack.append(frame)

    def handle_startendtag(self, tag, attrs):
        self._stack[-1].children.append(Element(tag, self._attributes(attrs)))

    def handle_endtag(self, tag):
        if not any(frame.tag == tag for frame in self._stack[1:]):
            return
        while True:
            frame = self._stack.pop()
            self._stack[-1].children.append(frame.build())
            if frame.tag == tag:
                return

    def handle_data(self, data):
        self._stack[-1].add_text(data)

    def result(self) -> List[ContentNode]:
        self.close()
        while len(self._stack) > 1:
            frame = self._stack.pop()
            self._stack[-1].children.append(frame.build())
        return _drop_blank_runs(self._stack[0].children)


def parse_html(markup: str) -> List[ContentNode]:
    """Parse markup into a list of top-level content nodes."""
    builder = ContentTreeBuilder()
    builder.feed(markup)
    return builder.result()
