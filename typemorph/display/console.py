# display/console.py

from contextlib import contextmanager
from typing import Dict, Iterator, List, Mapping, Optional

from rich.console import Console, ConsoleOptions, RenderResult
from rich.live import Live
from rich.style import Style
from rich.text import Text

from .memory import MemorySurface
from .surface import NodeId

# Tag name -> rich style applied to everything below the tag
TAG_STYLES = {
    'b': 'bold', 'strong': 'bold',
    'i': 'italic', 'em': 'italic',
    'u': 'underline', 'ins': 'underline',
    's': 'strike', 'del': 'strike',
    'code': 'bold cyan', 'pre': 'cyan',
    'a': 'underline bright_blue',
    'mark': 'black on yellow',
    'h1': 'bold magenta', 'h2': 'bold magenta', 'h3': 'bold',
    'blockquote': 'italic grey50',
}

BLOCK_TAGS = frozenset({
    'p', 'div', 'li', 'ul', 'ol', 'pre', 'blockquote', 'hr',
    'h1', 'h2', 'h3', 'h4', 'h5', 'h6', 'table', 'tr',
})


class ConsoleSurface(MemorySurface):
    """
    Memory surface painted to a terminal through rich.

    Use ``live(node)`` to keep a region of the terminal in sync with a
    container while an animation runs. Scroll extents are measured in wrapped
    lines unless fixed with ``set_extents``.
    """
    def __init__(self, console: Optional[Console] = None, height: Optional[int] = None):
        self.console = console or Console(highlight=False)
        self.height = height
        self._class_styles: Dict[str, Style] = {}
        self._live: Optional[Live] = None
        super().__init__()

    def register_style(self, key: str, rules: Mapping[str, str]) -> bool:
        if not super().register_style(key, rules):
            return False
        for class_name, description in rules.items():
            self._class_styles[class_name] = Style.parse(description)
        return True

    def _style_for(self, node: NodeId) -> Style:
        style = Style.parse(TAG_STYLES.get(self.tag_of(node), 'none'))
        for class_name in (self.get_attribute(node, 'class') or '').split():
            if class_name in self._class_styles:
                style = style + self._class_styles[class_name]
        return style

    def render(self, node: NodeId) -> Text:
        """Build a rich Text of the children of ``node``."""
        text = Text(end="")
        for child in self.children(node):
            self._render_into(text, child)
        return text

    def _render_into(self, text: Text, node: NodeId, style: Style = Style()) -> None:
        if self.is_text(node):
            text.append(self.get_text(node), style=style or None)
            return
        tag = self.tag_of(node)
        if tag == 'br':
            text.append("\n")
            return
        if tag == 'li':
            text.append("• ", style=style or None)
        inner = style + self._style_for(node)
        for child in self.children(node):
            self._render_into(text, child, inner)
        if tag in BLOCK_TAGS and text.plain and not text.plain.endswith("\n"):
            text.append("\n")

    def _lines(self, node: NodeId) -> List[Text]:
        return list(self.render(node).wrap(self.console, self.console.width))

    def scroll_height(self, node: NodeId) -> float:
        if self._node(node).scroll_height is not None:
            return super().scroll_height(node)
        return float(len(self._lines(node)))

    def client_height(self, node: NodeId) -> float:
        if self._node(node).client_height is not None:
            return super().client_height(node)
        return float(self.height or self.console.height)

    def _changed(self, node: NodeId) -> None:
        if self._live is not None:
            self._live.refresh()

    @contextmanager
    def live(self, node: NodeId, refresh_per_second: float = 12) -> Iterator[Live]:
        """Paint ``node`` in place until the block exits."""
        with Live(_Viewport(self, node), console=self.console, auto_refresh=False,
                  refresh_per_second=refresh_per_second, transient=False) as live:
            self._live = live
            try:
                yield live
            finally:
                self._live = None


class _Viewport:
    """Renderable that crops a container to its scroll window."""
    def __init__(self, surface: ConsoleSurface, node: NodeId):
        self.surface = surface
        self.node = node

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        lines = self.surface._lines(self.node)
        top = int(self.surface.get_scroll_top(self.node))
        visible = int(self.surface.client_height(self.node))
        window = Text("\n", end="").join(lines[top:top + visible])
        yield window
