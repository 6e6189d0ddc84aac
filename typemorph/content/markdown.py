# content/markdown.py

from markdown_it import MarkdownIt

_renderer = MarkdownIt("commonmark")


def render_markdown(text: str, inline: bool = False) -> str:
    """Render markdown to markup; ``inline`` skips the paragraph wrappers."""
    if inline:
        return _renderer.renderInline(text)
    return _renderer.render(text)
