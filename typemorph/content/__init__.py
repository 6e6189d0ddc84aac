# content/__init__.py

import inspect
from typing import Any, List

from .nodes import ContentNode, Element, TextRun, plain_text
from .parser import ContentTreeBuilder, parse_html
from .sanitizer import sanitize_html
from .markdown import render_markdown


async def _resolve(value: Any) -> Any:
    return await value if inspect.isawaitable(value) else value


async def build_content(text: str, config, logger=None) -> List[ContentNode]:
    """
    Turn source text into content nodes according to ``config``.

    Markdown (when enabled) is rendered first, then the markup is sanitized
    unless trusted, then parsed. Custom ``markdown_parse`` and
    ``html_sanitize`` callables may be sync or async.
    """
    if config.parse_markdown:
        parse = config.markdown_parse or render_markdown
        text = await _resolve(parse(text, config.markdown_inline))
        if logger:
            logger.debug(f"Rendered markdown ({len(text)} chars of markup)")

    if config.parse_html or config.parse_markdown:
        if not config.trusted_html:
            sanitize = config.html_sanitize or sanitize_html
            text = await _resolve(sanitize(text))
        return parse_html(text)

    return [TextRun(text)] if text else []


__all__ = [
    'ContentNode', 'Element', 'TextRun', 'plain_text',
    'ContentTreeBuilder', 'parse_html', 'sanitize_html',
    'render_markdown', 'build_content',
]
