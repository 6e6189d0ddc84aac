# content/sanitizer.py

import nh3

# Formatting markup the typer can reproduce; anything else is unwrapped
ALLOWED_TAGS = frozenset({
    'a', 'abbr', 'b', 'blockquote', 'br', 'button', 'cite', 'code', 'del',
    'div', 'em', 'h1', 'h2', 'h3', 'h4', 'h5', 'h6', 'hr', 'i', 'img', 'ins',
    'kbd', 'li', 'mark', 'ol', 'p', 'pre', 'q', 's', 'small', 'span',
    'strong', 'sub', 'sup', 'table', 'tbody', 'td', 'th', 'thead', 'tr',
    'u', 'ul',
})

ALLOWED_ATTRIBUTES = {
    '*': {'class', 'id', 'title', 'lang', 'dir'},
    'a': {'href'},
    'img': {'src', 'alt', 'width', 'height'},
    'ol': {'start'},
    'td': {'colspan', 'rowspan'},
    'th': {'colspan', 'rowspan'},
}

URL_SCHEMES = frozenset({'http', 'https', 'mailto'})

# Removed together with everything inside them
DROPPED_ELEMENTS = frozenset({
    'script', 'style', 'iframe', 'object', 'embed', 'template', 'noscript',
    'title', 'textarea', 'select',
})


def sanitize_html(markup: str) -> str:
    """
    Reduce markup to the allowed formatting subset.

    Args:
        markup: Untrusted HTML fragment

    Returns:
        HTML fragment without scripting vectors: disallowed tags are
        unwrapped, event handlers and other attributes outside the allowlist
        are dropped, and URLs are limited to ``URL_SCHEMES`` or relative paths.
    """
    return nh3.clean(
        markup,
        tags=set(ALLOWED_TAGS),
        clean_content_tags=set(DROPPED_ELEMENTS),
        attributes={tag: set(names) for tag, names in ALLOWED_ATTRIBUTES.items()},
        url_schemes=set(URL_SCHEMES),
        link_rel=None,
    )
