# config.py

import math
from dataclasses import dataclass, fields, replace
from numbers import Real
from typing import Any, Callable, Dict, Optional, Union

from .errors import ConfigurationError

LOOP_TYPES = ("clear", "backspace")
FINAL_BEHAVIORS = ("keep", "remove")


@dataclass(frozen=True)
class TypeMorphConfig:
    """
    Instance defaults for a TypeMorph session.

    Delays are in seconds. Every field can be overridden for a single
    operation through keyword options; see ``merged``.
    """
    text: Optional[str] = None
    parent: Optional[Union[int, str]] = None
    speed: float = 0.05  # per chunk when typing
    backspace_speed: float = 0.05  # per chunk when backspacing
    chunk_size: int = 1
    loop_count: float = math.inf
    loop_type: str = "clear"
    loop_final_behavior: str = "keep"
    loop_start_delay: float = 0.3  # before each pass after the first
    loop_end_delay: float = 0.8  # after a pass, before clearing
    show_cursor: bool = True
    cursor_char: str = "|"
    hide_cursor_on_finish: bool = True
    clear_before_typing: bool = True
    auto_scroll: bool = True
    scroll_interval: int = 1  # flushes between scroll follows
    scroll_container: Optional[Union[int, str]] = None
    parse_html: bool = True
    parse_markdown: bool = False  # implies parse_html
    markdown_inline: bool = False
    markdown_parse: Optional[Callable] = None  # markdown_parse(text, inline)
    html_sanitize: Optional[Callable] = None  # html_sanitize(markup)
    trusted_html: bool = False
    on_stop: Optional[Callable] = None
    on_finish: Optional[Callable] = None
    on_destroy: Optional[Callable] = None

    def __post_init__(self):
        validate_options(self.__dict__)

    @classmethod
    def option_names(cls) -> set:
        return {f.name for f in fields(cls)}

    def merged(self, **overrides: Any) -> "TypeMorphConfig":
        """Return a copy with ``overrides`` applied, skipping ``None`` values."""
        _reject_unknown(overrides)
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self


def _reject_unknown(options: Dict[str, Any]) -> None:
    unknown = set(options) - TypeMorphConfig.option_names()
    if unknown:
        raise ConfigurationError(f"Unknown option(s): {', '.join(sorted(unknown))}")


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and not math.isnan(value)


def _check_number(options: Dict[str, Any], name: str, minimum: float, integral: bool = False) -> None:
    value = options.get(name)
    if value is None:
        return
    if not _is_number(value) or value < minimum:
        raise ConfigurationError(f"{name} has to be a number >= {minimum}, got {value!r}")
    if integral and (math.isinf(value) or value != int(value)):
        raise ConfigurationError(f"{name} has to be a whole number, got {value!r}")


def _check_choice(options: Dict[str, Any], name: str, choices) -> None:
    value = options.get(name)
    if value is not None and value not in choices:
        raise ConfigurationError(f"{name} has to be one of {choices}, got {value!r}")


def validate_options(options: Dict[str, Any]) -> None:
    """Validate option values; raise ConfigurationError on the first bad one."""
    _check_number(options, "chunk_size", 1, integral=True)
    _check_number(options, "scroll_interval", 1, integral=True)
    _check_number(options, "speed", 0)
    _check_number(options, "backspace_speed", 0)
    _check_number(options, "loop_start_delay", 0)
    _check_number(options, "loop_end_delay", 0)
    _check_number(options, "loop_count", 0)
    count = options.get("loop_count")
    if count is not None and not math.isinf(count) and count != int(count):
        raise ConfigurationError(f"loop_count has to be a whole number or infinite, got {count!r}")
    _check_choice(options, "loop_type", LOOP_TYPES)
    _check_choice(options, "loop_final_behavior", FINAL_BEHAVIORS)
    cursor_char = options.get("cursor_char")
    if cursor_char is not None and not isinstance(cursor_char, str):
        raise ConfigurationError(f"cursor_char has to be a string, got {cursor_char!r}")
    for name in ("markdown_parse", "html_sanitize"):
        value = options.get(name)
        if value is not None and not callable(value):
            raise ConfigurationError(f"{name} has to be callable")
